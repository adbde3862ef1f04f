"""Tests for item costs, rarity brackets and property synthesis."""

import pytest

from realms_rules.calculators.item_calc import (
    AbilityRequirement,
    DamageDice,
    ItemForm,
    Proficiency,
    build_item_properties,
    calculate_item_costs,
    currency_cost_and_rarity,
    damage_reduction,
    derive_item_display,
    format_damage,
    format_proficiency_chip,
    format_range,
    is_general_property,
    rarity_bracket,
)
from realms_rules.models.parts import IdRef, NameRef, PartRecord, UserSelectedPart


def _summary(entries):
    return [(e.ref.id, e.levels[0]) for e in entries]


# --- Rarity ---

@pytest.mark.parametrize(
    "ip,expected",
    [
        (0, "Common"),
        (4, "Common"),
        (4.5, "Uncommon"),
        (6, "Uncommon"),
        (6.01, "Rare"),
        (11, "Epic"),
        (16, "Mythic"),
        (100, "Ascended"),
        (-3, "Common"),
    ],
)
def test_rarity_bracket(ip, expected):
    """Upper bounds are inclusive."""
    assert rarity_bracket(ip).name == expected


def test_price_is_bracket_floor_without_currency_modifier():
    result = currency_cost_and_rarity(0, 4)
    assert result.rarity == "Common"
    assert result.currency_cost == 25


def test_price_scales_with_currency_modifier():
    """Uncommon: 100 * (1 + 0.125*2) = 125; Epic: 2500 * 1.125 = 2812.5 -> 2812."""
    assert currency_cost_and_rarity(2, 5).currency_cost == 125
    assert currency_cost_and_rarity(1, 9).currency_cost == 2812


def test_negative_currency_modifier_keeps_floor():
    assert currency_cost_and_rarity(-4, 0).currency_cost == 25


# --- Costs ---

def test_calculate_item_costs(properties):
    entries = [UserSelectedPart(IdRef(20), (2, 0, 0)), UserSelectedPart(NameRef("Ghost"))]
    costs = calculate_item_costs(entries, properties)
    assert costs.total_ip == pytest.approx(1.0)
    assert costs.total_tp == pytest.approx(4.0)
    assert costs.total_currency == pytest.approx(1.0)
    assert [e.ref for e in costs.unresolved] == [NameRef("Ghost")]


def test_is_general_property():
    assert is_general_property(PartRecord(id=14, name="Two-Handed"))
    assert is_general_property(UserSelectedPart(IdRef("5")))
    assert is_general_property(UserSelectedPart(NameRef("Armor Base")))
    assert not is_general_property(PartRecord(id=20, name="Finesse"))


# --- Property synthesis ---

def test_weapon_properties(properties):
    form = ItemForm(
        armament_type="Weapon",
        properties=[UserSelectedPart(IdRef(20))],
        two_handed=True,
        range_level=2,
        damage=DamageDice(1, 8, "slashing"),
    )
    entries = build_item_properties(form, properties)
    assert _summary(entries) == [(20, 0), (14, 0), (13, 1), (17, 2)]
    assert entries[0] is form.properties[0]


def test_weapon_damage_splits(properties):
    """3d8: level floor(20/2) = 10, one split."""
    form = ItemForm(damage=DamageDice(3, 8, "piercing"))
    assert _summary(build_item_properties(form, properties)) == [(17, 10), (12, 0)]


def test_weapon_damage_ignores_non_standard_dice(properties):
    form = ItemForm(damage=DamageDice(2, 7, "piercing"))
    assert build_item_properties(form, properties) == []


def test_armor_properties(properties):
    form = ItemForm(armament_type="Armor", damage_reduction=3, critical_range_increase=1)
    # Critical Range +1 is missing from the table and is left out.
    assert _summary(build_item_properties(form, properties)) == [(16, 0), (1, 2)]


def test_shield_properties(properties):
    form = ItemForm(
        armament_type="Shield",
        shield_amount=DamageDice(1, 4),
        shield_damage=DamageDice(1, 6, "bludgeoning"),
    )
    assert _summary(build_item_properties(form, properties)) == [(15, 0), (39, 0)]


def test_weapon_ability_requirement(properties):
    form = ItemForm(ability_requirement=AbilityRequirement("Strength", 2))
    entries = build_item_properties(form, properties)
    assert _summary(entries) == [(6, 1)]
    assert entries[0].source == "requirement"


def test_unresolved_requirement_is_still_flagged(properties):
    form = ItemForm(armament_type="Armor", ability_requirement=AbilityRequirement("strength", 1))
    entries = build_item_properties(form, properties)
    assert _summary(entries) == [(16, 0), (2, 0)]
    costs = calculate_item_costs(entries, properties)
    assert [e.ref.id for e in costs.unresolved] == [2]


def test_armor_has_no_mental_requirements(properties):
    form = ItemForm(armament_type="Armor", ability_requirement=AbilityRequirement("acuity", 2))
    assert _summary(build_item_properties(form, properties)) == [(16, 0)]


# --- Display helpers ---

def test_format_range(properties):
    assert format_range([], properties) == "Melee"
    assert format_range([UserSelectedPart(IdRef(13), (2, 0, 0))], properties) == "24 Spaces"
    assert format_range([UserSelectedPart(NameRef("Range"))]) == "8 Spaces"


def test_damage_reduction(properties):
    assert damage_reduction([], properties) == 0
    assert damage_reduction([UserSelectedPart(IdRef(1), (2, 0, 0))], properties) == 3


def test_format_damage():
    damage = [
        {"amount": 1, "size": 8, "type": "slashing"},
        {"amount": 0, "size": 4, "type": "fire"},
        {"amount": 1, "size": 4, "type": "fire"},
    ]
    assert format_damage(damage) == "1d8 slashing, 1d4 fire"
    assert format_damage(None) == ""


def test_format_proficiency_chip():
    prof = Proficiency(id=20, name="Finesse", level=1, base_tp=2, option_tp=1.5)
    assert format_proficiency_chip(prof) == "Finesse (Level 1) | TP: 2 + 1.5"
    plain = Proficiency(id=21, name="Heavy", level=0, base_tp=3, option_tp=0)
    assert format_proficiency_chip(plain) == "Heavy | TP: 3"


def test_derive_item_display(properties):
    item = {
        "name": "Longsword",
        "armamentType": "Weapon",
        "properties": [
            {"id": 20, "op_1_lvl": 1},
            {"id": 13, "op_1_lvl": 2},
            {"name": "Ghost"},
        ],
        "damage": [{"amount": 1, "size": 8, "type": "slashing"}],
    }
    display = derive_item_display(item, properties)

    assert display.total_ip == pytest.approx(3.0)
    assert display.total_tp == pytest.approx(3.0)
    assert display.rarity == "Common"
    assert display.currency_cost == 28
    assert display.range == "24 Spaces"
    assert display.damage == "1d8 slashing"
    assert display.not_found == ["Ghost"]
    assert [p.name for p in display.proficiencies] == ["Finesse"]
    assert format_proficiency_chip(display.proficiencies[0]) == "Finesse (Level 1) | TP: 2 + 1"


def test_weapon_training_points_never_negative(properties):
    item = {"armamentType": "Weapon", "properties": [{"id": 21}]}
    assert derive_item_display(item, properties).total_tp == 0


def test_armor_training_points_may_be_negative(properties):
    item = {"armamentType": "Armor", "properties": [{"id": 21}]}
    assert derive_item_display(item, properties).total_tp == pytest.approx(-2.0)
