"""Tests for archetype limits and the archetype ability."""

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.archetype import (
    Archetype,
    archetype_ability,
    config,
    equipment_max,
    feat_limit,
    innate_energy_max,
)
from realms_rules.models.constants import ArchetypeKind


def test_limits_per_kind():
    assert feat_limit(ArchetypeKind.POWER) == 1
    assert feat_limit("martial") == 3
    assert equipment_max(Archetype(kind="powered-martial")) == 8
    assert innate_energy_max("martial") == 0


def test_proficiency_split():
    split = config("powered-martial").proficiency
    assert (split.martial, split.power) == (1, 1)


def test_unknown_kind_falls_back_to_power():
    assert config("bard") == config(ArchetypeKind.POWER)
    assert equipment_max(None) == 4


def test_kind_lookup_ignores_case_and_spaces():
    assert feat_limit(" Martial ") == 3


def test_archetype_ability_power():
    scores = AbilityScores(charisma=3)
    assert archetype_ability(Archetype(kind="power", power_ability="charisma"), scores) == 3


def test_archetype_ability_martial():
    scores = AbilityScores(agility=2)
    assert archetype_ability(Archetype(kind="martial", martial_ability="Agility"), scores) == 2


def test_archetype_ability_powered_martial_uses_higher():
    scores = AbilityScores(intelligence=1, strength=2)
    archetype = Archetype(
        kind="powered-martial", power_ability="intelligence", martial_ability="strength"
    )
    assert archetype_ability(archetype, scores) == 2


def test_archetype_ability_without_archetype():
    assert archetype_ability(None, AbilityScores(strength=3)) == 0


def test_archetype_ability_kind_ignores_case():
    """Strength 1, charisma 3: the mixed-case kind still takes the higher one."""
    scores = AbilityScores(strength=1, charisma=3)
    archetype = Archetype(
        kind="Powered-Martial", power_ability="strength", martial_ability="charisma"
    )
    assert archetype_ability(archetype, scores) == 3
