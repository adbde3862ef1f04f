"""Tests for the ability score economy."""

import pytest

from realms_rules.models.abilities import (
    AbilityEconomy,
    AbilityScores,
    ability_cost,
    can_decrease,
    can_increase,
    cost_to_increase,
)
from realms_rules.models.constants import EntityKind
from realms_rules.models.core_rules import CoreRules


@pytest.fixture
def economy():
    return AbilityEconomy(CoreRules.defaults())


# --- AbilityScores ---

def test_from_dict_is_case_insensitive():
    scores = AbilityScores.from_dict({"Strength": 2, "AGILITY": "1"})
    assert scores.strength == 2
    assert scores.agility == 1
    assert scores.charisma == 0


def test_from_dict_rejects_unknown_ability():
    with pytest.raises(ValueError):
        AbilityScores.from_dict({"luck": 3})


def test_get_unknown_or_empty_name_returns_default():
    scores = AbilityScores(acuity=2)
    assert scores.get("Acuity") == 2
    assert scores.get("luck") == 0
    assert scores.get(None, default=-1) == -1


# --- Increase costs ---

def test_cost_to_increase():
    assert cost_to_increase(3) == 1
    assert cost_to_increase(4) == 2
    assert cost_to_increase(-2) == 1


def test_can_increase_during_creation_caps_at_3():
    assert can_increase(2, 1, True) is True
    assert can_increase(3, 1, True) is False


def test_can_increase_after_creation_caps_at_6():
    assert can_increase(3, 1, False) is True
    assert can_increase(5, 2, False) is True
    assert can_increase(6, 99, False) is False


def test_can_increase_needs_enough_points():
    """Raising 4 -> 5 costs 2."""
    assert can_increase(4, 1, False) is False
    assert can_increase(0, 0) is False


def test_can_decrease_stops_at_minimum():
    assert can_decrease(-1) is True
    assert can_decrease(-2) is False


# --- Totals ---

@pytest.mark.parametrize(
    "value,expected",
    [(-2, -2), (0, 0), (1, 1), (3, 3), (4, 4), (5, 6), (6, 8)],
)
def test_ability_cost(value, expected):
    """1 point per step up to 4, 2 points per step past it."""
    assert ability_cost(value) == expected


def test_spent_and_remaining(economy):
    """3 + 2 - 1 = 4 spent of 7 at level 1."""
    scores = AbilityScores(strength=3, agility=2, vitality=-1)
    assert economy.spent_points(scores) == 4
    assert economy.remaining_points(scores, 1) == 3


def test_remaining_goes_negative_when_overspent(economy):
    scores = AbilityScores(strength=3, agility=3, acuity=3)
    assert economy.remaining_points(scores, 1, EntityKind.PLAYER) == -2


def test_custom_threshold():
    rules = CoreRules.defaults().with_overrides({"abilityCostIncreaseThreshold": 2})
    economy = AbilityEconomy(rules)
    assert economy.cost_to_increase(2) == 2
    assert economy.ability_cost(3) == 4
