"""Tests for skill bonuses and skill point spending."""

import pytest

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.character import SkillEntry
from realms_rules.models.skills import (
    defense_increase_cost,
    highest_linked_ability,
    skill_bonus,
    skill_bonus_with_proficiency,
    skill_points_spent,
    skill_value_increase_cost,
    unproficient_bonus,
)


@pytest.fixture
def scores():
    return AbilityScores(strength=1, agility=3, intelligence=-1)


# --- Bonuses ---

def test_highest_linked_ability_from_comma_list(scores):
    assert highest_linked_ability("strength, agility", scores) == 3


def test_highest_linked_ability_from_list(scores):
    assert highest_linked_ability(["Intelligence", "Strength"], scores) == 1


def test_highest_linked_ability_ignores_unknown_names(scores):
    assert highest_linked_ability("luck", scores) == 0
    assert highest_linked_ability(None, scores) == 0


@pytest.mark.parametrize("ability,expected", [(3, 2), (1, 1), (0, 0), (-1, -2), (-2, -4)])
def test_unproficient_bonus(ability, expected):
    """Half rounded up when positive, doubled when negative."""
    assert unproficient_bonus(ability) == expected


def test_skill_bonus(scores):
    assert skill_bonus("agility", 2, scores) == 5


def test_skill_bonus_with_proficiency(scores):
    """Proficient: 3 + 2 + 1. Unproficient: ceil(3 / 2)."""
    assert skill_bonus_with_proficiency("agility", 2, scores, is_proficient=True) == 6
    assert skill_bonus_with_proficiency("agility", 2, scores, is_proficient=False) == 2
    assert skill_bonus_with_proficiency("intelligence", 0, scores) == -2


# --- Costs ---

def test_skill_value_increase_cost():
    assert skill_value_increase_cost(0, False) == 1
    assert skill_value_increase_cost(2, False) == 1
    assert skill_value_increase_cost(3, False) == 3
    assert skill_value_increase_cost(3, True) == 2


def test_defense_increase_cost():
    assert defense_increase_cost() == 2


# --- Spent points ---

def test_unproficient_zero_skill_costs_nothing():
    assert skill_points_spent([SkillEntry("Athletics")]) == 0


def test_base_skill_cost():
    """Proficiency 1 + two value points at 1 each = 3."""
    assert skill_points_spent([SkillEntry("Athletics", value=2, proficient=True)]) == 3


def test_base_skill_past_cap():
    """1 + 1 + 1 + 1 + 3 = 7 for value 4."""
    assert skill_points_spent([SkillEntry("Athletics", value=4, proficient=True)]) == 7


def test_sub_skill_first_value_point_is_free():
    """1 for proficiency, then values 2 and 3 at 1 each = 3."""
    skill = SkillEntry("Climbing", value=3, proficient=True, is_sub_skill=True)
    assert skill_points_spent([skill]) == 3


def test_species_skill_first_point_is_free():
    skill = SkillEntry("Stealth", value=2, proficient=True)
    assert skill_points_spent([skill], species_skills=frozenset({"stealth"})) == 1


def test_defense_points_cost_two_each():
    assert skill_points_spent([], {"might": 1, "reflex": 2}) == 6


def test_combined_spend():
    skills = [
        SkillEntry("Athletics", value=2, proficient=True),
        SkillEntry("Stealth", value=1, proficient=True),
        SkillEntry("Arcana"),
    ]
    # 3 + 2 + 0 + 2*1
    assert skill_points_spent(skills, {"resolve": 1}) == 7
