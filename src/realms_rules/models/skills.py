"""Skill bonus and skill allocation helpers.

A skill is linked to one or more abilities; its bonus uses the highest
of them. Unproficient characters only get half of a positive ability
(rounded up) but double a negative one.
"""

import math

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.core_rules import CoreRules


def _split_linked(linked: str | list[str] | tuple[str, ...] | None) -> list[str]:
    if not linked:
        return []
    if isinstance(linked, str):
        return [part.strip() for part in linked.split(",") if part.strip()]
    return [str(part).strip() for part in linked if str(part).strip()]


def highest_linked_ability(
    linked: str | list[str] | tuple[str, ...] | None, scores: AbilityScores
) -> int:
    """Highest score among the linked abilities; 0 when none resolve."""
    values = [
        scores.get(name)
        for name in _split_linked(linked)
        if name.lower() in scores.as_dict()
    ]
    return max(values) if values else 0


def unproficient_bonus(ability_value: int) -> int:
    if ability_value < 0:
        return ability_value * 2
    return math.ceil(ability_value / 2)


def skill_bonus(
    linked: str | list[str] | tuple[str, ...] | None,
    skill_value: int,
    scores: AbilityScores,
) -> int:
    """Highest linked ability + allocated skill value."""
    return highest_linked_ability(linked, scores) + skill_value


def skill_bonus_with_proficiency(
    linked: str | list[str] | tuple[str, ...] | None,
    skill_value: int,
    scores: AbilityScores,
    is_proficient: bool = False,
) -> int:
    """Character-sheet skill bonus.

    Proficient: ability + value + 1. Unproficient: unproficient_bonus(ability).
    """
    ability = highest_linked_ability(linked, scores)
    if is_proficient:
        return ability + skill_value + 1
    return unproficient_bonus(ability)


def skill_value_increase_cost(
    current_value: int, is_sub_skill: bool, rules: CoreRules | None = None
) -> int:
    """1 point below the cap; past it 3 for base skills, 2 for sub-skills."""
    rules = rules or CoreRules.defaults()
    if current_value < rules.get_int("maxSkillValue", 3):
        return 1
    if is_sub_skill:
        return rules.get_int("subSkillPastCapCost", 2)
    return rules.get_int("baseSkillPastCapCost", 3)


def defense_increase_cost(rules: CoreRules | None = None) -> int:
    rules = rules or CoreRules.defaults()
    return rules.get_int("defenseIncreaseCost", 2)


def skill_points_spent(
    skills,
    defense_skills: dict[str, int] | None = None,
    species_skills: frozenset[str] = frozenset(),
    rules: CoreRules | None = None,
) -> int:
    """Skill points spent on proficiencies, skill values and defenses.

    Each proficient skill costs 1 point for the proficiency, then the
    per-step increase cost for every value point. Species skills come
    proficient with their first value point free. Defense increases cost
    ``defenseIncreaseCost`` per point.
    """
    rules = rules or CoreRules.defaults()
    spent = 0
    for skill in skills:
        if not skill.proficient and skill.value <= 0:
            continue
        value = max(0, skill.value)
        if skill.name.strip().lower() in species_skills:
            spent += max(0, value - 1)
        elif skill.is_sub_skill:
            spent += 1
            for v in range(2, value + 1):
                spent += skill_value_increase_cost(v - 1, True, rules)
        else:
            spent += 1
            for v in range(1, value + 1):
                spent += skill_value_increase_cost(v - 1, False, rules)

    defense_total = sum((defense_skills or {}).values())
    return spent + defense_total * defense_increase_cost(rules)
