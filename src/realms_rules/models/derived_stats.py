"""Derived stat calculator driven by CoreRules constants.

Covers the numbers shown on the character sheet that are not budgets:
defenses, speed, evasion, maximum health and energy, the terminal
threshold, and attack bonuses.
"""

import math
from dataclasses import dataclass, field

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.archetype import archetype_ability
from realms_rules.models.character import Character
from realms_rules.models.constants import ABILITY_DEFENSE, Ability
from realms_rules.models.core_rules import CoreRules
from realms_rules.models.skills import unproficient_bonus


class DerivedStats:
    """Computes derived stats from ability scores using rule constants."""

    def __init__(self, rules: CoreRules | None = None) -> None:
        self._rules = rules or CoreRules.defaults()

    def defense_bonuses(
        self, abilities: AbilityScores, defense_skills: dict[str, int]
    ) -> dict[str, int]:
        """Bonus per defense = governing ability + defense skill points."""
        return {
            defense: abilities.get(ability) + defense_skills.get(defense, 0)
            for ability, defense in ABILITY_DEFENSE.items()
        }

    def defense_scores(
        self, abilities: AbilityScores, defense_skills: dict[str, int]
    ) -> dict[str, int]:
        base = self._rules.get_int("baseDefense", 10)
        return {
            name: base + bonus
            for name, bonus in self.defense_bonuses(abilities, defense_skills).items()
        }

    def speed(self, agility: int, speed_base: int | None = None) -> int:
        """Speed = base + ceil(AGI / 2)."""
        base = speed_base if speed_base is not None else self._rules.get_int("baseSpeed", 6)
        return base + math.ceil(agility / 2)

    def evasion(self, agility: int, evasion_base: int | None = None) -> int:
        """Evasion = base + AGI."""
        if evasion_base is None:
            evasion_base = self._rules.get_int("baseEvasion", 10)
        return evasion_base + agility

    def max_health(
        self,
        health_points: int,
        level: int,
        abilities: AbilityScores,
        archetype_ability_name: str | None = None,
    ) -> int:
        """Max HP = 8 + ability * level + allocated points.

        The ability is vitality, or strength when vitality is the
        archetype ability. A negative ability applies once, not per level.
        """
        base = self._rules.get_int("baseHealth", 8)
        if (archetype_ability_name or "").lower() == Ability.VITALITY:
            ability = abilities.strength
        else:
            ability = abilities.vitality
        if ability < 0:
            return base + ability + health_points
        return base + ability * level + health_points

    def max_energy(self, energy_points: int, level: int, archetype_score: int) -> int:
        """Max EN = archetype ability * level + allocated points."""
        return archetype_score * level + energy_points

    def terminal(self, max_health: int) -> int:
        """Terminal threshold: a quarter of max health, rounded up."""
        return math.ceil(max_health / 4)


@dataclass(frozen=True, slots=True)
class AttackBonus:
    prof: int
    unprof: int


@dataclass
class CharacterStats:
    """Complete computed stat snapshot for a character."""

    max_health: int = 0
    max_energy: int = 0
    terminal: int = 0
    speed: int = 0
    evasion: int = 0
    armor: int = 0
    defense_bonuses: dict[str, int] = field(default_factory=dict)
    defense_scores: dict[str, int] = field(default_factory=dict)
    attack_bonuses: dict[str, AttackBonus] = field(default_factory=dict)


def attack_bonuses(
    martial_proficiency: int,
    power_proficiency: int,
    abilities: AbilityScores,
    power_ability: str | None = None,
) -> dict[str, AttackBonus]:
    """Proficient/unproficient attack bonuses per attack ability.

    Power attacks use the archetype's power ability, charisma when unset.
    """
    power_value = abilities.get(power_ability) if power_ability else abilities.charisma
    result: dict[str, AttackBonus] = {}
    for name in (Ability.STRENGTH, Ability.AGILITY, Ability.ACUITY):
        value = abilities.get(name)
        result[str(name)] = AttackBonus(
            prof=martial_proficiency + value, unprof=unproficient_bonus(value)
        )
    result["power"] = AttackBonus(
        prof=power_proficiency + power_value, unprof=unproficient_bonus(power_value)
    )
    return result


def compute_stats(character: Character, rules: CoreRules | None = None) -> CharacterStats:
    """Compute all derived stats for a character in one call."""
    calc = DerivedStats(rules)
    abilities = character.abilities
    level = character.level or 1

    archetype = character.archetype
    power_ability = archetype.power_ability if archetype else None
    martial_ability = archetype.martial_ability if archetype else None
    # Health checks the power ability first, matching how sheets store it.
    primary_ability = power_ability or martial_ability

    max_health = calc.max_health(
        character.health_points, level, abilities, primary_ability
    )
    max_energy = calc.max_energy(
        character.energy_points, level, archetype_ability(archetype, abilities)
    )

    return CharacterStats(
        max_health=max_health,
        max_energy=max_energy,
        terminal=calc.terminal(max_health),
        speed=calc.speed(abilities.agility, character.speed_base),
        evasion=calc.evasion(abilities.agility, character.evasion_base),
        armor=sum(character.equipped_armor),
        defense_bonuses=calc.defense_bonuses(abilities, character.defense_skills),
        defense_scores=calc.defense_scores(abilities, character.defense_skills),
        attack_bonuses=attack_bonuses(
            character.martial_proficiency,
            character.power_proficiency,
            abilities,
            power_ability,
        ),
    )
