"""Level-based progression formulas for player characters and creatures.

Each formula turns a level into a resource budget: ability points, skill
points, the health-energy pool, proficiency, training points, creature
feat points and currency. Constants come from CoreRules; the formula
shapes are fixed here.

Creatures may sit below level 1 (e.g. level 0.5 minions). For those the
level-1 value is scaled linearly and rounded up. Any level that is not a
positive finite number is treated as level 1.
"""

import math
from dataclasses import dataclass

from realms_rules.models.constants import EntityKind
from realms_rules.models.core_rules import CoreRules


def normalize_level(level: float | int | str | None) -> int | float:
    """Coerce a caller-supplied level into a positive number.

    Integral values come back as int so integer formulas stay integer.
    """
    try:
        value = float(level)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(value) or value <= 0:
        return 1
    if value.is_integer():
        return int(value)
    return value


def js_round(value: float) -> int:
    """Round half up, matching how stored creature prices were computed."""
    return math.floor(value + 0.5)


def is_creature(kind: EntityKind | str) -> bool:
    return str(kind).upper() == EntityKind.CREATURE


def _is_sub_level(level: int | float, kind: EntityKind | str) -> bool:
    return is_creature(kind) and level < 1


class ProgressionFormulas:
    """Computes level budgets using CoreRules-driven constants."""

    def __init__(self, rules: CoreRules | None = None) -> None:
        self._rules = rules or CoreRules.defaults()

    @property
    def rules(self) -> CoreRules:
        return self._rules

    def ability_points(self, level: float, kind: EntityKind | str = EntityKind.PLAYER) -> int:
        """7 below level 3, then +1 for every 3 levels past level 1."""
        lvl = normalize_level(level)
        base = self._rules.get_int("baseAbilityPoints", 7)
        if _is_sub_level(lvl, kind):
            return math.ceil(base * lvl)
        if lvl < 3:
            return base
        every = self._rules.get_int("abilityPointsEveryNLevels", 3)
        per = self._rules.get_int("abilityPointsPerIncrease", 1)
        return base + math.floor((lvl - 1) / every) * per

    def skill_points(self, level: float, kind: EntityKind | str = EntityKind.PLAYER) -> int:
        """2 + 3 * floor(level)."""
        lvl = normalize_level(level)
        if _is_sub_level(lvl, kind):
            return math.ceil(self._rules.get_int("creatureSubLevelSkillPoints", 5) * lvl)
        base = self._rules.get_int("baseSkillPoints", 2)
        per = self._rules.get_int("skillPointsPerLevel", 3)
        return base + per * math.floor(lvl)

    def health_energy_pool(
        self, level: float, kind: EntityKind | str = EntityKind.PLAYER
    ) -> int | float:
        """base + 12 * (level - 1); base is 18 for players and 26 for creatures."""
        lvl = normalize_level(level)
        if is_creature(kind):
            base = self._rules.get_int("creatureBaseHitEnergy", 26)
        else:
            base = self._rules.get_int("playerBaseHitEnergy", 18)
        if _is_sub_level(lvl, kind):
            return math.ceil(base * lvl)
        return base + self._rules.get_int("hitEnergyPerLevel", 12) * (lvl - 1)

    def proficiency(self, level: float, kind: EntityKind | str = EntityKind.PLAYER) -> int:
        """2 below level 5, then +1 per 5 levels."""
        lvl = normalize_level(level)
        base = self._rules.get_int("baseProficiency", 2)
        if _is_sub_level(lvl, kind):
            return math.ceil(base * lvl)
        if lvl < 5:
            return base
        every = self._rules.get_int("proficiencyEveryNLevels", 5)
        per = self._rules.get_int("proficiencyPerIncrease", 1)
        return base + math.floor(lvl / every) * per

    def training_points(
        self,
        level: float,
        highest_ability: int = 0,
        kind: EntityKind | str = EntityKind.PLAYER,
    ) -> int | float:
        """Training point budget.

        Players: 22 + A + (2 + A) * (level - 1), A = archetype ability.
        Creatures: 9 + A + (level - 1) * (1 + A), A = highest non-vitality
        ability.
        """
        lvl = normalize_level(level)
        ability = highest_ability or 0
        if is_creature(kind):
            if lvl < 1:
                sub = self._rules.get_int("creatureSubLevelTrainingPoints", 22)
                return math.ceil(sub * lvl) + ability
            base = self._rules.get_int("creatureBaseTrainingPoints", 9)
            per = self._rules.get_int("creatureTpPerLevel", 1) + ability
            return base + ability + (lvl - 1) * per
        base = self._rules.get_int("playerBaseTrainingPoints", 22)
        per = self._rules.get_int("playerTpPerLevelMultiplier", 2) + ability
        return base + ability + per * (lvl - 1)

    def creature_feat_points(self, level: float, martial_proficiency: int = 0) -> int | float:
        """1.5 + martial proficiency at level 1, +1 per level after."""
        lvl = normalize_level(level)
        base = self._rules.get_float("creatureBaseFeatPoints", 1.5) + (martial_proficiency or 0)
        if lvl < 1:
            return math.ceil(base * lvl)
        per = self._rules.get_int("creatureFeatPointsPerLevel", 1)
        return base + per * (lvl - 1)

    def creature_currency(self, level: float) -> int:
        """round(200 * 1.45 ** (level - 1))."""
        lvl = normalize_level(level)
        base = self._rules.get_float("creatureBaseCurrency", 200.0)
        growth = self._rules.get_float("creatureCurrencyGrowth", 1.45)
        return js_round(base * growth ** (lvl - 1))

    def max_archetype_feats(self, level: float) -> int:
        return max(0, math.floor(_raw_level(level)))

    def max_character_feats(self, level: float) -> int:
        return max(0, math.floor(_raw_level(level)))


def _raw_level(level: float | int | str | None) -> float:
    # Feat counts floor the raw level and clamp at zero instead of
    # promoting to level 1.
    try:
        value = float(level)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PlayerProgression:
    level: int | float
    ability_points: int
    skill_points: int
    health_energy_pool: int | float
    training_points: int | float
    proficiency: int
    max_archetype_feats: int
    max_character_feats: int


@dataclass(frozen=True, slots=True)
class CreatureProgression:
    level: int | float
    ability_points: int
    skill_points: int
    health_energy_pool: int | float
    training_points: int | float
    proficiency: int
    currency: int


@dataclass(frozen=True, slots=True)
class LevelDifference:
    """Resource gain between two levels, for level-up displays."""

    ability_points: int
    skill_points: int
    health_energy_pool: int | float
    training_points: int | float
    proficiency: int


def player_progression(
    level: float, highest_ability: int = 0, rules: CoreRules | None = None
) -> PlayerProgression:
    calc = ProgressionFormulas(rules)
    return PlayerProgression(
        level=level,
        ability_points=calc.ability_points(level, EntityKind.PLAYER),
        skill_points=calc.skill_points(level, EntityKind.PLAYER),
        health_energy_pool=calc.health_energy_pool(level, EntityKind.PLAYER),
        training_points=calc.training_points(level, highest_ability, EntityKind.PLAYER),
        proficiency=calc.proficiency(level, EntityKind.PLAYER),
        max_archetype_feats=calc.max_archetype_feats(level),
        max_character_feats=calc.max_character_feats(level),
    )


def creature_progression(
    level: float, highest_ability: int = 0, rules: CoreRules | None = None
) -> CreatureProgression:
    calc = ProgressionFormulas(rules)
    return CreatureProgression(
        level=level,
        ability_points=calc.ability_points(level, EntityKind.CREATURE),
        skill_points=calc.skill_points(level, EntityKind.CREATURE),
        health_energy_pool=calc.health_energy_pool(level, EntityKind.CREATURE),
        training_points=calc.training_points(level, highest_ability, EntityKind.CREATURE),
        proficiency=calc.proficiency(level, EntityKind.CREATURE),
        currency=calc.creature_currency(level),
    )


def level_difference(
    from_level: float,
    to_level: float,
    highest_ability: int = 0,
    kind: EntityKind | str = EntityKind.PLAYER,
    rules: CoreRules | None = None,
) -> LevelDifference:
    calc = ProgressionFormulas(rules)

    def delta(fn, *extra):
        return fn(to_level, *extra) - fn(from_level, *extra)

    return LevelDifference(
        ability_points=delta(calc.ability_points, kind),
        skill_points=delta(calc.skill_points, kind),
        health_energy_pool=delta(calc.health_energy_pool, kind),
        training_points=delta(calc.training_points, highest_ability, kind),
        proficiency=delta(calc.proficiency, kind),
    )


# ---------------------------------------------------------------------------
# Module-level shortcuts over rulebook defaults
# ---------------------------------------------------------------------------

_DEFAULT = ProgressionFormulas(CoreRules.defaults())

ability_points = _DEFAULT.ability_points
skill_points = _DEFAULT.skill_points
health_energy_pool = _DEFAULT.health_energy_pool
proficiency = _DEFAULT.proficiency
training_points = _DEFAULT.training_points
creature_feat_points = _DEFAULT.creature_feat_points
creature_currency = _DEFAULT.creature_currency
max_archetype_feats = _DEFAULT.max_archetype_feats
max_character_feats = _DEFAULT.max_character_feats
