"""Ability score economy: point costs, caps, and spent/remaining totals.

Scores run from -2 up to 3 while a character is being created and up to
6 afterwards. Raising a score that is already at 4 or more costs 2
points instead of 1; scores below zero refund 1 point per step.
"""

from dataclasses import dataclass, fields

from realms_rules.models.constants import ABILITY_NAMES, EntityKind
from realms_rules.models.core_rules import CoreRules
from realms_rules.models.progression import ProgressionFormulas


@dataclass(slots=True)
class AbilityScores:
    """The six ability scores of a character or creature."""

    strength: int = 0
    vitality: int = 0
    agility: int = 0
    acuity: int = 0
    intelligence: int = 0
    charisma: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "AbilityScores":
        """Build from a name -> score mapping; names are case-insensitive."""
        values: dict[str, int] = {}
        for key, val in data.items():
            name = str(key).strip().lower()
            if name not in ABILITY_NAMES:
                raise ValueError(f"Unknown ability: {key!r}")
            values[name] = int(val or 0)
        return cls(**values)

    def get(self, name: str | None, default: int = 0) -> int:
        if not name:
            return default
        key = name.strip().lower()
        if key not in ABILITY_NAMES:
            return default
        return getattr(self, key)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def values(self) -> list[int]:
        return [getattr(self, f.name) for f in fields(self)]


class AbilityEconomy:
    """Point costs for raising and lowering ability scores."""

    def __init__(self, rules: CoreRules | None = None) -> None:
        self._rules = rules or CoreRules.defaults()

    @property
    def minimum(self) -> int:
        return self._rules.get_int("abilityMin", -2)

    @property
    def threshold(self) -> int:
        return self._rules.get_int("abilityCostIncreaseThreshold", 4)

    def maximum(self, during_creation: bool) -> int:
        if during_creation:
            return self._rules.get_int("abilityMaxStarting", 3)
        return self._rules.get_int("abilityMaxAbsolute", 6)

    def cost_to_increase(self, current_value: int) -> int:
        if current_value >= self.threshold:
            return self._rules.get_int("abilityIncreasedCost", 2)
        return self._rules.get_int("abilityNormalCost", 1)

    def can_increase(
        self, current_value: int, available_points: int | float, during_creation: bool = True
    ) -> bool:
        if current_value >= self.maximum(during_creation):
            return False
        return available_points >= self.cost_to_increase(current_value)

    def can_decrease(self, current_value: int) -> bool:
        return current_value > self.minimum

    def ability_cost(self, value: int) -> int:
        """Total points needed to raise a score from 0 to *value*.

        Negative values refund one point per step.
        """
        if value <= 0:
            return value
        normal = self._rules.get_int("abilityNormalCost", 1)
        increased = self._rules.get_int("abilityIncreasedCost", 2)
        below = min(value, self.threshold)
        above = max(0, value - self.threshold)
        return below * normal + above * increased

    def spent_points(self, scores: AbilityScores) -> int:
        return sum(self.ability_cost(v) for v in scores.values())

    def remaining_points(
        self,
        scores: AbilityScores,
        level: float,
        kind: EntityKind | str = EntityKind.PLAYER,
    ) -> int:
        """Available minus spent; negative means overspent."""
        available = ProgressionFormulas(self._rules).ability_points(level, kind)
        return available - self.spent_points(scores)


_DEFAULT = AbilityEconomy(CoreRules.defaults())

cost_to_increase = _DEFAULT.cost_to_increase
can_increase = _DEFAULT.can_increase
can_decrease = _DEFAULT.can_decrease
ability_cost = _DEFAULT.ability_cost
spent_ability_points = _DEFAULT.spent_points
remaining_ability_points = _DEFAULT.remaining_points
