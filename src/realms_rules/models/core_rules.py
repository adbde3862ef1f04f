"""Core rules wrapper with typed accessors.

Provides a thin interface over the flat rule-constant dict stored in the
hosted "core rules" document. Every accessor takes a default so the
engine works without any loaded document; rulebook defaults are
available via CoreRules.defaults().
"""

import json
from dataclasses import dataclass, field
from pathlib import Path


# Rulebook defaults for every constant the formulas read.
_RULEBOOK_DEFAULTS: dict[str, int | float] = {
    # Ability points: base + 1 per 3 levels after level 1
    "baseAbilityPoints": 7,
    "abilityPointsEveryNLevels": 3,
    "abilityPointsPerIncrease": 1,
    # Skill points: base + per_level * floor(level)
    "baseSkillPoints": 2,
    "skillPointsPerLevel": 3,
    "creatureSubLevelSkillPoints": 5,
    # Health-energy pool: base + per_level * (level - 1)
    "playerBaseHitEnergy": 18,
    "creatureBaseHitEnergy": 26,
    "hitEnergyPerLevel": 12,
    # Proficiency: base + 1 per 5 levels from level 5
    "baseProficiency": 2,
    "proficiencyEveryNLevels": 5,
    "proficiencyPerIncrease": 1,
    # Training points
    "playerBaseTrainingPoints": 22,
    "playerTpPerLevelMultiplier": 2,
    "creatureBaseTrainingPoints": 9,
    "creatureTpPerLevel": 1,
    "creatureSubLevelTrainingPoints": 22,
    # Creature feat points: base + martial proficiency, +1 per level
    "creatureBaseFeatPoints": 1.5,
    "creatureFeatPointsPerLevel": 1,
    # Creature currency: base * growth^(level - 1)
    "creatureBaseCurrency": 200,
    "creatureCurrencyGrowth": 1.45,
    # Ability scores
    "abilityMin": -2,
    "abilityMaxStarting": 3,
    "abilityMaxAbsolute": 6,
    "abilityCostIncreaseThreshold": 4,
    "abilityNormalCost": 1,
    "abilityIncreasedCost": 2,
    # Skills and defenses
    "maxSkillValue": 3,
    "baseSkillPastCapCost": 3,
    "subSkillPastCapCost": 2,
    "defenseIncreaseCost": 2,
    "creatureBaseSkillPoints": 5,
    # Combat
    "baseSpeed": 6,
    "baseEvasion": 10,
    "baseDefense": 10,
    "baseHealth": 8,
}


@dataclass
class CoreRules:
    """Typed accessor over core rule constants.

    Use from_json() to load an exported rules document, or defaults() to
    get the rulebook values without any document.
    """

    _values: dict[str, int | float] = field(default_factory=dict)

    def get_float(self, key: str, default: float) -> float:
        """Get a float rule value, falling back to the provided default."""
        val = self._values.get(key)
        if val is None:
            return default
        return float(val)

    def get_int(self, key: str, default: int) -> int:
        """Get an integer rule value, falling back to the provided default."""
        val = self._values.get(key)
        if val is None:
            return default
        return int(val)

    def with_overrides(self, overrides: dict[str, int | float]) -> "CoreRules":
        """Return a copy with *overrides* layered on top."""
        merged = dict(self._values)
        merged.update(overrides)
        return CoreRules(_values=merged)

    @classmethod
    def from_dict(cls, data: dict) -> "CoreRules":
        """Build from a rules document, keeping only numeric entries.

        Nested sections (``{"PROGRESSION_PLAYER": {...}}``) are flattened;
        a key present in several sections keeps the last value seen.
        """
        values = dict(_RULEBOOK_DEFAULTS)
        for key, val in _flatten(data):
            values[key] = val
        return cls(_values=values)

    @classmethod
    def from_json(cls, path: Path) -> "CoreRules":
        payload = json.loads(Path(path).read_text())
        if not isinstance(payload, dict):
            raise ValueError("Core rules document must be a JSON object")
        return cls.from_dict(payload)

    @classmethod
    def defaults(cls) -> "CoreRules":
        """Return rulebook defaults, usable without a rules document."""
        return cls(_values=dict(_RULEBOOK_DEFAULTS))


def _flatten(data: dict):
    for key, val in data.items():
        if isinstance(val, dict):
            yield from _flatten(val)
        elif isinstance(val, bool):
            continue
        elif isinstance(val, (int, float)):
            yield key, val
