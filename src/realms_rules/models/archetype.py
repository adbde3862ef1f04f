"""Archetype configuration: per-archetype limits and the archetype ability."""

from dataclasses import dataclass

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.constants import ArchetypeKind


@dataclass(frozen=True, slots=True)
class ProficiencySplit:
    martial: int
    power: int


@dataclass(frozen=True, slots=True)
class ArchetypeConfig:
    """Static limits for one archetype kind."""
    feat_limit: int
    equipment_max: int
    innate_energy_max: int
    proficiency: ProficiencySplit


ARCHETYPE_CONFIGS: dict[str, ArchetypeConfig] = {
    ArchetypeKind.POWER: ArchetypeConfig(
        feat_limit=1,
        equipment_max=4,
        innate_energy_max=8,
        proficiency=ProficiencySplit(martial=0, power=2),
    ),
    ArchetypeKind.POWERED_MARTIAL: ArchetypeConfig(
        feat_limit=2,
        equipment_max=8,
        innate_energy_max=6,
        proficiency=ProficiencySplit(martial=1, power=1),
    ),
    ArchetypeKind.MARTIAL: ArchetypeConfig(
        feat_limit=3,
        equipment_max=16,
        innate_energy_max=0,
        proficiency=ProficiencySplit(martial=2, power=0),
    ),
}


@dataclass(frozen=True, slots=True)
class Archetype:
    """A character's chosen archetype and its linked abilities."""
    kind: str = ArchetypeKind.POWER
    power_ability: str | None = None
    martial_ability: str | None = None


def _kind_of(archetype: "Archetype | str | None") -> str:
    if isinstance(archetype, Archetype):
        archetype = archetype.kind
    return str(archetype or "").strip().lower()


def config(archetype: "Archetype | str | None") -> ArchetypeConfig:
    """Look up limits; unknown kinds fall back to the power archetype."""
    key = _kind_of(archetype)
    return ARCHETYPE_CONFIGS.get(key, ARCHETYPE_CONFIGS[ArchetypeKind.POWER])


def feat_limit(archetype: "Archetype | str | None") -> int:
    return config(archetype).feat_limit


def equipment_max(archetype: "Archetype | str | None") -> int:
    return config(archetype).equipment_max


def innate_energy_max(archetype: "Archetype | str | None") -> int:
    return config(archetype).innate_energy_max


def archetype_ability(archetype: Archetype | None, scores: AbilityScores) -> int:
    """Score of the archetype-linked ability.

    Powered-martial characters use the higher of their two linked
    abilities; single-path archetypes use whichever one is set.
    """
    if archetype is None or not archetype.kind:
        return 0
    if _kind_of(archetype) == ArchetypeKind.POWERED_MARTIAL:
        return max(
            scores.get(archetype.power_ability),
            scores.get(archetype.martial_ability),
        )
    return scores.get(archetype.power_ability or archetype.martial_ability)
