"""Character data model.

Represents a character's build choices: level, archetype, ability
scores, skills, defense skill points, feats, and allocated health/energy
points. This is the core input to the derived stats calculator and to
feat requirement checks.
"""

from dataclasses import dataclass, field

from realms_rules.models.abilities import AbilityScores
from realms_rules.models.archetype import Archetype


@dataclass(slots=True)
class SkillEntry:
    """A skill on the character sheet."""
    name: str
    ability: str = ""          # linked ability, or comma-separated abilities
    value: int = 0             # allocated skill points
    proficient: bool = False
    is_sub_skill: bool = False


@dataclass
class Character:
    """A player character build."""

    name: str = ""
    level: int = 1
    archetype: Archetype | None = None
    abilities: AbilityScores = field(default_factory=AbilityScores)

    skills: list[SkillEntry] = field(default_factory=list)

    # Defense skill points keyed by defense name (might, fortitude, ...)
    defense_skills: dict[str, int] = field(default_factory=dict)

    # Names of owned feats
    feats: list[str] = field(default_factory=list)

    martial_proficiency: int = 0
    power_proficiency: int = 0

    # Points allocated from the health-energy pool
    health_points: int = 0
    energy_points: int = 0

    # Overrides for species/feat-modified bases; None uses the rules default
    speed_base: int | None = None
    evasion_base: int | None = None

    # Damage reduction of each equipped armor piece
    equipped_armor: list[int] = field(default_factory=list)

    def find_skill(self, name: str) -> SkillEntry | None:
        wanted = name.strip().lower()
        for skill in self.skills:
            if skill.name.strip().lower() == wanted:
                return skill
        return None
