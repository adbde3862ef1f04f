"""Spent-versus-available check for a character draft.

Overspending is not an error here: each budget reports what remains and
whether it went negative, and the caller decides whether that blocks
anything (level up, saving, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from realms_rules.models.abilities import AbilityEconomy
from realms_rules.models.archetype import archetype_ability, equipment_max
from realms_rules.models.character import Character
from realms_rules.models.constants import EntityKind
from realms_rules.models.core_rules import CoreRules
from realms_rules.models.progression import ProgressionFormulas
from realms_rules.models.skills import skill_points_spent

BudgetKind = Literal[
    "ability_points",
    "skill_points",
    "health_energy",
    "training_points",
    "archetype_feats",
    "character_feats",
    "equipment",
]

_LABELS: dict[str, str] = {
    "ability_points": "ability points",
    "skill_points": "skill points",
    "health_energy": "health/energy points",
    "training_points": "training points",
    "archetype_feats": "archetype feats",
    "character_feats": "character feats",
    "equipment": "equipment slots",
}


@dataclass(frozen=True, slots=True)
class BudgetLine:
    kind: BudgetKind
    available: float
    spent: float

    @property
    def remaining(self) -> float:
        return self.available - self.spent

    @property
    def overspent(self) -> bool:
        return self.remaining < 0


@dataclass(frozen=True, slots=True)
class BudgetIssue:
    """A budget that is overspent (error) or still has points left (warning)."""

    severity: Literal["warning", "error"]
    kind: BudgetKind
    message: str


@dataclass(slots=True)
class DraftSpending:
    """What the draft has committed beyond the character sheet itself."""

    training_points: float = 0          # powers + techniques + item proficiencies
    archetype_feats: int = 0
    character_feats: int = 0
    equipment: int = 0
    species_skills: frozenset[str] = frozenset()   # lower-case skill names
    extra_skill_points: int = 0


@dataclass(slots=True)
class BudgetReport:
    lines: dict[str, BudgetLine] = field(default_factory=dict)
    issues: list[BudgetIssue] = field(default_factory=list)

    @property
    def overspent(self) -> bool:
        return any(line.overspent for line in self.lines.values())

    def __getitem__(self, kind: str) -> BudgetLine:
        return self.lines[kind]


def _issue_for(line: BudgetLine) -> BudgetIssue | None:
    label = _LABELS[line.kind]
    remaining = line.remaining
    if remaining < 0:
        return BudgetIssue("error", line.kind, f"You've overspent {label} by {_fmt(-remaining)}.")
    if remaining > 0:
        return BudgetIssue("warning", line.kind, f"You have {_fmt(remaining)} {label} left to spend.")
    return None


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def check_budget(
    character: Character,
    spending: DraftSpending | None = None,
    rules: CoreRules | None = None,
    kind: EntityKind | str = EntityKind.PLAYER,
) -> BudgetReport:
    """Compare every budget of a draft against what its level allows."""
    rules = rules or CoreRules.defaults()
    spending = spending or DraftSpending()
    formulas = ProgressionFormulas(rules)
    economy = AbilityEconomy(rules)
    level = character.level

    lines = [
        BudgetLine(
            "ability_points",
            formulas.ability_points(level, kind),
            economy.spent_points(character.abilities),
        ),
        BudgetLine(
            "skill_points",
            formulas.skill_points(level, kind) + spending.extra_skill_points,
            skill_points_spent(
                character.skills, character.defense_skills, spending.species_skills, rules
            ),
        ),
        BudgetLine(
            "health_energy",
            formulas.health_energy_pool(level, kind),
            character.health_points + character.energy_points,
        ),
        BudgetLine(
            "training_points",
            formulas.training_points(
                level, archetype_ability(character.archetype, character.abilities), kind
            ),
            spending.training_points,
        ),
        BudgetLine(
            "archetype_feats", formulas.max_archetype_feats(level), spending.archetype_feats
        ),
        BudgetLine(
            "character_feats", formulas.max_character_feats(level), spending.character_feats
        ),
        BudgetLine("equipment", equipment_max(character.archetype), spending.equipment),
    ]

    report = BudgetReport(lines={line.kind: line for line in lines})
    for line in lines:
        issue = _issue_for(line)
        if issue is not None:
            report.issues.append(issue)
    return report
