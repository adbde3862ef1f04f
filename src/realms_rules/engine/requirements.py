"""Feat eligibility checks.

A feat may require a character level, ability scores, proficient skills
with a minimum bonus, martial/power proficiency, and, for ranked feats
such as "Action Surge III", the previous rank.
"""

import re
from dataclasses import dataclass, field

from realms_rules.models.character import Character
from realms_rules.models.constants import ROMAN_NUMERALS
from realms_rules.models.skills import highest_linked_ability

_RANK_SUFFIX = re.compile(r"^(.+?)\s+(I{1,3}|IV|VI{0,3}|IX|X)$", re.IGNORECASE)


@dataclass(slots=True)
class Feat:
    """A feat record with its requirements."""
    name: str
    description: str = ""
    category: str = ""
    character_feat: bool = False      # False = archetype feat
    level_requirement: int = 0
    # (ability name, minimum score)
    ability_requirements: list[tuple[str, int]] = field(default_factory=list)
    # (skill name, minimum bonus)
    skill_requirements: list[tuple[str, int]] = field(default_factory=list)
    martial_proficiency_requirement: int = 0
    power_proficiency_requirement: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Feat":
        """Build from the stored shape (``lvl_req``, ``ability_req`` + ``abil_req_val``, ...)."""
        abilities = data.get("ability_req") or []
        ability_vals = data.get("abil_req_val") or []
        skills = data.get("skill_req") or []
        skill_vals = data.get("skill_req_val") or []
        return cls(
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or ""),
            character_feat=bool(data.get("char_feat", False)),
            level_requirement=_int(data.get("lvl_req")),
            ability_requirements=[
                (str(name), _int(ability_vals[i] if i < len(ability_vals) else 0))
                for i, name in enumerate(abilities)
            ],
            skill_requirements=[
                (str(name), _int(skill_vals[i] if i < len(skill_vals) else 0))
                for i, name in enumerate(skills)
            ],
            martial_proficiency_requirement=_int(data.get("mart_prof_req")),
            power_proficiency_requirement=_int(data.get("pow_prof_req")),
        )


def _int(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(slots=True)
class FeatCheck:
    met: bool
    issues: list[str] = field(default_factory=list)


def parse_feat_rank(name: str) -> tuple[str, int]:
    """Split "Action Surge II" into ("Action Surge", 2); unranked feats are rank 1."""
    if not name:
        return name, 1
    match = _RANK_SUFFIX.match(name)
    if match is None:
        return name, 1
    roman = match.group(2).upper()
    return match.group(1).strip(), ROMAN_NUMERALS.index(roman) + 1


def prerequisite_feat(name: str) -> str | None:
    """Previous rank of a ranked feat; rank II needs the unnumbered base."""
    base, rank = parse_feat_rank(name)
    if rank <= 1:
        return None
    if rank == 2:
        return base
    return f"{base} {ROMAN_NUMERALS[rank - 2]}"


def _owns_previous_rank(name: str, owned: list[str]) -> bool:
    """Whether any owned feat is the rank just below; a bare name is rank 1."""
    base, rank = parse_feat_rank(name)
    return any(parse_feat_rank(have) == (base, rank - 1) for have in owned)


def check_feat_requirements(feat: Feat, character: Character) -> FeatCheck:
    """Check every requirement and collect one message per unmet one."""
    issues: list[str] = []
    level = character.level or 1

    if feat.level_requirement and level < feat.level_requirement:
        issues.append(f"Level {feat.level_requirement} required")

    for ability, required in feat.ability_requirements:
        have = character.abilities.get(ability)
        if have < required:
            issues.append(f"{ability} {required} required (have {have})")

    for skill_name, required in feat.skill_requirements:
        skill = character.find_skill(skill_name)
        if skill is None or not skill.proficient:
            issues.append(f"{skill_name} proficiency required (not proficient)")
            continue
        bonus = highest_linked_ability(skill.ability, character.abilities) + skill.value
        if bonus < required:
            issues.append(f"{skill_name} +{required} required (have +{bonus})")

    if character.martial_proficiency < feat.martial_proficiency_requirement:
        issues.append(f"Martial Prof {feat.martial_proficiency_requirement} required")
    if character.power_proficiency < feat.power_proficiency_requirement:
        issues.append(f"Power Prof {feat.power_proficiency_requirement} required")

    prereq = prerequisite_feat(feat.name)
    if prereq is not None and not _owns_previous_rank(feat.name, character.feats):
        issues.append(f'Requires "{prereq}" feat')

    return FeatCheck(met=not issues, issues=issues)


def eligible_feats(feats: list[Feat], character: Character) -> list[Feat]:
    return [feat for feat in feats if check_feat_requirements(feat, character).met]
