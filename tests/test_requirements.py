"""Tests for feat requirement checks."""

import pytest

from realms_rules.engine.requirements import (
    Feat,
    check_feat_requirements,
    eligible_feats,
    parse_feat_rank,
    prerequisite_feat,
)
from realms_rules.models.abilities import AbilityScores
from realms_rules.models.character import Character, SkillEntry


@pytest.fixture
def hero():
    return Character(
        name="Ilsa",
        level=3,
        abilities=AbilityScores(strength=2, agility=1),
        skills=[
            SkillEntry("Athletics", "strength", value=1, proficient=True),
            SkillEntry("Stealth", "agility"),
        ],
        feats=["Action Surge"],
        martial_proficiency=1,
    )


# --- Ranks ---

@pytest.mark.parametrize(
    "name,expected",
    [
        ("Action Surge", ("Action Surge", 1)),
        ("Action Surge II", ("Action Surge", 2)),
        ("Action Surge III", ("Action Surge", 3)),
        ("Iron Will IV", ("Iron Will", 4)),
        ("iron will vi", ("iron will", 6)),
        ("Mix", ("Mix", 1)),
        ("", ("", 1)),
    ],
)
def test_parse_feat_rank(name, expected):
    assert parse_feat_rank(name) == expected


def test_prerequisite_feat():
    assert prerequisite_feat("Action Surge") is None
    assert prerequisite_feat("Action Surge II") == "Action Surge"
    assert prerequisite_feat("Action Surge III") == "Action Surge II"


# --- Checks ---

def test_all_requirements_met(hero):
    feat = Feat(
        name="Action Surge II",
        level_requirement=3,
        ability_requirements=[("strength", 2)],
        skill_requirements=[("Athletics", 3)],
        martial_proficiency_requirement=1,
    )
    result = check_feat_requirements(feat, hero)
    assert result.met is True
    assert result.issues == []


def test_level_requirement(hero):
    result = check_feat_requirements(Feat(name="Veteran", level_requirement=4), hero)
    assert result.issues == ["Level 4 required"]


def test_ability_requirement(hero):
    feat = Feat(name="Mighty", ability_requirements=[("Strength", 3)])
    assert check_feat_requirements(feat, hero).issues == ["Strength 3 required (have 2)"]


def test_skill_requires_proficiency(hero):
    feat = Feat(name="Shadow", skill_requirements=[("Stealth", 1), ("Arcana", 1)])
    assert check_feat_requirements(feat, hero).issues == [
        "Stealth proficiency required (not proficient)",
        "Arcana proficiency required (not proficient)",
    ]


def test_skill_bonus_requirement(hero):
    """Athletics bonus = strength 2 + value 1 = 3."""
    feat = Feat(name="Climber", skill_requirements=[("athletics", 4)])
    assert check_feat_requirements(feat, hero).issues == ["athletics +4 required (have +3)"]


def test_proficiency_requirements(hero):
    feat = Feat(
        name="Arcane Warrior",
        martial_proficiency_requirement=2,
        power_proficiency_requirement=1,
    )
    assert check_feat_requirements(feat, hero).issues == [
        "Martial Prof 2 required",
        "Power Prof 1 required",
    ]


def test_previous_rank_required(hero):
    result = check_feat_requirements(Feat(name="Action Surge III"), hero)
    assert result.met is False
    assert result.issues == ['Requires "Action Surge II" feat']


def test_numbered_first_rank_counts_as_base():
    character = Character(level=5, feats=["Action Surge I"])
    result = check_feat_requirements(Feat(name="Action Surge II"), character)
    assert result.met is True


def test_previous_rank_must_match_base_name():
    character = Character(level=5, feats=["Iron Will I", "Action Surge III"])
    result = check_feat_requirements(Feat(name="Action Surge II"), character)
    assert result.issues == ['Requires "Action Surge" feat']


def test_every_unmet_requirement_is_listed(hero):
    feat = Feat(
        name="Iron Will II",
        level_requirement=5,
        ability_requirements=[("vitality", 1)],
    )
    assert check_feat_requirements(feat, hero).issues == [
        "Level 5 required",
        "vitality 1 required (have 0)",
        'Requires "Iron Will" feat',
    ]


# --- Records ---

def test_feat_from_dict():
    feat = Feat.from_dict(
        {
            "name": "Mighty Blow",
            "char_feat": True,
            "lvl_req": "4",
            "ability_req": ["strength", "vitality"],
            "abil_req_val": [2],
            "skill_req": ["Athletics"],
            "skill_req_val": [3],
            "mart_prof_req": 1,
            "pow_prof_req": None,
        }
    )
    assert feat.character_feat is True
    assert feat.level_requirement == 4
    assert feat.ability_requirements == [("strength", 2), ("vitality", 0)]
    assert feat.skill_requirements == [("Athletics", 3)]
    assert feat.martial_proficiency_requirement == 1
    assert feat.power_proficiency_requirement == 0


def test_eligible_feats(hero):
    feats = [
        Feat(name="Action Surge II"),
        Feat(name="Veteran", level_requirement=10),
        Feat(name="Quick Step"),
    ]
    assert [f.name for f in eligible_feats(feats, hero)] == ["Action Surge II", "Quick Step"]
