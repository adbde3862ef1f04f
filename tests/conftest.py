"""Shared reference tables for the calculator tests."""

import pytest

from realms_rules.calculators.lookup import PartTable

PART_ROWS = [
    # Parts a user picks
    {"id": 10, "name": "Fly", "description": "Gain a fly speed.",
     "base_en": 2, "base_tp": 1, "op_1_en": 1, "op_1_tp": 0.5},
    {"id": 11, "name": "Empower", "percentage": True, "base_en": 1.25, "op_1_en": 0.25},
    {"id": "12", "name": "Burst", "base_en": 3.22},
    # Power mechanics
    {"id": 81, "name": "Power Long Action", "mechanic": True},
    {"id": 82, "name": "Power Reaction", "mechanic": True, "base_en": 1},
    {"id": 83, "name": "Power Quick or Free Action", "mechanic": True,
     "base_en": 1, "op_1_en": 1},
    {"id": 232, "name": "Sphere of Effect", "mechanic": True, "percentage": True,
     "base_en": 1.5, "op_1_en": 0.25},
    {"id": 292, "name": "Power Range", "mechanic": True,
     "base_en": 0.5, "op_1_en": 0.5, "op_1_tp": 0.5},
    {"id": 296, "name": "Physical Damage", "mechanic": True, "op_1_en": 0.5},
    {"id": 297, "name": "Elemental Damage", "mechanic": True, "op_1_en": 0.5},
    {"id": 304, "name": "Focus for Duration", "mechanic": True, "duration": True,
     "base_en": 0.5},
    {"id": 305, "name": "Sustain for Duration", "mechanic": True, "duration": True,
     "base_en": 0.5, "op_1_en": 0.25},
    {"id": 306, "name": "Duration (Permanent)", "mechanic": True, "duration": True,
     "base_en": 10},
    {"id": 376, "name": "Duration (Hour)", "mechanic": True, "duration": True,
     "base_en": 3, "op_1_en": 1},
    {"id": 377, "name": "Duration (Round)", "mechanic": True, "duration": True,
     "base_en": 1, "op_1_en": 0.5},
    {"id": 378, "name": "Duration (Minute)", "mechanic": True, "duration": True,
     "base_en": 2, "op_1_en": 1},
    {"id": 400, "name": "Power Split Damage Dice", "mechanic": True,
     "base_en": 0.5, "op_1_en": 0.5},
    # Technique mechanics
    {"id": 2, "name": "Reaction", "mechanic": True, "base_en": 1, "base_tp": 1},
    {"id": 3, "name": "Long Action", "mechanic": True},
    {"id": 4, "name": "Quick or Free Action", "mechanic": True, "base_en": 1, "op_1_en": 1},
    {"id": 5, "name": "Split Damage Dice", "mechanic": True, "base_tp": 1, "op_1_tp": 1},
    {"id": 6, "name": "Additional Damage", "mechanic": True,
     "base_tp": 0.5, "op_1_en": 0.5, "op_1_tp": 0.5},
    {"id": 7, "name": "Add Weapon Attack", "mechanic": True, "base_en": 1, "op_1_tp": 1},
]

PROPERTY_ROWS = [
    {"id": 1, "name": "Damage Reduction", "op_1_ip": 1, "op_1_c": 1},
    {"id": 6, "name": "Weapon Strength Requirement", "base_ip": -1, "op_1_ip": -0.5},
    {"id": 12, "name": "Split Damage Dice", "base_ip": 1},
    {"id": 13, "name": "Range", "base_ip": 1, "op_1_ip": 0.5},
    {"id": 14, "name": "Two-Handed", "base_ip": -1, "base_c": -1},
    {"id": 15, "name": "Shield Base", "base_ip": 1},
    {"id": 16, "name": "Armor Base", "base_ip": 1, "base_tp": 1},
    {"id": 17, "name": "Weapon Damage", "op_1_ip": 0.5},
    {"id": 20, "name": "Finesse", "description": "Light blade.",
     "base_ip": 1, "base_tp": 2, "op_1_tp": 1, "base_c": 1},
    {"id": 21, "name": "Clumsy", "base_tp": -2},
    {"id": 39, "name": "Shield Amount", "op_1_ip": 0.5},
]


@pytest.fixture
def part_rows():
    return [dict(row) for row in PART_ROWS]


@pytest.fixture
def parts(part_rows):
    """Power and technique parts, mechanics included."""
    return PartTable.from_dicts(part_rows)


@pytest.fixture
def property_rows():
    return [dict(row) for row in PROPERTY_ROWS]


@pytest.fixture
def properties(property_rows):
    """Item properties."""
    return PartTable.from_dicts(property_rows)
