"""Tests for part records, references and saved entries."""

from realms_rules.models.parts import (
    IdRef,
    NameRef,
    PartRecord,
    SystemDerivedModifier,
    UserSelectedPart,
    entries_from_dicts,
    entry_from_dict,
    normalize_levels,
    ref_from_dict,
)


# --- Records ---

def test_from_dict_reads_base_and_tiers():
    record = PartRecord.from_dict(
        {
            "id": 10,
            "name": "Fly",
            "base_en": "2",
            "base_tp": 1,
            "op_1_desc": "+1 space",
            "op_1_en": 1,
            "op_1_tp": 0.5,
        }
    )
    assert record.base_energy == 2.0
    assert record.base_training_points == 1.0
    assert len(record.options) == 1
    assert record.option(0).description == "+1 space"
    assert record.option(0).training_points == 0.5


def test_missing_tier_costs_nothing():
    record = PartRecord.from_dict({"id": 1, "name": "Plain"})
    assert record.options == []
    assert record.option(2).energy == 0.0


def test_tier_positions_are_kept_when_earlier_tier_is_absent():
    record = PartRecord.from_dict({"id": 1, "name": "Gap", "op_2_ip": 3})
    assert record.option(0).item_points == 0.0
    assert record.option(1).item_points == 3.0


def test_junk_costs_count_as_zero():
    record = PartRecord.from_dict({"id": 1, "name": "Junk", "base_en": "n/a", "base_ip": None})
    assert record.base_energy == 0.0
    assert record.base_item_points == 0.0


def test_category_falls_back_to_type():
    record = PartRecord.from_dict({"id": 1, "name": "Fly", "type": "Movement"})
    assert record.category == "Movement"


# --- References ---

def test_ref_from_dict_prefers_id():
    assert ref_from_dict({"id": 5, "name": "Split"}) == IdRef(id=5, name="Split")


def test_ref_from_dict_name_only():
    assert ref_from_dict({"id": "", "name": "Split"}) == NameRef(name="Split")


def test_ref_from_dict_without_reference():
    assert ref_from_dict({"op_1_lvl": 2}) is None


# --- Levels and entries ---

def test_normalize_levels_pads_and_clamps():
    assert normalize_levels([2]) == (2, 0, 0)
    assert normalize_levels([-1, "x", 3, 4]) == (0, 0, 3)
    assert normalize_levels(None) == (0, 0, 0)


def test_entries_normalize_levels_on_construction():
    entry = UserSelectedPart(ref=NameRef("Fly"), levels=[1])
    assert entry.levels == (1, 0, 0)
    derived = SystemDerivedModifier(ref=IdRef(292), levels=(-2, 1, 0), source="range")
    assert derived.levels == (0, 1, 0)


def test_entry_from_dict_reads_levels_and_flag():
    entry = entry_from_dict({"id": 10, "op_1_lvl": 2, "op_3_lvl": 1, "applyDuration": True})
    assert entry.levels == (2, 0, 1)
    assert entry.apply_duration is True


def test_entry_from_dict_honors_legacy_level_keys():
    entry = entry_from_dict({"name": "Fly", "opt1Level": 3, "opt2Level": 1})
    assert entry.ref == NameRef("Fly")
    assert entry.levels == (3, 1, 0)


def test_newer_level_keys_win_over_legacy():
    entry = entry_from_dict({"id": 10, "op_1_lvl": 1, "opt1Level": 4})
    assert entry.levels == (1, 0, 0)


def test_entries_from_dicts_skips_unusable_rows():
    entries = entries_from_dicts([{"id": 10}, "junk", {"op_1_lvl": 2}, {"name": "Fly"}])
    assert [e.ref for e in entries] == [IdRef(10), NameRef("Fly")]
