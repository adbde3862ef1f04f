"""Tests for id/name reference resolution."""

import logging

import pytest

from realms_rules.calculators.lookup import (
    PartTable,
    as_table,
    find_part,
    id_key,
    name_key,
    resolve_ref,
)
from realms_rules.models.parts import IdRef, NameRef, PartRecord


@pytest.mark.parametrize(
    "value,expected",
    [(5, "5"), ("5", "5"), (5.0, "5"), (" 5 ", "5"), (2.5, "2.5"), ("abc", "abc")],
)
def test_id_key(value, expected):
    assert id_key(value) == expected


@pytest.mark.parametrize("value", [None, True, False, "", "  "])
def test_id_key_unusable_values(value):
    assert id_key(value) is None


def test_name_key():
    assert name_key("  Fly ") == "fly"
    assert name_key("") is None


def test_table_lookup_by_numeric_or_string_id(parts):
    assert parts.by_id("10").name == "Fly"
    assert parts.by_id(12).name == "Burst"


def test_table_lookup_by_name_is_case_insensitive(parts):
    assert parts.by_name(" FLY ").id == 10


def test_first_record_wins_on_collision():
    table = PartTable([PartRecord(id=1, name="Fly"), PartRecord(id=1, name="Fly Again")])
    assert table.by_id(1).name == "Fly"
    assert len(table) == 2


def test_resolve_by_id(parts):
    assert resolve_ref(parts, IdRef(292)).name == "Power Range"


def test_resolve_stale_id_falls_back_to_saved_name(parts):
    assert resolve_ref(parts, IdRef(999, name="Fly")).id == 10


def test_resolve_by_name(parts):
    assert resolve_ref(parts, NameRef("empower")).id == 11


def test_unresolved_reference_returns_none(parts, caplog):
    with caplog.at_level(logging.DEBUG, logger="realms_rules.calculators.lookup"):
        assert resolve_ref(parts, NameRef("Teleport")) is None
        assert resolve_ref(parts, IdRef(999)) is None
    assert "Unresolved part reference" in caplog.text


def test_resolve_none_and_empty_table():
    assert resolve_ref(None, IdRef(1)) is None
    assert resolve_ref([], NameRef("Fly")) is None
    assert resolve_ref(PartTable(), None) is None


def test_as_table_accepts_record_lists():
    table = as_table([PartRecord(id=3, name="Long Action")])
    assert isinstance(table, PartTable)
    assert as_table(table) is table


def test_find_part_by_id_then_name():
    table = PartTable([PartRecord(id="x-1", name="Power Range")])
    assert find_part(table, 292, "Power Range").id == "x-1"
