"""Reference lookup: resolve an entry's id or name to a record.

Tables are supplied by the caller on every call and never mutated here.
Ids compare by value, so ``5`` and ``"5"`` match the same record; names
compare case-insensitively after trimming.
"""

import logging
from collections.abc import Iterable

from realms_rules.models.parts import IdRef, NameRef, PartRecord, Ref

logger = logging.getLogger(__name__)


def id_key(value) -> str | None:
    """Canonical comparison key for a record id."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return text
    if number.is_integer():
        return str(int(number))
    return text


def name_key(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


class PartTable:
    """Index over a list of records, built once per call site.

    The first record wins when ids or names collide.
    """

    def __init__(self, records: Iterable[PartRecord] = ()) -> None:
        self._records: list[PartRecord] = list(records)
        self._by_id: dict[str, PartRecord] = {}
        self._by_name: dict[str, PartRecord] = {}
        for record in self._records:
            key = id_key(record.id)
            if key is not None:
                self._by_id.setdefault(key, record)
            name = name_key(record.name)
            if name is not None:
                self._by_name.setdefault(name, record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def by_id(self, value) -> PartRecord | None:
        key = id_key(value)
        if key is None:
            return None
        return self._by_id.get(key)

    def by_name(self, value) -> PartRecord | None:
        key = name_key(value)
        if key is None:
            return None
        return self._by_name.get(key)

    @classmethod
    def from_dicts(cls, rows: Iterable[dict]) -> "PartTable":
        return cls(PartRecord.from_dict(row) for row in rows)


def as_table(table: "PartTable | Iterable[PartRecord] | None") -> PartTable:
    if isinstance(table, PartTable):
        return table
    return PartTable(table or ())


def resolve_ref(table: "PartTable | Iterable[PartRecord] | None", ref: Ref | None) -> PartRecord | None:
    """Resolve by id first, then by name. Never raises."""
    if ref is None:
        return None
    table = as_table(table)

    record = None
    if isinstance(ref, IdRef):
        record = table.by_id(ref.id)
        if record is None and ref.name:
            record = table.by_name(ref.name)
    elif isinstance(ref, NameRef):
        record = table.by_name(ref.name)

    if record is None:
        logger.debug("Unresolved part reference: %r", ref)
    return record


def find_part(
    table: "PartTable | Iterable[PartRecord] | None", part_id: int, name: str
) -> PartRecord | None:
    """Look up a well-known part by its id, then by its canonical name."""
    return resolve_ref(table, IdRef(id=part_id, name=name))
