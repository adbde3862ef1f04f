"""Power costs and display text.

Energy uses the unified equation

    flat * perc_all + (dur_all + 1) * flat_dur * perc_dur - flat_dur * perc_dur

where ``flat`` sums plain parts, ``perc_all`` multiplies percentage
parts, ``dur_all`` multiplies duration parts (0 when there are none),
and the ``*_dur`` terms only collect parts flagged ``apply_duration``.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from realms_rules.calculators.costs import (
    PartChip,
    format_part_chip,
    part_training_points,
    record_cost,
    round_up_tenth,
    tp_source,
)
from realms_rules.calculators.lookup import PartTable, as_table, id_key, resolve_ref
from realms_rules.calculators.mechanics import (
    CreatorType,
    action_type_from_entries,
    entry_part_id,
)
from realms_rules.models.constants import AREA_PARTS, DURATION_LADDERS, PartId
from realms_rules.models.parts import PartRecord, SelectedEntry, entries_from_dicts


@dataclass(slots=True)
class PowerCosts:
    energy: float               # rounded up to one decimal
    energy_raw: float
    training_points: int
    tp_sources: list[str] = field(default_factory=list)


def calculate_power_costs(
    entries: Iterable[SelectedEntry], table: "PartTable | Iterable[PartRecord] | None"
) -> PowerCosts:
    table = as_table(table)
    flat_normal = 0.0
    flat_duration = 0.0
    perc_all = 1.0
    perc_dur = 1.0
    dur_all = 1.0
    has_duration_parts = False
    total_tp = 0
    sources: list[str] = []

    for entry in entries:
        record = resolve_ref(table, entry.ref)
        if record is None:
            continue
        energy = record_cost(record, entry.levels).energy

        if record.duration:
            dur_all *= energy
            has_duration_parts = True
        elif record.percentage:
            perc_all *= energy
            if entry.apply_duration:
                perc_dur *= energy
        else:
            flat_normal += energy
            if entry.apply_duration:
                flat_duration += energy

        tp = part_training_points(record, entry.levels)
        if tp > 0:
            sources.append(tp_source(tp, record.name, entry.levels))
        total_tp += tp

    if not has_duration_parts:
        dur_all = 0.0

    raw = (
        flat_normal * perc_all
        + (dur_all + 1) * flat_duration * perc_dur
        - flat_duration * perc_dur
    )
    return PowerCosts(
        energy=round_up_tenth(raw),
        energy_raw=raw,
        training_points=total_tp,
        tp_sources=sources,
    )


# ---------------------------------------------------------------------------
# Range / area / duration text
# ---------------------------------------------------------------------------


def _find_entry(entries: list[SelectedEntry], table: PartTable, part_id: int) -> SelectedEntry | None:
    wanted = id_key(part_id)
    for entry in entries:
        if entry_part_id(entry, table) == wanted:
            return entry
    return None


def derive_range(entries: Iterable[SelectedEntry], table=None) -> str:
    entry = _find_entry(list(entries), as_table(table), PartId.POWER_RANGE)
    if entry is None:
        return "1 space"
    spaces = 3 + 3 * entry.levels[0]
    return f"{spaces} spaces"


def derive_area(entries: Iterable[SelectedEntry], table=None) -> str:
    entries = list(entries)
    table = as_table(table)
    for part_id, label in AREA_PARTS.values():
        if _find_entry(entries, table, part_id) is not None:
            return label
    return "1 target"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def derive_duration(entries: Iterable[SelectedEntry], table=None) -> str:
    entries = list(entries)
    table = as_table(table)
    if _find_entry(entries, table, PartId.DURATION_PERMANENT) is not None:
        return "Permanent"

    entry = _find_entry(entries, table, PartId.DURATION_ROUND)
    if entry is not None:
        return _plural(2 + entry.levels[0], "round")

    for part_id, ladder_key, unit in (
        (PartId.DURATION_MINUTE, "minutes", "minute"),
        (PartId.DURATION_HOUR, "hours", "hour"),
        (PartId.DURATION_DAYS, "days", "day"),
    ):
        entry = _find_entry(entries, table, part_id)
        if entry is None:
            continue
        ladder = DURATION_LADDERS[ladder_key]
        level = entry.levels[0]
        value = ladder[level] if level < len(ladder) else ladder[0]
        return _plural(value, unit)

    return "1 round"


def compute_action_type(entries: Iterable[SelectedEntry], table=None) -> str:
    return action_type_from_entries(entries, table, CreatorType.POWER)


def format_power_damage(damage: list[dict] | None) -> str:
    """First usable damage entry as ``"2d6 fire"``; empty when none."""
    if not isinstance(damage, list):
        return ""
    for dmg in damage:
        if not isinstance(dmg, dict):
            continue
        if dmg.get("amount") and dmg.get("size") and dmg.get("type") not in (None, "", "none"):
            return f"{dmg['amount']}d{dmg['size']} {dmg['type']}"
    return ""


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PowerDisplay:
    name: str
    description: str
    action_type: str
    range: str
    area: str
    duration: str
    damage: str
    energy: float
    training_points: int
    tp_sources: list[str]
    part_chips: list[PartChip]


def part_chips(entries: Iterable[SelectedEntry], table=None) -> list[PartChip]:
    table = as_table(table)
    chips = []
    for entry in entries:
        record = resolve_ref(table, entry.ref)
        if record is None:
            continue
        tp = part_training_points(record, entry.levels)
        chips.append(format_part_chip(record, entry.levels, tp))
    return chips


def derive_power_display(
    power: dict,
    table: "PartTable | Iterable[PartRecord] | None",
    entries: list[SelectedEntry] | None = None,
) -> PowerDisplay:
    """Everything a power card shows, from a saved power document.

    Pre-built ``entries`` (e.g. with mechanic parts added) replace the
    document's own parts.
    """
    table = as_table(table)
    if entries is None:
        entries = entries_from_dicts(power.get("parts") or [])
    costs = calculate_power_costs(entries, table)
    return PowerDisplay(
        name=str(power.get("name") or ""),
        description=str(power.get("description") or ""),
        action_type=compute_action_type(entries, table),
        range=derive_range(entries, table),
        area=derive_area(entries, table),
        duration=derive_duration(entries, table),
        damage=format_power_damage(power.get("damage")),
        energy=costs.energy,
        training_points=costs.training_points,
        tp_sources=costs.tp_sources,
        part_chips=part_chips(entries, table),
    )
