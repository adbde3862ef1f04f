"""Technique costs and display text.

Technique energy is the sum of the plain parts times the product of the
percentage parts. Additional Damage floors its first-tier training
points before the part total is floored.
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
from realms_rules.calculators.lookup import PartTable, as_table, id_key, name_key, resolve_ref
from realms_rules.calculators.mechanics import (
    CreatorType,
    action_type_from_entries,
    action_type_from_selection,
)
from realms_rules.models.constants import PART_NAMES, PartId
from realms_rules.models.parts import PartRecord, SelectedEntry, entries_from_dicts


def _is_additional_damage(record: PartRecord) -> bool:
    return (
        id_key(record.id) == id_key(PartId.ADDITIONAL_DAMAGE)
        or name_key(record.name) == name_key(PART_NAMES[PartId.ADDITIONAL_DAMAGE])
    )


def technique_part_tp(record: PartRecord, levels: tuple[int, int, int]) -> int:
    return part_training_points(record, levels, floor_first_option=_is_additional_damage(record))


@dataclass(slots=True)
class TechniqueCosts:
    energy: float
    energy_raw: float
    training_points: int
    tp_sources: list[str] = field(default_factory=list)


def calculate_technique_costs(
    entries: Iterable[SelectedEntry], table: "PartTable | Iterable[PartRecord] | None"
) -> TechniqueCosts:
    table = as_table(table)
    sum_flat = 0.0
    product_percentage = 1.0
    total_tp = 0
    sources: list[str] = []

    for entry in entries:
        record = resolve_ref(table, entry.ref)
        if record is None:
            continue
        energy = record_cost(record, entry.levels).energy
        if record.percentage:
            product_percentage *= energy
        else:
            sum_flat += energy

        tp = technique_part_tp(record, entry.levels)
        if tp > 0:
            sources.append(tp_source(tp, record.name, entry.levels))
        total_tp += tp

    raw = sum_flat * product_percentage
    return TechniqueCosts(
        energy=round_up_tenth(raw),
        energy_raw=raw,
        training_points=total_tp,
        tp_sources=sources,
    )


def compute_action_type(entries: Iterable[SelectedEntry], table=None) -> str:
    return action_type_from_entries(entries, table, CreatorType.TECHNIQUE)


def format_technique_damage(damage: dict | None) -> str:
    """``"+2d6"``; empty when amount or size is missing or zero."""
    if not isinstance(damage, dict):
        return ""
    amount = damage.get("amount")
    size = damage.get("size")
    if not amount or not size or str(amount) == "0" or str(size) == "0":
        return ""
    return f"+{amount}d{size}"


def weapon_name(weapon: dict | None) -> str:
    if not isinstance(weapon, dict):
        return "Unarmed"
    if weapon.get("name"):
        return str(weapon["name"])
    if weapon.get("id") not in (None, "", 0):
        return f"Weapon #{weapon['id']}"
    return "Unarmed"


@dataclass(slots=True)
class TechniqueDisplay:
    name: str
    description: str
    weapon_name: str
    action_type: str
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
        chips.append(format_part_chip(record, entry.levels, technique_part_tp(record, entry.levels)))
    return chips


def derive_technique_display(
    technique: dict,
    table: "PartTable | Iterable[PartRecord] | None",
    entries: list[SelectedEntry] | None = None,
) -> TechniqueDisplay:
    """Everything a technique card shows, from a saved technique document.

    A saved ``actionType`` selector wins over the action parts. Pre-built
    ``entries`` replace the document's own parts.
    """
    table = as_table(table)
    if entries is None:
        entries = entries_from_dicts(technique.get("parts") or [])
    costs = calculate_technique_costs(entries, table)

    saved_action = technique.get("actionType")
    if saved_action:
        action = action_type_from_selection(str(saved_action), bool(technique.get("isReaction")))
    else:
        action = compute_action_type(entries, table)

    return TechniqueDisplay(
        name=str(technique.get("name") or ""),
        description=str(technique.get("description") or ""),
        weapon_name=weapon_name(technique.get("weapon")),
        action_type=action,
        damage=format_technique_damage(technique.get("damage")),
        energy=costs.energy,
        training_points=costs.training_points,
        tp_sources=costs.tp_sources,
        part_chips=part_chips(entries, table),
    )
