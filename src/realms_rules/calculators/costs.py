"""Generic cost aggregation over selected entries.

Each resolved entry contributes ``base + delta_i * level_i`` per cost
dimension, summed independently across its three tiers. Unresolved
entries contribute nothing and are reported with ``found=False``.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from realms_rules.calculators.lookup import PartTable, as_table, resolve_ref
from realms_rules.models.parts import PartRecord, SelectedEntry, SystemDerivedModifier

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CostTotals:
    energy: float = 0.0
    training_points: float = 0.0
    item_points: float = 0.0
    currency: float = 0.0

    def add(self, other: "CostTotals") -> None:
        self.energy += other.energy
        self.training_points += other.training_points
        self.item_points += other.item_points
        self.currency += other.currency


@dataclass(slots=True)
class PartContribution:
    """What a single entry adds to the totals."""
    entry: SelectedEntry
    record: PartRecord | None
    cost: CostTotals = field(default_factory=CostTotals)

    @property
    def found(self) -> bool:
        return self.record is not None

    @property
    def name(self) -> str:
        if self.record is not None:
            return self.record.name
        return self.entry.ref.name or f"#{getattr(self.entry.ref, 'id', '?')}"


@dataclass(slots=True)
class Aggregate:
    totals: CostTotals
    contributions: list[PartContribution]

    @property
    def unresolved(self) -> list[PartContribution]:
        return [c for c in self.contributions if not c.found]

    @property
    def derived(self) -> list[PartContribution]:
        return [c for c in self.contributions if isinstance(c.entry, SystemDerivedModifier)]


def record_cost(record: PartRecord, levels: tuple[int, int, int]) -> CostTotals:
    """Raw (unfloored) cost of one record at the given tier levels."""
    cost = CostTotals(
        energy=record.base_energy,
        training_points=record.base_training_points,
        item_points=record.base_item_points,
        currency=record.base_currency,
    )
    for index, level in enumerate(levels):
        if not level:
            continue
        opt = record.option(index)
        cost.energy += opt.energy * level
        cost.training_points += opt.training_points * level
        cost.item_points += opt.item_points * level
        cost.currency += opt.currency * level
    return cost


def contribution(entry: SelectedEntry, table: "PartTable | Iterable[PartRecord] | None") -> PartContribution:
    record = resolve_ref(table, entry.ref)
    if record is None:
        return PartContribution(entry=entry, record=None)
    return PartContribution(entry=entry, record=record, cost=record_cost(record, entry.levels))


def aggregate(
    entries: Iterable[SelectedEntry], table: "PartTable | Iterable[PartRecord] | None"
) -> Aggregate:
    """Sum every entry's contribution. Pure; the inputs are not modified."""
    table = as_table(table)
    totals = CostTotals()
    contributions: list[PartContribution] = []
    for entry in entries:
        item = contribution(entry, table)
        contributions.append(item)
        totals.add(item.cost)

    missing = sum(1 for c in contributions if not c.found)
    if missing:
        logger.debug("%d of %d entries did not resolve", missing, len(contributions))
    return Aggregate(totals=totals, contributions=contributions)


# ---------------------------------------------------------------------------
# Training point breakdown and chips (shared by powers and techniques)
# ---------------------------------------------------------------------------


def option_suffix(levels: tuple[int, int, int]) -> str:
    return "".join(f" (Opt{n} {lvl})" for n, lvl in enumerate(levels, start=1) if lvl > 0)


def part_training_points(
    record: PartRecord, levels: tuple[int, int, int], floor_first_option: bool = False
) -> int:
    """Training points of one part, floored.

    With ``floor_first_option`` the first tier's contribution is floored
    on its own before the sum is floored.
    """
    first = record.option(0).training_points * levels[0]
    if floor_first_option:
        first = math.floor(first)
    raw = (
        record.base_training_points
        + first
        + record.option(1).training_points * levels[1]
        + record.option(2).training_points * levels[2]
    )
    return math.floor(raw)


def tp_source(tp: int, name: str, levels: tuple[int, int, int]) -> str:
    """e.g. ``"3 TP: Power Range (Opt1 2)"``."""
    return f"{tp} TP: {name}{option_suffix(levels)}"


@dataclass(slots=True)
class PartChip:
    text: str
    description: str
    final_tp: int

    @property
    def has_tp(self) -> bool:
        return self.final_tp > 0


def format_part_chip(record: PartRecord, levels: tuple[int, int, int], final_tp: int) -> PartChip:
    text = record.name + option_suffix(levels)
    if final_tp > 0:
        text += f" | TP: {final_tp}"
    return PartChip(text=text, description=record.description, final_tp=final_tp)


def round_up_tenth(value: float) -> float:
    """Round up to one decimal place: 3.22 -> 3.3, 3.3 -> 3.3."""
    # 10 places absorbs float noise like 0.30000000000000004
    return math.ceil(round(value * 10, 10)) / 10
