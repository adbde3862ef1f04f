"""Mechanic synthesis: turn creator form inputs into implicit entries.

The power and technique creators add parts for action type, damage
dice, range, area, duration and weapon attack on the user's behalf.
Each becomes a ``SystemDerivedModifier`` before the generic cost pass.
Only records flagged ``mechanic`` are emitted; a table without the part
simply yields no entry.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from realms_rules.calculators.lookup import PartTable, as_table, find_part, id_key, resolve_ref
from realms_rules.models.constants import (
    ACTION_SELECTIONS,
    AREA_PARTS,
    DURATION_LADDERS,
    DURATION_PARTS,
    PART_NAMES,
    POWER_DAMAGE_PARTS,
    STANDARD_DIE_SIZES,
    PartId,
)
from realms_rules.models.parts import (
    IdRef,
    NameRef,
    PartRecord,
    SelectedEntry,
    SystemDerivedModifier,
)

# No stable id in the hosted table; resolved by name only.
POWER_SPLIT_DAMAGE_DICE_NAME = "Power Split Damage Dice"


class CreatorType(StrEnum):
    POWER = "power"
    TECHNIQUE = "technique"
    EMPOWERED = "empowered"


@dataclass(frozen=True, slots=True)
class ActionParts:
    reaction: int
    quick_or_free: int
    long: int


POWER_ACTION_PARTS = ActionParts(
    reaction=PartId.POWER_REACTION,
    quick_or_free=PartId.POWER_QUICK_OR_FREE_ACTION,
    long=PartId.POWER_LONG_ACTION,
)
TECHNIQUE_ACTION_PARTS = ActionParts(
    reaction=PartId.REACTION,
    quick_or_free=PartId.QUICK_OR_FREE_ACTION,
    long=PartId.LONG_ACTION,
)


def action_parts(creator: CreatorType | str) -> ActionParts:
    # Empowered techniques reuse the technique action parts.
    if creator == CreatorType.POWER:
        return POWER_ACTION_PARTS
    return TECHNIQUE_ACTION_PARTS


# ---------------------------------------------------------------------------
# Level formulas
# ---------------------------------------------------------------------------


def damage_option_level(dice_amount: int, die_size: int) -> int:
    """Option level for damage: floor((n*s - 4) / 2), never below 0."""
    return max(0, math.floor((dice_amount * die_size - 4) / 2))


def compute_splits(dice_amount: int, die_size: int) -> int:
    """How many dice exceed the minimum needed using d12s.

    Only standard die sizes split, and a single die never does.
    """
    if die_size not in STANDARD_DIE_SIZES or dice_amount <= 1:
        return 0
    min_dice_using_d12 = math.ceil(dice_amount * die_size / 12)
    return max(0, dice_amount - min_dice_using_d12)


def duration_option_level(duration_type: str, value: int) -> int | None:
    """Option level for a duration base part, or None when no part applies.

    Rounds only cost something past the first round. Ladder values not on
    the ladder fall back to the first rung.
    """
    if duration_type == "rounds":
        if value > 1:
            return max(0, value - 2)
        return None
    if duration_type == "permanent":
        return 0
    ladder = DURATION_LADDERS.get(duration_type)
    if ladder is None:
        return None
    try:
        return ladder.index(value)
    except ValueError:
        return 0


# ---------------------------------------------------------------------------
# Form inputs
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ActionConfig:
    type: str = "basic"        # basic | quick | free | long3 | long4
    reaction: bool = False


@dataclass(slots=True)
class DamageConfig:
    dice_amount: int = 0
    die_size: int = 0
    type: str = "none"         # damage type; unused for techniques
    apply_duration: bool = False


@dataclass(slots=True)
class RangeConfig:
    steps: int = 0             # 0 = adjacent, free
    apply_duration: bool = False


@dataclass(slots=True)
class AreaConfig:
    shape: str = "none"        # none | sphere | cylinder | cone | line | trail
    level: int = 1             # 1 = base size
    apply_duration: bool = False


@dataclass(slots=True)
class DurationConfig:
    type: str = "instant"      # instant | rounds | minutes | hours | days | permanent
    value: int = 1
    apply_duration: bool = False
    focus: bool = False
    no_harm: bool = False
    ends_on_activation: bool = False
    sustain: int = 0


@dataclass(slots=True)
class MechanicContext:
    creator: CreatorType = CreatorType.POWER
    action: ActionConfig | None = None
    power_damage: list[DamageConfig] = field(default_factory=list)
    technique_damage: DamageConfig | None = None
    range: RangeConfig | None = None
    area: AreaConfig | None = None
    duration: DurationConfig | None = None
    weapon_tp: int | None = None


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class _Collector:
    def __init__(self, table: PartTable, supports_duration: bool) -> None:
        self.table = table
        self.supports_duration = supports_duration
        self.entries: list[SystemDerivedModifier] = []

    def add(
        self,
        record: PartRecord | None,
        level: int,
        source: str,
        apply_duration: bool = False,
    ) -> None:
        if record is None or not record.mechanic:
            return
        if record.id is not None:
            ref = IdRef(id=record.id, name=record.name)
        else:
            ref = NameRef(name=record.name)
        self.entries.append(
            SystemDerivedModifier(
                ref=ref,
                levels=(level, 0, 0),
                apply_duration=apply_duration and self.supports_duration,
                source=source,
            )
        )

    def add_part(self, part_id: int, level: int, source: str, apply_duration: bool = False) -> None:
        self.add(find_part(self.table, part_id, PART_NAMES[part_id]), level, source, apply_duration)


def _add_action(out: _Collector, creator: CreatorType, action: ActionConfig) -> None:
    ids = action_parts(creator)
    if action.reaction:
        out.add_part(ids.reaction, 0, "action")
    _, level = ACTION_SELECTIONS.get(action.type, ("Basic", None))
    if level is None:
        return
    if action.type in ("quick", "free"):
        out.add_part(ids.quick_or_free, level, "action")
    else:
        out.add_part(ids.long, level, "action")


def _add_power_damage(out: _Collector, damage: list[DamageConfig]) -> None:
    total_dice = 0
    max_die = 0
    for dmg in damage:
        if dmg.type == "none" or dmg.dice_amount <= 0 or dmg.die_size < 4:
            continue
        part_id = POWER_DAMAGE_PARTS.get(dmg.type.lower())
        if part_id is None:
            continue
        level = damage_option_level(dmg.dice_amount, dmg.die_size)
        out.add_part(part_id, level, "damage", dmg.apply_duration)
        total_dice += dmg.dice_amount
        max_die = max(max_die, dmg.die_size)

    splits = compute_splits(total_dice, max_die)
    if splits > 0:
        apply = any(d.apply_duration for d in damage)
        record = resolve_ref(out.table, NameRef(POWER_SPLIT_DAMAGE_DICE_NAME))
        out.add(record, splits - 1, "damage", apply)


def _add_technique_damage(out: _Collector, dmg: DamageConfig) -> None:
    if dmg.dice_amount <= 0 or dmg.die_size < 4:
        return
    out.add_part(PartId.ADDITIONAL_DAMAGE, damage_option_level(dmg.dice_amount, dmg.die_size), "damage")
    splits = compute_splits(dmg.dice_amount, dmg.die_size)
    if splits > 0:
        out.add_part(PartId.SPLIT_DAMAGE_DICE, splits - 1, "damage")


def _add_duration(out: _Collector, duration: DurationConfig) -> None:
    if duration.focus:
        out.add_part(PartId.DURATION_FOCUS, 0, "duration")
    if duration.no_harm:
        out.add_part(PartId.DURATION_NO_HARM, 0, "duration")
    if duration.ends_on_activation:
        out.add_part(PartId.DURATION_ENDS_ON_ACTIVATION, 0, "duration")
    if duration.sustain > 0:
        out.add_part(PartId.DURATION_SUSTAIN, duration.sustain - 1, "duration")

    part_id = DURATION_PARTS.get(duration.type)
    level = duration_option_level(duration.type, duration.value)
    if part_id is not None and level is not None:
        out.add_part(part_id, level, "duration", duration.apply_duration)


def build_mechanic_entries(
    ctx: MechanicContext, table: "PartTable | Iterable[PartRecord] | None"
) -> list[SystemDerivedModifier]:
    """Implicit entries for a power, technique or empowered technique."""
    creator = CreatorType(ctx.creator)
    out = _Collector(as_table(table), supports_duration=creator != CreatorType.TECHNIQUE)

    if ctx.action is not None:
        _add_action(out, creator, ctx.action)

    if ctx.power_damage:
        _add_power_damage(out, ctx.power_damage)

    if ctx.technique_damage is not None:
        _add_technique_damage(out, ctx.technique_damage)

    if ctx.range is not None and ctx.range.steps > 0:
        out.add_part(PartId.POWER_RANGE, ctx.range.steps - 1, "range", ctx.range.apply_duration)

    if ctx.area is not None and ctx.area.shape in AREA_PARTS:
        part_id, _ = AREA_PARTS[ctx.area.shape]
        out.add_part(part_id, max(0, ctx.area.level - 1), "area", ctx.area.apply_duration)

    if ctx.duration is not None and ctx.duration.type != "instant":
        _add_duration(out, ctx.duration)

    if ctx.weapon_tp is not None and ctx.weapon_tp >= 1:
        out.add_part(PartId.ADD_WEAPON_ATTACK, ctx.weapon_tp - 1, "weapon")

    return out.entries


# ---------------------------------------------------------------------------
# Action type text
# ---------------------------------------------------------------------------


def action_type_text(base: str, reaction: bool) -> str:
    return f"{base} Reaction" if reaction else f"{base} Action"


def action_type_from_selection(selection: str, reaction: bool) -> str:
    """Display text for a saved selector value such as ``"long3"``."""
    base, _ = ACTION_SELECTIONS.get(selection, ("Basic", None))
    return action_type_text(base, reaction)


_QUICK_FREE_TEXT = {0: "Quick", 1: "Free"}
_LONG_TEXT = {0: "Long (3)", 1: "Long (4)"}

_PART_IDS_BY_NAME = {name.lower(): int(pid) for pid, name in PART_NAMES.items()}


def entry_part_id(
    entry: SelectedEntry,
    table: "PartTable | Iterable[PartRecord] | None",
    names_to_ids: dict[str, int] | None = None,
) -> str | None:
    """Comparable id of the part an entry points at.

    Uses the resolved record when there is one, otherwise the entry's own
    id, otherwise the well-known id for its name.
    """
    record = resolve_ref(table, entry.ref)
    if record is not None and id_key(record.id) is not None:
        return id_key(record.id)
    if isinstance(entry.ref, IdRef):
        return id_key(entry.ref.id)
    names_to_ids = _PART_IDS_BY_NAME if names_to_ids is None else names_to_ids
    part_id = names_to_ids.get((entry.ref.name or "").strip().lower())
    return id_key(part_id)


def action_type_from_entries(
    entries: Iterable[SelectedEntry],
    table: "PartTable | Iterable[PartRecord] | None",
    creator: CreatorType | str,
) -> str:
    """Display text derived from the action parts present in an entry list."""
    ids = action_parts(creator)
    table = as_table(table)
    base = "Basic"
    reaction = False
    for entry in entries:
        part_id = entry_part_id(entry, table)
        level = entry.levels[0]
        if part_id == id_key(ids.reaction):
            reaction = True
        elif part_id == id_key(ids.quick_or_free):
            base = _QUICK_FREE_TEXT.get(level, base)
        elif part_id == id_key(ids.long):
            base = _LONG_TEXT.get(level, base)
    return action_type_text(base, reaction)
