"""Item costs, rarity and display helpers.

Items sum item points (IP), training points and a currency modifier over
their properties. Total IP picks the rarity bracket; the bracket floor
scaled by the currency modifier gives the price.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from realms_rules.calculators.costs import aggregate
from realms_rules.calculators.lookup import PartTable, as_table, find_part, id_key, resolve_ref
from realms_rules.calculators.mechanics import compute_splits, damage_option_level, entry_part_id
from realms_rules.models.constants import (
    GENERAL_PROPERTY_IDS,
    GENERAL_PROPERTY_NAMES,
    PROPERTY_NAMES,
    REQUIREMENT_PROPERTY,
    STANDARD_DIE_SIZES,
    PropertyId,
)
from realms_rules.models.parts import (
    IdRef,
    NameRef,
    PartRecord,
    SelectedEntry,
    SystemDerivedModifier,
    UserSelectedPart,
    entries_from_dicts,
)

_PROPERTY_IDS_BY_NAME = {name.lower(): int(pid) for pid, name in PROPERTY_NAMES.items()}


# ---------------------------------------------------------------------------
# Rarity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RarityBracket:
    """IP range is (previous upper bound, ip_high]; Common starts at 0."""
    name: str
    currency_floor: int
    ip_high: float


RARITY_BRACKETS: tuple[RarityBracket, ...] = (
    RarityBracket("Common", 25, 4),
    RarityBracket("Uncommon", 100, 6),
    RarityBracket("Rare", 500, 8),
    RarityBracket("Epic", 2500, 11),
    RarityBracket("Legendary", 10000, 14),
    RarityBracket("Mythic", 50000, 16),
    RarityBracket("Ascended", 100000, math.inf),
)


@dataclass(frozen=True, slots=True)
class RarityResult:
    rarity: str
    currency_cost: int


def rarity_bracket(total_ip: float) -> RarityBracket:
    """First bracket whose upper bound holds the IP (bounds are inclusive)."""
    ip = max(0.0, total_ip)
    for bracket in RARITY_BRACKETS:
        if ip <= bracket.ip_high:
            return bracket
    return RARITY_BRACKETS[-1]


def currency_cost_and_rarity(total_currency: float, total_ip: float) -> RarityResult:
    """Price = floor(max(floor, floor * (1 + 0.125 * currency)))."""
    bracket = rarity_bracket(total_ip)
    modifier = max(0.0, total_currency)
    low = bracket.currency_floor
    return RarityResult(
        rarity=bracket.name,
        currency_cost=math.floor(max(low, low * (1 + 0.125 * modifier))),
    )


# ---------------------------------------------------------------------------
# Costs
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ItemCosts:
    total_ip: float
    total_tp: float
    total_currency: float
    unresolved: list[SelectedEntry] = field(default_factory=list)


def calculate_item_costs(
    entries: Iterable[SelectedEntry], table: "PartTable | Iterable[PartRecord] | None"
) -> ItemCosts:
    result = aggregate(entries, table)
    return ItemCosts(
        total_ip=result.totals.item_points,
        total_tp=result.totals.training_points,
        total_currency=result.totals.currency,
        unresolved=[c.entry for c in result.unresolved],
    )


def is_general_property(item: PartRecord | SelectedEntry) -> bool:
    """System-derived properties (ids 1-17) are hidden from manual picks."""
    if isinstance(item, PartRecord):
        pid, name = item.id, item.name
    else:
        pid = item.ref.id if isinstance(item.ref, IdRef) else None
        name = item.ref.name
    key = id_key(pid)
    if key is not None and key.isdigit() and int(key) in GENERAL_PROPERTY_IDS:
        return True
    return bool(name) and name in GENERAL_PROPERTY_NAMES


# ---------------------------------------------------------------------------
# Property synthesis
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DamageDice:
    amount: int = 0
    size: int = 0
    type: str = "none"

    @property
    def usable(self) -> bool:
        return self.amount >= 1 and self.size in STANDARD_DIE_SIZES


@dataclass(slots=True)
class AbilityRequirement:
    ability: str
    level: int


@dataclass(slots=True)
class ItemForm:
    """Item creator inputs."""
    armament_type: str = "Weapon"
    properties: list[UserSelectedPart] = field(default_factory=list)
    # weapon
    two_handed: bool = False
    range_level: int = 0
    damage: DamageDice = field(default_factory=DamageDice)
    # armor
    damage_reduction: int = 0
    agility_reduction: int = 0
    critical_range_increase: int = 0
    # shield
    shield_amount: DamageDice = field(default_factory=DamageDice)
    shield_damage: DamageDice | None = None

    ability_requirement: AbilityRequirement | None = None


class _PropertyCollector:
    def __init__(self, table: PartTable) -> None:
        self.table = table
        self.entries: list[SelectedEntry] = []

    def add(self, property_id: int, level: int, source: str) -> None:
        record = find_part(self.table, property_id, PROPERTY_NAMES[property_id])
        if record is None:
            return
        if record.id is not None:
            ref = IdRef(id=record.id, name=record.name)
        else:
            ref = NameRef(name=record.name)
        self.entries.append(SystemDerivedModifier(ref=ref, levels=(level, 0, 0), source=source))


def build_item_properties(
    form: ItemForm, table: "PartTable | Iterable[PartRecord] | None"
) -> list[SelectedEntry]:
    """User-picked properties followed by the ones the form implies."""
    out = _PropertyCollector(as_table(table))
    out.entries.extend(form.properties)
    armament = form.armament_type

    if armament == "Weapon":
        if form.two_handed:
            out.add(PropertyId.TWO_HANDED, 0, "two_handed")
        if form.range_level > 0:
            out.add(PropertyId.RANGE, form.range_level - 1, "range")
        dmg = form.damage
        if dmg.type != "none" and dmg.usable:
            out.add(PropertyId.WEAPON_DAMAGE, damage_option_level(dmg.amount, dmg.size), "damage")
            splits = compute_splits(dmg.amount, dmg.size)
            if splits > 0:
                out.add(PropertyId.SPLIT_DAMAGE_DICE, splits - 1, "damage")

    elif armament == "Armor":
        out.add(PropertyId.ARMOR_BASE, 0, "armor")
        if form.damage_reduction > 0:
            out.add(PropertyId.DAMAGE_REDUCTION, form.damage_reduction - 1, "armor")
        if form.agility_reduction > 0:
            out.add(PropertyId.AGILITY_REDUCTION, form.agility_reduction - 1, "armor")
        if form.critical_range_increase > 0:
            out.add(PropertyId.CRITICAL_RANGE_PLUS_1, form.critical_range_increase - 1, "armor")

    elif armament == "Shield":
        out.add(PropertyId.SHIELD_BASE, 0, "shield")
        amount = form.shield_amount
        if amount.usable:
            out.add(PropertyId.SHIELD_AMOUNT, damage_option_level(amount.amount, amount.size), "shield")
        bash = form.shield_damage
        if bash is not None and bash.usable:
            out.add(PropertyId.SHIELD_DAMAGE, damage_option_level(bash.amount, bash.size), "shield")

    req = form.ability_requirement
    if req is not None and req.level > 0:
        # Shields use the weapon requirement properties.
        kind = "Armor" if armament == "Armor" else "Weapon"
        property_id = REQUIREMENT_PROPERTY.get((kind, req.ability.strip().lower()))
        if property_id is not None:
            # Kept even when the table lacks it, so the draft flags it.
            out.entries.append(
                SystemDerivedModifier(
                    ref=IdRef(id=int(property_id), name=PROPERTY_NAMES[property_id]),
                    levels=(req.level - 1, 0, 0),
                    source="requirement",
                )
            )

    return out.entries


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def _find_property(entries: list[SelectedEntry], table: PartTable, property_id: int) -> SelectedEntry | None:
    wanted = id_key(property_id)
    for entry in entries:
        if entry_part_id(entry, table, _PROPERTY_IDS_BY_NAME) == wanted:
            return entry
    return None


def format_range(entries: Iterable[SelectedEntry], table=None) -> str:
    entry = _find_property(list(entries), as_table(table), PropertyId.RANGE)
    if entry is None:
        return "Melee"
    return f"{8 + 8 * entry.levels[0]} Spaces"


def damage_reduction(entries: Iterable[SelectedEntry], table=None) -> int:
    entry = _find_property(list(entries), as_table(table), PropertyId.DAMAGE_REDUCTION)
    if entry is None:
        return 0
    return 1 + entry.levels[0]


def format_damage(damage: list[dict] | None) -> str:
    """All usable damage entries, e.g. ``"1d8 slashing, 1d4 fire"``."""
    if not isinstance(damage, list):
        return ""
    parts = []
    for dmg in damage:
        if not isinstance(dmg, dict):
            continue
        if dmg.get("amount") and dmg.get("size") and dmg.get("type") not in (None, "", "none"):
            parts.append(f"{dmg['amount']}d{dmg['size']} {dmg['type']}")
    return ", ".join(parts)


def weapon_tp_display(total_tp: float) -> float:
    """Training points shown for a weapon; negative totals show as 0."""
    return max(0, total_tp)


@dataclass(slots=True)
class Proficiency:
    """A property that costs training points to use the item."""
    id: int | str | None
    name: str
    level: int
    base_tp: float
    option_tp: float
    description: str = ""

    @property
    def total_tp(self) -> float:
        return self.base_tp + self.option_tp


def extract_proficiencies(entries: Iterable[SelectedEntry], table=None) -> list[Proficiency]:
    table = as_table(table)
    profs = []
    for entry in entries:
        record = resolve_ref(table, entry.ref)
        if record is None:
            continue
        level = entry.levels[0]
        option_tp = record.option(0).training_points * level if level > 0 else 0.0
        prof = Proficiency(
            id=record.id,
            name=record.name,
            level=level,
            base_tp=record.base_training_points,
            option_tp=option_tp,
            description=record.description,
        )
        if prof.total_tp > 0:
            profs.append(prof)
    return profs


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def format_proficiency_chip(prof: Proficiency) -> str:
    text = prof.name
    if prof.level > 0:
        text += f" (Level {prof.level})"
    if prof.total_tp > 0:
        text += f" | TP: {_fmt(prof.base_tp)}"
        if prof.option_tp > 0:
            text += f" + {_fmt(prof.option_tp)}"
    return text


@dataclass(slots=True)
class ItemDisplay:
    name: str
    armament_type: str
    description: str
    rarity: str
    currency_cost: int
    total_ip: float
    total_tp: float
    total_currency: float
    range: str
    damage: str
    damage_reduction: int
    proficiencies: list[Proficiency]
    not_found: list[str] = field(default_factory=list)


def derive_item_display(
    item: dict,
    table: "PartTable | Iterable[PartRecord] | None",
    entries: list[SelectedEntry] | None = None,
) -> ItemDisplay:
    """Everything an item card shows, from a saved item document.

    Pre-built ``entries`` (see build_item_properties) replace the
    document's own properties.
    """
    table = as_table(table)
    if entries is None:
        entries = entries_from_dicts(item.get("properties") or [])
    costs = calculate_item_costs(entries, table)
    price = currency_cost_and_rarity(costs.total_currency, costs.total_ip)
    armament = str(item.get("armamentType") or "Weapon")
    total_tp = weapon_tp_display(costs.total_tp) if armament == "Weapon" else costs.total_tp
    return ItemDisplay(
        name=str(item.get("name") or ""),
        armament_type=armament,
        description=str(item.get("description") or ""),
        rarity=price.rarity,
        currency_cost=price.currency_cost,
        total_ip=costs.total_ip,
        total_tp=total_tp,
        total_currency=costs.total_currency,
        range=format_range(entries, table),
        damage=format_damage(item.get("damage")),
        damage_reduction=damage_reduction(entries, table),
        proficiencies=extract_proficiencies(entries, table),
        not_found=[e.ref.name or str(getattr(e.ref, "id", "")) for e in costs.unresolved],
    )
