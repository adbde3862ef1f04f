"""Part/property reference records and the entries that select them.

Powers, techniques and items are all built from the same kind of record:
a named part with base costs and up to three optional tiers, each tier
adding a per-level delta. Powers and techniques call them parts, items
call them properties; the cost model is identical.

Records are stored flat (``base_en``, ``op_1_tp``, ...). Entries point
at a record by id, falling back to the record name for drafts saved
before ids existed.
"""

from dataclasses import dataclass, field

MAX_OPTIONS = 3

# Flat storage suffix -> PartOption attribute
_COST_KEYS = {
    "en": "energy",
    "tp": "training_points",
    "ip": "item_points",
    "c": "currency",
}


def _number(value) -> float:
    """Coerce a stored cost to float; blanks and junk count as 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _level(value) -> int:
    try:
        level = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, level)


@dataclass(slots=True)
class PartOption:
    """One optional tier: the cost added per chosen level."""
    description: str = ""
    energy: float = 0.0
    training_points: float = 0.0
    item_points: float = 0.0
    currency: float = 0.0


@dataclass(slots=True)
class PartRecord:
    """A canonical power/technique part or item property."""
    id: int | str | None
    name: str
    description: str = ""
    category: str = ""
    mechanic: bool = False      # added by the creators, not picked by users
    percentage: bool = False    # energy multiplies instead of adding
    duration: bool = False      # energy scales the duration term (powers)

    base_energy: float = 0.0
    base_training_points: float = 0.0
    base_item_points: float = 0.0
    base_currency: float = 0.0

    options: list[PartOption] = field(default_factory=list)

    def option(self, index: int) -> PartOption:
        """Tier by zero-based index; missing tiers cost nothing."""
        if 0 <= index < len(self.options):
            return self.options[index]
        return PartOption()

    @classmethod
    def from_dict(cls, data: dict) -> "PartRecord":
        """Build from the flat stored shape.

        Tiers are read from ``op_N_desc`` / ``op_N_en`` / ``op_N_tp`` /
        ``op_N_ip`` / ``op_N_c``. A tier exists when any of its keys does.
        """
        options: list[PartOption] = []
        for n in range(1, MAX_OPTIONS + 1):
            prefix = f"op_{n}_"
            if not any(key.startswith(prefix) for key in data):
                continue
            # Keep positions stable when an earlier tier is absent.
            while len(options) < n - 1:
                options.append(PartOption())
            opt = PartOption(description=str(data.get(f"{prefix}desc") or ""))
            for suffix, attr in _COST_KEYS.items():
                setattr(opt, attr, _number(data.get(prefix + suffix)))
            options.append(opt)

        return cls(
            id=data.get("id"),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or data.get("type") or ""),
            mechanic=bool(data.get("mechanic", False)),
            percentage=bool(data.get("percentage", False)),
            duration=bool(data.get("duration", False)),
            base_energy=_number(data.get("base_en")),
            base_training_points=_number(data.get("base_tp")),
            base_item_points=_number(data.get("base_ip")),
            base_currency=_number(data.get("base_c")),
            options=options,
        )


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IdRef:
    """Reference by record id.

    ``name`` is the name saved alongside the id, used only when the id no
    longer resolves.
    """
    id: int | str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class NameRef:
    """Reference by record name (legacy drafts)."""
    name: str


Ref = IdRef | NameRef


def ref_from_dict(data: dict) -> Ref | None:
    """Pick the reference out of a saved entry; None if it has neither key."""
    raw_id = data.get("id")
    name = data.get("name")
    name = str(name) if name not in (None, "") else None
    if raw_id not in (None, ""):
        return IdRef(id=raw_id, name=name)
    if name is not None:
        return NameRef(name=name)
    return None


# ---------------------------------------------------------------------------
# Selected entries
# ---------------------------------------------------------------------------


def normalize_levels(levels) -> tuple[int, int, int]:
    """Exactly three non-negative tier levels."""
    values = [_level(v) for v in list(levels or ())[:MAX_OPTIONS]]
    values.extend([0] * (MAX_OPTIONS - len(values)))
    return (values[0], values[1], values[2])


@dataclass(frozen=True, slots=True)
class UserSelectedPart:
    """A part or property the user picked."""
    ref: Ref
    levels: tuple[int, int, int] = (0, 0, 0)
    apply_duration: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", normalize_levels(self.levels))


@dataclass(frozen=True, slots=True)
class SystemDerivedModifier:
    """A part the creators add from form inputs (damage dice, range, ...).

    ``source`` names the input that produced it, e.g. ``"duration"``.
    """
    ref: Ref
    levels: tuple[int, int, int] = (0, 0, 0)
    apply_duration: bool = False
    source: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "levels", normalize_levels(self.levels))


SelectedEntry = UserSelectedPart | SystemDerivedModifier


def entry_from_dict(data: dict) -> UserSelectedPart | None:
    """Read a saved entry (``id``/``name``, ``op_N_lvl``, ``applyDuration``).

    Older drafts store levels as ``opt1Level`` etc.; those are honored
    when the newer keys are absent. Returns None when the entry carries
    no reference at all.
    """
    ref = ref_from_dict(data)
    if ref is None:
        return None
    levels = []
    for n in range(1, MAX_OPTIONS + 1):
        value = data.get(f"op_{n}_lvl")
        if value is None:
            value = data.get(f"opt{n}Level")
        levels.append(value)
    return UserSelectedPart(
        ref=ref,
        levels=normalize_levels(levels),
        apply_duration=bool(data.get("applyDuration", False)),
    )


def entries_from_dicts(items) -> list[UserSelectedPart]:
    entries = []
    for item in items or ():
        if not isinstance(item, dict):
            continue
        entry = entry_from_dict(item)
        if entry is not None:
            entries.append(entry)
    return entries
