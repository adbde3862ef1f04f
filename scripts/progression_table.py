"""Print level budgets for players or creatures.

Usage examples:
    python -m scripts.progression_table --to 10
    python -m scripts.progression_table --kind creature --from 0.5 --to 5 --ability 3
    python -m scripts.progression_table --to 20 --rules-file core_rules.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any

from realms_rules.models.constants import EntityKind
from realms_rules.models.core_rules import CoreRules
from realms_rules.models.progression import (
    CreatureProgression,
    PlayerProgression,
    creature_progression,
    player_progression,
)

logger = logging.getLogger(__name__)


def _parse_level(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid level")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    raise ValueError(f"Expected a level, got: {value!r}")


def _levels(start: float, stop: float) -> list[float]:
    """Whole levels from start to stop, keeping a fractional start."""
    if stop < start:
        raise ValueError(f"--to ({stop}) is below --from ({start})")
    levels: list[float] = []
    if start < 1:
        levels.append(start)
        start = 1
    lvl = math.ceil(start)
    while lvl <= stop:
        levels.append(lvl)
        lvl += 1
    return levels


def build_table(
    kind: str, start: float, stop: float, ability: int, rules: CoreRules
) -> list[PlayerProgression | CreatureProgression]:
    build = creature_progression if kind == EntityKind.CREATURE else player_progression
    return [build(level, ability, rules) for level in _levels(start, stop)]


def _render_text(rows: list[PlayerProgression | CreatureProgression]) -> str:
    if not rows:
        return "(no levels)"
    columns = list(asdict(rows[0]).keys())
    lines = ["  ".join(f"{c:>18}" for c in columns)]
    for row in rows:
        values = asdict(row)
        lines.append("  ".join(f"{values[c]!s:>18}" for c in columns))
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print progression budgets per level")
    parser.add_argument(
        "--kind",
        choices=[k.value.lower() for k in EntityKind],
        default="player",
        help="Progression table to use.",
    )
    parser.add_argument("--from", dest="start", type=_parse_level, default=1, help="First level.")
    parser.add_argument("--to", dest="stop", type=_parse_level, default=10, help="Last level.")
    parser.add_argument(
        "--ability",
        type=int,
        default=0,
        help="Archetype (player) or highest non-vitality (creature) ability.",
    )
    parser.add_argument("--rules-file", type=Path, help="Core rules JSON document.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.rules_file is not None:
        logger.info("Loading core rules from %s", args.rules_file)
        rules = CoreRules.from_json(args.rules_file)
    else:
        rules = CoreRules.defaults()

    kind = EntityKind(args.kind.upper())
    rows = build_table(kind, args.start, args.stop, args.ability, rules)

    if args.json:
        print(json.dumps([asdict(row) for row in rows], indent=2))
        return
    print(_render_text(rows))


if __name__ == "__main__":
    main()
