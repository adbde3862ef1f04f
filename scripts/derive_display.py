"""Compute costs and card text for a saved item, power or technique.

Usage examples:
    python -m scripts.derive_display item --table-file properties.json --doc-file sword.json
    python -m scripts.derive_display power --table-file parts.json --doc-json '{"parts":[{"id":292,"op_1_lvl":2}]}'
    python -m scripts.derive_display technique --table-file parts.json --doc-file strike.json --form-file form.json --json

With ``--form-*`` the creator inputs (damage dice, range, duration, ...)
are turned into mechanic parts and added to the document's own parts.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from realms_rules.calculators.item_calc import (
    AbilityRequirement,
    DamageDice,
    ItemForm,
    build_item_properties,
    derive_item_display,
    format_proficiency_chip,
)
from realms_rules.calculators.lookup import PartTable
from realms_rules.calculators.mechanics import (
    ActionConfig,
    AreaConfig,
    CreatorType,
    DamageConfig,
    DurationConfig,
    MechanicContext,
    RangeConfig,
    build_mechanic_entries,
)
from realms_rules.calculators.power_calc import derive_power_display
from realms_rules.calculators.technique_calc import derive_technique_display
from realms_rules.models.parts import SelectedEntry, entries_from_dicts

logger = logging.getLogger(__name__)


def _parse_int_like(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError("bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Expected integer-like value, got: {value!r}")


def _load_json_arg(raw_json: str | None, file_path: Path | None) -> Any:
    if raw_json is not None:
        return json.loads(raw_json)
    if file_path is not None:
        return json.loads(file_path.read_text())
    return None


def _load_object(raw_json: str | None, file_path: Path | None) -> dict[str, Any]:
    payload = _load_json_arg(raw_json, file_path)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")
    return payload


def _table_from_payload(payload: Any) -> PartTable:
    """Accept a list of records, or an object holding one under a known key.

    Objects keyed by record id (the hosted table export shape) are read
    as their values, with the key filling in a missing "id".
    """
    if isinstance(payload, dict):
        for key in ("parts", "properties", "records"):
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
        else:
            payload = [
                {"id": key, **row} if isinstance(row, dict) else row
                for key, row in payload.items()
            ]
    if not isinstance(payload, list):
        raise ValueError("Reference table must be a JSON list or object")
    return PartTable.from_dicts(row for row in payload if isinstance(row, dict))


def _dice_from_dict(data: Any) -> DamageDice:
    if not isinstance(data, dict):
        return DamageDice()
    return DamageDice(
        amount=_parse_int_like(data.get("amount")),
        size=_parse_int_like(data.get("size")),
        type=str(data.get("type") or "none"),
    )


def _item_form_from_dict(data: dict[str, Any], doc: dict[str, Any]) -> ItemForm:
    requirement = None
    req_raw = data.get("abilityRequirement")
    if isinstance(req_raw, dict) and req_raw.get("ability"):
        requirement = AbilityRequirement(
            ability=str(req_raw["ability"]),
            level=_parse_int_like(req_raw.get("level")),
        )
    shield_damage = data.get("shieldDamage")
    return ItemForm(
        armament_type=str(doc.get("armamentType") or data.get("armamentType") or "Weapon"),
        properties=entries_from_dicts(doc.get("properties") or []),
        two_handed=bool(data.get("twoHanded", False)),
        range_level=_parse_int_like(data.get("rangeLevel")),
        damage=_dice_from_dict(data.get("damage")),
        damage_reduction=_parse_int_like(data.get("damageReduction")),
        agility_reduction=_parse_int_like(data.get("agilityReduction")),
        critical_range_increase=_parse_int_like(data.get("criticalRangeIncrease")),
        shield_amount=_dice_from_dict(data.get("shieldAmount")),
        shield_damage=_dice_from_dict(shield_damage) if shield_damage else None,
        ability_requirement=requirement,
    )


def _damage_config(data: dict[str, Any]) -> DamageConfig:
    return DamageConfig(
        dice_amount=_parse_int_like(data.get("amount")),
        die_size=_parse_int_like(data.get("size")),
        type=str(data.get("type") or "none"),
        apply_duration=bool(data.get("applyDuration", False)),
    )


def _mechanic_context_from_dict(creator: CreatorType, data: dict[str, Any]) -> MechanicContext:
    ctx = MechanicContext(
        creator=creator,
        action=ActionConfig(
            type=str(data.get("actionType") or "basic"),
            reaction=bool(data.get("reaction", False)),
        ),
    )
    damage = data.get("damage")
    if creator == CreatorType.POWER:
        if isinstance(damage, dict):
            damage = [damage]
        if isinstance(damage, list):
            ctx.power_damage = [_damage_config(d) for d in damage if isinstance(d, dict)]
    elif isinstance(damage, dict):
        ctx.technique_damage = _damage_config(damage)

    if "range" in data:
        ctx.range = RangeConfig(
            steps=_parse_int_like(data.get("range")),
            apply_duration=bool(data.get("rangeApplyDuration", False)),
        )
    area = data.get("area")
    if isinstance(area, dict):
        ctx.area = AreaConfig(
            shape=str(area.get("type") or "none"),
            level=_parse_int_like(area.get("level"), default=1),
            apply_duration=bool(area.get("applyDuration", False)),
        )
    duration = data.get("duration")
    if isinstance(duration, dict):
        ctx.duration = DurationConfig(
            type=str(duration.get("type") or "instant"),
            value=_parse_int_like(duration.get("value"), default=1),
            apply_duration=bool(duration.get("applyDuration", False)),
            focus=bool(duration.get("focus", False)),
            no_harm=bool(duration.get("noHarm", False)),
            ends_on_activation=bool(duration.get("endsOnActivation", False)),
            sustain=_parse_int_like(duration.get("sustain")),
        )
    if "weaponTP" in data:
        ctx.weapon_tp = _parse_int_like(data.get("weaponTP"))
    return ctx


def derive(
    kind: str, doc: dict[str, Any], table: PartTable, form: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Display data for one document as a JSON-ready dict."""
    entries: list[SelectedEntry] | None = None
    if kind == "item":
        if form is not None:
            entries = build_item_properties(_item_form_from_dict(form, doc), table)
        display = derive_item_display(doc, table, entries)
        payload = asdict(display)
        payload["proficiency_chips"] = [format_proficiency_chip(p) for p in display.proficiencies]
        return payload

    creator = CreatorType(kind)
    if form is not None:
        entries = list(entries_from_dicts(doc.get("parts") or []))
        entries.extend(build_mechanic_entries(_mechanic_context_from_dict(creator, form), table))
        logger.debug("Added %d mechanic parts", len(entries) - len(doc.get("parts") or []))
    if creator == CreatorType.POWER:
        return asdict(derive_power_display(doc, table, entries))
    return asdict(derive_technique_display(doc, table, entries))


def _render_text(payload: dict[str, Any]) -> str:
    lines = []
    for key, value in payload.items():
        if isinstance(value, list):
            lines.append(f"{key}:")
            for item in value:
                text = item.get("text") or item.get("name") if isinstance(item, dict) else item
                lines.append(f"  - {text}")
        else:
            lines.append(f"{key}: {value}")
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Derive costs and display text")
    parser.add_argument("kind", choices=["item", "power", "technique"])

    table_group = parser.add_mutually_exclusive_group(required=True)
    table_group.add_argument("--table-file", type=Path, help="Parts/properties JSON file.")
    table_group.add_argument("--table-json", type=str, help="Inline parts/properties JSON.")

    doc_group = parser.add_mutually_exclusive_group(required=True)
    doc_group.add_argument("--doc-file", type=Path, help="Saved document JSON file.")
    doc_group.add_argument("--doc-json", type=str, help="Inline saved document JSON object.")

    form_group = parser.add_mutually_exclusive_group(required=False)
    form_group.add_argument("--form-file", type=Path, help="Creator inputs JSON file.")
    form_group.add_argument("--form-json", type=str, help="Inline creator inputs JSON object.")

    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    table = _table_from_payload(_load_json_arg(args.table_json, args.table_file))
    doc = _load_object(args.doc_json, args.doc_file)
    form = None
    if args.form_json is not None or args.form_file is not None:
        form = _load_object(args.form_json, args.form_file)

    payload = derive(args.kind, doc, table, form)
    if args.json:
        print(json.dumps(payload, indent=2))
        return
    print(_render_text(payload))


if __name__ == "__main__":
    main()
