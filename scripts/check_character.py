"""Check a character draft: derived stats, budgets and feat eligibility.

Usage examples:
    python -m scripts.check_character --character-file hero.json
    python -m scripts.check_character --character-file hero.json --feats-file feats.json --json
    python -m scripts.check_character --character-json '{"level":3,"abilities":{"strength":2}}'
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from realms_rules.engine.budget import BudgetReport, DraftSpending, check_budget
from realms_rules.engine.requirements import Feat, check_feat_requirements
from realms_rules.models.abilities import AbilityScores
from realms_rules.models.archetype import Archetype
from realms_rules.models.character import Character, SkillEntry
from realms_rules.models.core_rules import CoreRules
from realms_rules.models.derived_stats import compute_stats

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


def _archetype_from_dict(data: Any) -> Archetype | None:
    if isinstance(data, str):
        return Archetype(kind=data.strip().lower())
    if not isinstance(data, dict):
        return None
    return Archetype(
        kind=str(data.get("type") or data.get("kind") or "power").strip().lower(),
        power_ability=data.get("pow_abil") or data.get("power_ability"),
        martial_ability=data.get("mart_abil") or data.get("martial_ability"),
    )


def _skill_from_dict(data: dict[str, Any]) -> SkillEntry:
    return SkillEntry(
        name=str(data.get("name") or ""),
        ability=str(data.get("ability") or ""),
        value=_parse_int_like(data.get("skill_val", data.get("value"))),
        proficient=bool(data.get("prof", data.get("proficient", False))),
        is_sub_skill=bool(data.get("is_sub_skill", False)),
    )


def _character_from_dict(data: dict[str, Any]) -> Character:
    feats = []
    for feat in data.get("feats") or []:
        name = feat if isinstance(feat, str) else (feat or {}).get("name")
        if name:
            feats.append(str(name))
    return Character(
        name=str(data.get("name") or ""),
        level=_parse_int_like(data.get("level"), default=1),
        archetype=_archetype_from_dict(data.get("archetype")),
        abilities=AbilityScores.from_dict(data.get("abilities") or {}),
        skills=[_skill_from_dict(s) for s in data.get("skills") or [] if isinstance(s, dict)],
        defense_skills={
            str(k): _parse_int_like(v) for k, v in (data.get("defenseSkills") or {}).items()
        },
        feats=feats,
        martial_proficiency=_parse_int_like(data.get("mart_prof")),
        power_proficiency=_parse_int_like(data.get("pow_prof")),
        health_points=_parse_int_like(data.get("health_points")),
        energy_points=_parse_int_like(data.get("energy_points")),
        equipped_armor=[_parse_int_like(v) for v in data.get("armor") or []],
    )


def _spending_from_dict(data: dict[str, Any]) -> DraftSpending:
    spend = data.get("spending") or {}
    return DraftSpending(
        training_points=float(spend.get("training_points") or 0),
        archetype_feats=_parse_int_like(spend.get("archetype_feats")),
        character_feats=_parse_int_like(spend.get("character_feats")),
        equipment=_parse_int_like(spend.get("equipment")),
        species_skills=frozenset(str(s).strip().lower() for s in spend.get("species_skills") or []),
        extra_skill_points=_parse_int_like(spend.get("extra_skill_points")),
    )


def _budget_payload(report: BudgetReport) -> dict[str, Any]:
    return {
        kind: {
            "available": line.available,
            "spent": line.spent,
            "remaining": line.remaining,
            "overspent": line.overspent,
        }
        for kind, line in report.lines.items()
    }


def check(
    data: dict[str, Any], feats: list[Feat], rules: CoreRules | None = None
) -> dict[str, Any]:
    character = _character_from_dict(data)
    report = check_budget(character, _spending_from_dict(data), rules)
    feat_results = {}
    for feat in feats:
        result = check_feat_requirements(feat, character)
        feat_results[feat.name] = {"met": result.met, "issues": result.issues}
    return {
        "stats": asdict(compute_stats(character, rules)),
        "budgets": _budget_payload(report),
        "issues": [asdict(issue) for issue in report.issues],
        "feats": feat_results,
    }


def _render_text(payload: dict[str, Any]) -> str:
    lines = ["stats:"]
    stats = payload["stats"]
    for key in ("max_health", "max_energy", "terminal", "speed", "evasion", "armor"):
        lines.append(f"  {key}: {stats[key]}")
    for name, score in stats["defense_scores"].items():
        lines.append(f"  {name}: {score}")
    lines.append("budgets:")
    for kind, line in payload["budgets"].items():
        flag = " OVERSPENT" if line["overspent"] else ""
        lines.append(f"  {kind}: {line['spent']}/{line['available']}{flag}")
    if payload["issues"]:
        lines.append("issues:")
        lines.extend(f"  - [{i['severity']}] {i['message']}" for i in payload["issues"])
    if payload["feats"]:
        lines.append("feats:")
        for name, result in payload["feats"].items():
            status = "ok" if result["met"] else "; ".join(result["issues"])
            lines.append(f"  - {name}: {status}")
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Check a character draft")
    char_group = parser.add_mutually_exclusive_group(required=True)
    char_group.add_argument("--character-file", type=Path, help="Character JSON file.")
    char_group.add_argument("--character-json", type=str, help="Inline character JSON object.")

    feat_group = parser.add_mutually_exclusive_group(required=False)
    feat_group.add_argument("--feats-file", type=Path, help="Feat records JSON list.")
    feat_group.add_argument("--feats-json", type=str, help="Inline feat records JSON list.")

    parser.add_argument("--rules-file", type=Path, help="Core rules JSON document.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    data = _load_json_arg(args.character_json, args.character_file)
    if not isinstance(data, dict):
        raise ValueError("Character JSON must be an object")
    feats_raw = _load_json_arg(args.feats_json, args.feats_file) or []
    if not isinstance(feats_raw, list):
        raise ValueError("Feats JSON must be a list")
    feats = [Feat.from_dict(f) for f in feats_raw if isinstance(f, dict)]
    logger.debug("Loaded %d feats", len(feats))

    rules = CoreRules.from_json(args.rules_file) if args.rules_file else None
    payload = check(data, feats, rules)
    if args.json:
        print(json.dumps(payload, indent=2))
        return
    print(_render_text(payload))


if __name__ == "__main__":
    main()
