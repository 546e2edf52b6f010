"""
Validate a highlights fixture directory: JSON parses, required fields, date UTC, unique ids.

Run: python -m ingestion.fixtures.validator [DIR]   (from backend/)
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from ingestion.sources.feed import parse_feed_item


@dataclass
class ValidationReport:
    ok: bool
    items: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _items_of(raw: Any) -> List[Any] | None:
    if isinstance(raw, dict) and isinstance(raw.get("response"), list):
        return raw["response"]
    if isinstance(raw, dict):
        return [raw]
    if isinstance(raw, list):
        return raw
    return None


def validate_fixtures(dir_path: str | Path) -> ValidationReport:
    """
    Validate all JSON fixtures in dir_path.
    Every item must parse as a feed item; match ids must be unique across files.
    """
    errors: List[str] = []
    warnings: List[str] = []
    path = Path(dir_path)
    if not path.exists() or not path.is_dir():
        return ValidationReport(ok=False, errors=[f"Directory does not exist or is not a directory: {path}"])

    seen_ids: set[str] = set()
    count = 0
    files = sorted(path.glob("*.json"))
    if not files:
        warnings.append("No JSON files found in fixture directory")

    for file_path in files:
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            errors.append(f"{file_path.name}: invalid JSON or read error: {e}")
            continue

        items = _items_of(raw)
        if items is None:
            errors.append(f"{file_path.name}: root must be an item, a list of items, or {{\"response\": [...]}}")
            continue
        if not items:
            warnings.append(f"{file_path.name}: no items")

        for i, item in enumerate(items):
            where = f"{file_path.name}[{i}]"
            if not isinstance(item, dict):
                errors.append(f"{where}: item must be a JSON object")
                continue
            try:
                highlight = parse_feed_item(item)
            except ValueError as e:
                errors.append(f"{where}: {e}")
                continue
            if highlight.id in seen_ids:
                errors.append(f"{where}: duplicate match id {highlight.id!r}")
            seen_ids.add(highlight.id)
            if not highlight.videos:
                warnings.append(f"{where}: no videos")
            count += 1

    return ValidationReport(ok=len(errors) == 0, items=count, errors=errors, warnings=warnings)


def main(argv: List[str] | None = None) -> int:
    from ingestion.sources.recorded import DEFAULT_FIXTURES_DIR

    args = sys.argv[1:] if argv is None else argv
    report = validate_fixtures(args[0] if args else DEFAULT_FIXTURES_DIR)
    for w in report.warnings:
        print(f"warning: {w}")
    for e in report.errors:
        print(f"error: {e}", file=sys.stderr)
    print(f"{report.items} items, {'ok' if report.ok else 'FAILED'}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
