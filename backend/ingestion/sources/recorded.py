"""
Recorded highlights source: demo data from local JSON fixtures.

No HTTP requests. Universal fallback for the live feed, so it fails fast at
construction if the fixtures are missing rather than at request time.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ingestion.schema import MatchHighlight
from ingestion.sources.base import DEFAULT_RECOMMENDED_LIMIT, HighlightsSource
from ingestion.sources.feed import parse_feed

logger = logging.getLogger(__name__)

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures" / "highlights"


def load_fixture_items(fixtures_dir: Path) -> List[Dict[str, Any]]:
    """
    Load raw feed items from every *.json file (sorted by name).
    A file may hold one item, a list of items, or a feed object {"response": [...]}.
    """
    items: List[Dict[str, Any]] = []
    for path in sorted(Path(fixtures_dir).glob("*.json")):
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Skipping unreadable fixture %s: %s", path.name, e)
            continue
        if isinstance(data, dict) and isinstance(data.get("response"), list):
            data = data["response"]
        if isinstance(data, dict):
            items.append(data)
        elif isinstance(data, list):
            items.extend(d for d in data if isinstance(d, dict))
        else:
            logger.warning("Skipping fixture %s: expected an item, a list or a feed object", path.name)
    if not items:
        raise ValueError(
            f"no valid highlight fixtures in {fixtures_dir}. "
            "Recorded data backs every query: ensure at least one valid item exists."
        )
    return items


class RecordedHighlightsSource(HighlightsSource):
    def __init__(
        self,
        fixtures_dir: Path | None = None,
        recommended_limit: int = DEFAULT_RECOMMENDED_LIMIT,
    ) -> None:
        self._fixtures_dir = Path(fixtures_dir) if fixtures_dir is not None else DEFAULT_FIXTURES_DIR
        self.recommended_limit = recommended_limit
        self._ensure_fixtures_exist()

    def _ensure_fixtures_exist(self) -> None:
        if not self._fixtures_dir.is_dir():
            raise FileNotFoundError(
                f"highlights fixtures directory missing: {self._fixtures_dir}. "
                "Add JSON feed items under ingestion/fixtures/highlights/."
            )
        if not any(self._fixtures_dir.glob("*.json")):
            raise FileNotFoundError(f"no JSON fixtures in {self._fixtures_dir}")

    @property
    def name(self) -> str:
        return "recorded"

    @property
    def fixtures_dir(self) -> Path:
        return self._fixtures_dir

    async def load_highlights(self) -> List[MatchHighlight]:
        highlights = parse_feed(load_fixture_items(self._fixtures_dir))
        if not highlights:
            raise ValueError(f"no fixture in {self._fixtures_dir} parses as a highlight")
        return highlights
