"""Feed item parsing: competition/team derivation, date normalization, invalid items."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from ingestion.sources.feed import parse_date_utc, parse_feed, parse_feed_item, slugify

ITEM = {
    "title": "Arsenal - Chelsea",
    "competition": "ENGLAND: Premier League",
    "matchviewUrl": "https://www.scorebat.com/embed/matchview/1471316/",
    "thumbnail": "https://www.scorebat.com/og/m/og1471316.jpeg",
    "date": "2024-03-01T20:00:00+0000",
    "videos": [{"id": "v1", "title": "Highlights", "embed": "<iframe></iframe>"}],
}


def test_parse_feed_item_maps_all_fields() -> None:
    h = parse_feed_item(ITEM)
    assert h.id == "1471316"
    assert h.title == "Arsenal - Chelsea"
    assert h.competition.id == "england-premier-league"
    assert h.competition.name == "Premier League"
    assert h.competition.country == "England"
    assert h.home_team.id == "arsenal"
    assert h.away_team.name == "Chelsea"
    assert h.date == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
    assert h.match_url == ITEM["matchviewUrl"]
    assert [v.id for v in h.videos] == ["v1"]


def test_explicit_id_and_side_objects_win() -> None:
    item = dict(ITEM, id="m-1", side1={"name": "Arsenal FC"}, side2={"name": "Chelsea FC"})
    h = parse_feed_item(item)
    assert h.id == "m-1"
    assert h.home_team.id == "arsenal-fc"
    assert h.away_team.id == "chelsea-fc"


def test_competition_object_is_accepted() -> None:
    item = dict(ITEM, competition={"id": "epl", "name": "Premier League", "country": "England"})
    assert parse_feed_item(item).competition.id == "epl"


def test_missing_url_and_id_falls_back_to_slug() -> None:
    item = {k: v for k, v in ITEM.items() if k != "matchviewUrl"}
    assert parse_feed_item(item).id == "arsenal-chelsea-2024-03-01"


@pytest.mark.parametrize("field", ["title", "competition", "date"])
def test_required_fields(field: str) -> None:
    item = {k: v for k, v in ITEM.items() if k != field}
    with pytest.raises(ValueError):
        parse_feed_item(item)


def test_title_without_separator_needs_sides() -> None:
    with pytest.raises(ValueError, match="cannot derive teams"):
        parse_feed_item(dict(ITEM, title="Matchday recap"))


@pytest.mark.parametrize(
    "raw",
    ["2024-03-01T20:00:00Z", "2024-03-01T20:00:00+00:00", "2024-03-01T20:00:00+0000", "2024-03-01T21:00:00+0100"],
)
def test_parse_date_utc_variants(raw: str) -> None:
    assert parse_date_utc(raw) == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)


def test_parse_feed_skips_invalid_items_and_non_lists() -> None:
    assert parse_feed(None) == []
    assert parse_feed({"response": []}) == []
    parsed = parse_feed([ITEM, "junk", {"title": "no date"}])
    assert len(parsed) == 1


def test_parse_feed_logs_each_dropped_item(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="ingestion.sources.feed"):
        parse_feed([ITEM, "junk", {"title": "Ajax - PSV"}])
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert any("str" in m for m in messages)
    assert any("Ajax - PSV" in m for m in messages)


def test_slugify() -> None:
    assert slugify("  Paris Saint-Germain ") == "paris-saint-germain"
    assert slugify("EUROPE: Champions League") == "europe-champions-league"
