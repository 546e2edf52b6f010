"""
Feed item parsing shared by the live and recorded sources.

Both sources speak the video-feed item format:
    {"title": "Home - Away", "competition": "COUNTRY: Name", "matchviewUrl": ...,
     "thumbnail": ..., "date": ISO8601, "videos": [{"id", "title", "embed"}]}
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from ingestion.schema import Competition, MatchHighlight, Team, Video

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def slugify(value: str) -> str:
    """'ENGLAND: Premier League' -> 'england-premier-league'."""
    return _SLUG_STRIP.sub("-", value.strip().lower()).strip("-")


def parse_date_utc(value: str) -> datetime:
    """Parse ISO8601 (Z, +00:00 or +0000 offsets) to an aware UTC datetime. Raises ValueError."""
    if not value or not isinstance(value, str):
        raise ValueError("date is required and must be a non-empty string")
    s = value.strip().replace("Z", "+00:00")
    s = _COMPACT_OFFSET.sub(r"\1:\2", s)
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise ValueError(f"date must be ISO8601: {e!s}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_competition(raw: Any) -> Competition:
    """Accepts 'COUNTRY: Name' strings or {id, name, country, logo} objects."""
    if isinstance(raw, dict):
        name = str(raw.get("name") or "").strip()
        if not name:
            raise ValueError("competition.name is required")
        country = raw.get("country")
        return Competition(
            id=str(raw.get("id") or slugify(f"{country or ''} {name}")),
            name=name,
            country=str(country) if country else None,
            logo=raw.get("logo"),
        )
    text = str(raw or "").strip()
    if not text:
        raise ValueError("competition is required")
    country, sep, name = text.partition(":")
    if not sep:
        return Competition(id=slugify(text), name=text)
    return Competition(
        id=slugify(text),
        name=name.strip(),
        country=country.strip().title(),
    )


def _parse_teams(title: str, raw: Dict[str, Any]) -> tuple[Team, Team]:
    home = raw.get("side1") or raw.get("home_team")
    away = raw.get("side2") or raw.get("away_team")
    if isinstance(home, dict):
        home = home.get("name")
    if isinstance(away, dict):
        away = away.get("name")
    if not home or not away:
        home_part, sep, away_part = title.partition(" - ")
        if not sep:
            raise ValueError(f"cannot derive teams from title {title!r}")
        home, away = home_part, away_part
    home, away = str(home).strip(), str(away).strip()
    return Team(id=slugify(home), name=home), Team(id=slugify(away), name=away)


def _parse_videos(raw: Any) -> List[Video]:
    if not isinstance(raw, list):
        return []
    videos: List[Video] = []
    for i, v in enumerate(raw):
        if not isinstance(v, dict):
            continue
        videos.append(Video(
            id=str(v.get("id") or i),
            title=str(v.get("title") or "Highlights"),
            embed=str(v.get("embed") or ""),
        ))
    return videos


def parse_feed_item(raw: Dict[str, Any]) -> MatchHighlight:
    """
    Map one feed item to MatchHighlight.
    Required: title, competition, date. Raises ValueError with a clear message otherwise.
    """
    title = str(raw.get("title") or "").strip()
    if not title:
        raise ValueError("title is required")
    competition = parse_competition(raw.get("competition"))
    date = parse_date_utc(raw.get("date"))
    home_team, away_team = _parse_teams(title, raw)

    match_url = raw.get("matchviewUrl") or raw.get("url")
    match_id = raw.get("id")
    if not match_id and match_url:
        match_id = str(match_url).rstrip("/").rsplit("/", 1)[-1]
    if not match_id:
        match_id = slugify(f"{title} {date.date().isoformat()}")

    return MatchHighlight(
        id=str(match_id),
        title=title,
        competition=competition,
        home_team=home_team,
        away_team=away_team,
        date=date,
        thumbnail=raw.get("thumbnail"),
        match_url=str(match_url) if match_url else None,
        videos=_parse_videos(raw.get("videos")),
    )


def parse_feed(items: Any) -> List[MatchHighlight]:
    """Parse a list of feed items, skipping invalid ones. Non-list input yields []."""
    if not isinstance(items, list):
        return []
    highlights: List[MatchHighlight] = []
    for raw in items:
        if not isinstance(raw, dict):
            logger.warning("Skipping feed item of type %s", type(raw).__name__)
            continue
        try:
            highlights.append(parse_feed_item(raw))
        except ValueError as e:
            logger.warning("Skipping invalid feed item %r: %s", raw.get("title"), e)
            continue
    return highlights
