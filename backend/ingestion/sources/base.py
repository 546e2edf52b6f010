"""
Highlights source contract.

Subclasses provide load_highlights(); the query shapes are projections over that
list and each returns a tagged FetchResult.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List

from ingestion.schema import (
    FetchResult,
    League,
    MatchHighlight,
    SequenceResult,
    entity_or_empty,
)

DEFAULT_RECOMMENDED_LIMIT = 10


def _newest_first(highlights: List[MatchHighlight]) -> List[MatchHighlight]:
    return sorted(highlights, key=lambda h: (h.date, h.id), reverse=True)


def group_by_competition(highlights: List[MatchHighlight]) -> List[League]:
    """One League per competition, in order of first appearance in newest-first order."""
    leagues: Dict[str, League] = {}
    for h in _newest_first(highlights):
        league = leagues.get(h.competition.id)
        if league is None:
            league = League(
                id=h.competition.id,
                name=h.competition.name,
                country=h.competition.country,
                logo=h.competition.logo,
            )
            leagues[h.competition.id] = league
        league.highlights.append(h)
    return list(leagues.values())


class HighlightsSource(ABC):
    """A source of match highlights (live feed or recorded fixtures)."""

    recommended_limit: int = DEFAULT_RECOMMENDED_LIMIT

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def load_highlights(self) -> List[MatchHighlight]:
        """Return every highlight this source currently has."""
        raise NotImplementedError

    async def get_recommended_highlights(self) -> FetchResult:
        highlights = _newest_first(await self.load_highlights())
        return SequenceResult(items=highlights[: self.recommended_limit])

    async def get_league_highlights(self) -> FetchResult:
        return SequenceResult(items=group_by_competition(await self.load_highlights()))

    async def get_match_by_id(self, match_id: str) -> FetchResult:
        for h in await self.load_highlights():
            if h.id == str(match_id):
                return entity_or_empty(h)
        return entity_or_empty(None)

    async def get_team_highlights(self, team_id: str) -> FetchResult:
        team_id = str(team_id).strip().lower()
        return SequenceResult(items=[
            h for h in _newest_first(await self.load_highlights())
            if team_id in (h.home_team.id, h.away_team.id)
        ])

    async def search_highlights(self, query: str) -> FetchResult:
        """Case-insensitive match on title, team names and competition name."""
        needle = (query or "").strip().lower()
        if not needle:
            return SequenceResult(items=[])
        matches = []
        for h in _newest_first(await self.load_highlights()):
            haystack = (h.title, h.home_team.name, h.away_team.name, h.competition.name)
            if any(needle in s.lower() for s in haystack):
                matches.append(h)
        return SequenceResult(items=matches)

    async def get_competition_highlights(self, competition_id: str) -> FetchResult:
        competition_id = str(competition_id).strip().lower()
        return SequenceResult(items=[
            h for h in _newest_first(await self.load_highlights())
            if h.competition.id == competition_id
        ])
