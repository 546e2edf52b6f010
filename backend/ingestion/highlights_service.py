"""
Highlights accessors: one entry point per query shape, live first with recorded fallback.

None of these raise for remote failures. Only a broken recorded source can raise.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ingestion.fallback import FallbackOrchestrator
from ingestion.schema import EntityResult, FetchResult, League, MatchHighlight, SequenceResult
from ingestion.sources.base import HighlightsSource

logger = logging.getLogger(__name__)

# Minimum live item counts before falling back to recorded data.
RECOMMENDED_THRESHOLD = 3
LEAGUES_THRESHOLD = 2
MATCH_THRESHOLD = 1
TEAM_THRESHOLD = 1
SEARCH_THRESHOLD = 1
COMPETITION_THRESHOLD = 1


def _as_list(result: FetchResult) -> list:
    if isinstance(result, SequenceResult):
        return result.unwrap()
    if isinstance(result, EntityResult):
        return [result.unwrap()]
    return []


def _as_entity(result: FetchResult):
    if isinstance(result, EntityResult):
        return result.unwrap()
    return None


class HighlightsService:
    def __init__(
        self,
        orchestrator: FallbackOrchestrator,
        remote: HighlightsSource,
        local: HighlightsSource,
    ) -> None:
        self._orchestrator = orchestrator
        self._remote = remote
        self._local = local

    @property
    def orchestrator(self) -> FallbackOrchestrator:
        return self._orchestrator

    async def get_recommended_highlights(self) -> List[MatchHighlight]:
        result = await self._orchestrator.fetch_with_fallback(
            self._remote.get_recommended_highlights,
            self._local.get_recommended_highlights,
            RECOMMENDED_THRESHOLD,
        )
        return _as_list(result)

    async def get_league_highlights(self) -> List[League]:
        result = await self._orchestrator.fetch_with_fallback(
            self._remote.get_league_highlights,
            self._local.get_league_highlights,
            LEAGUES_THRESHOLD,
        )
        return _as_list(result)

    async def get_match_by_id(self, match_id: str) -> Optional[MatchHighlight]:
        result = await self._orchestrator.fetch_with_fallback(
            lambda: self._remote.get_match_by_id(match_id),
            lambda: self._local.get_match_by_id(match_id),
            MATCH_THRESHOLD,
        )
        return _as_entity(result)

    async def get_team_highlights(self, team_id: str) -> List[MatchHighlight]:
        result = await self._orchestrator.fetch_with_fallback(
            lambda: self._remote.get_team_highlights(team_id),
            lambda: self._local.get_team_highlights(team_id),
            TEAM_THRESHOLD,
        )
        return _as_list(result)

    async def search_highlights(self, query: str) -> List[MatchHighlight]:
        result = await self._orchestrator.fetch_with_fallback(
            lambda: self._remote.search_highlights(query),
            lambda: self._local.search_highlights(query),
            SEARCH_THRESHOLD,
        )
        return _as_list(result)

    async def get_competition_highlights(self, competition_id: str) -> List[MatchHighlight]:
        result = await self._orchestrator.fetch_with_fallback(
            lambda: self._remote.get_competition_highlights(competition_id),
            lambda: self._local.get_competition_highlights(competition_id),
            COMPETITION_THRESHOLD,
        )
        return _as_list(result)

    def force_retry(self) -> None:
        """Reset circuit and notification state and ask listeners to refresh."""
        logger.info("Forced retry of live highlights requested")
        self._orchestrator.context.circuit.force_reset()

    def reset_cooldown(self) -> None:
        """Same effect as force_retry; named for callers clearing a cooldown."""
        logger.info("Cooldown reset of live highlights requested")
        self._orchestrator.context.circuit.force_reset()
