"""Highlights API: live-first highlight queries, connection status, and retry controls."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from core.dependencies import HighlightsRuntime, get_highlights_service, get_runtime
from ingestion.highlights_service import HighlightsService

router = APIRouter(prefix="/highlights", tags=["highlights"])


def _dump(models: list) -> list:
    return [m.model_dump(mode="json") for m in models]


@router.get(
    "/recommended",
    summary="Recommended highlights",
    description="Latest highlights from the live feed, or demo highlights when the feed is unavailable.",
)
async def get_recommended(service: HighlightsService = Depends(get_highlights_service)) -> dict:
    """GET /api/v1/highlights/recommended -> { highlights: MatchHighlight[] }."""
    highlights = await service.get_recommended_highlights()
    return {"highlights": _dump(highlights)}


@router.get(
    "/leagues",
    summary="Highlights grouped by league",
    description="Leagues sorted by number of highlights, most first.",
)
async def get_leagues(service: HighlightsService = Depends(get_highlights_service)) -> dict:
    """GET /api/v1/highlights/leagues -> { leagues: League[] }."""
    leagues = await service.get_league_highlights()
    leagues = sorted(leagues, key=lambda league: len(league.highlights), reverse=True)
    return {"leagues": _dump(leagues)}


@router.get("/matches/{match_id}", summary="Highlights for one match")
async def get_match(match_id: str, service: HighlightsService = Depends(get_highlights_service)) -> dict:
    """GET /api/v1/highlights/matches/{match_id} -> MatchHighlight or 404."""
    match = await service.get_match_by_id(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail=f"No highlights for match_id={match_id}")
    return match.model_dump(mode="json")


@router.get("/teams/{team_id}", summary="Highlights for one team")
async def get_team(team_id: str, service: HighlightsService = Depends(get_highlights_service)) -> dict:
    highlights = await service.get_team_highlights(team_id)
    return {"team_id": team_id, "highlights": _dump(highlights)}


@router.get("/search", summary="Search highlights")
async def search(
    q: str = Query("", description="Team, competition or title text"),
    service: HighlightsService = Depends(get_highlights_service),
) -> dict:
    highlights = await service.search_highlights(q)
    return {"query": q, "highlights": _dump(highlights)}


@router.get("/competitions/{competition_id}", summary="Highlights for one competition")
async def get_competition(
    competition_id: str,
    service: HighlightsService = Depends(get_highlights_service),
) -> dict:
    highlights = await service.get_competition_highlights(competition_id)
    return {"competition_id": competition_id, "highlights": _dump(highlights)}


@router.get(
    "/status",
    summary="Live feed connection status",
    description="live | demo | checking, plus circuit and notification state.",
)
async def get_status(runtime: HighlightsRuntime = Depends(get_runtime)) -> dict:
    return {
        **runtime.monitor.snapshot(),
        "circuit": runtime.context.circuit.snapshot(),
        "notifications": runtime.context.dedup_guard.snapshot(),
    }


@router.post("/retry", summary="Force a retry of the live feed")
async def post_retry(runtime: HighlightsRuntime = Depends(get_runtime)) -> dict:
    """POST /api/v1/highlights/retry -> status after reset; clients should re-fetch."""
    runtime.service.force_retry()
    return {"ok": True, **runtime.monitor.snapshot()}


@router.post("/cooldown/reset", summary="Clear the live feed cooldown")
async def post_reset_cooldown(runtime: HighlightsRuntime = Depends(get_runtime)) -> dict:
    runtime.service.reset_cooldown()
    return {"ok": True, **runtime.monitor.snapshot()}


@router.get("/notifications", summary="Recent user notifications")
async def get_notifications(
    limit: int = Query(20, ge=1, le=50),
    runtime: HighlightsRuntime = Depends(get_runtime),
) -> dict:
    """GET /api/v1/highlights/notifications -> { notifications: Notification[] } newest first."""
    return {"notifications": _dump(runtime.feed.recent(limit))}
