"""
Local deterministic HTTP stub of the ScoreBat video feed for live source testing.
Offline-friendly, no randomness. Failure modes via query param or header
(mode=ok|empty|forbidden|500|invalid_json|slow|timeout).
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from fastapi import FastAPI, Header, HTTPException, Query
from fastapi.responses import PlainTextResponse

# Deterministic durations (seconds) for timeout/slow modes
STUB_TIMEOUT_SLEEP = 3.0   # longer than the deadline used in drills
STUB_SLOW_SLEEP = 0.5

STUB_MODES = ("ok", "empty", "forbidden", "500", "invalid_json", "slow", "timeout")

STUB_FEED: List[Dict[str, Any]] = [
    {
        "title": "Brighton - Fulham",
        "competition": "ENGLAND: Premier League",
        "matchviewUrl": "https://www.scorebat.com/embed/matchview/stub-live-001/",
        "thumbnail": "https://www.scorebat.com/og/m/stub-live-001.jpeg",
        "date": "2025-10-04T14:00:00+0000",
        "videos": [{"id": "stub-live-001-v1", "title": "Highlights", "embed": "<iframe></iframe>"}],
    },
    {
        "title": "Everton - Wolves",
        "competition": "ENGLAND: Premier League",
        "matchviewUrl": "https://www.scorebat.com/embed/matchview/stub-live-002/",
        "thumbnail": "https://www.scorebat.com/og/m/stub-live-002.jpeg",
        "date": "2025-10-04T16:30:00+0000",
        "videos": [{"id": "stub-live-002-v1", "title": "Highlights", "embed": "<iframe></iframe>"}],
    },
    {
        "title": "Napoli - Lazio",
        "competition": "ITALY: Serie A",
        "matchviewUrl": "https://www.scorebat.com/embed/matchview/stub-live-003/",
        "thumbnail": "https://www.scorebat.com/og/m/stub-live-003.jpeg",
        "date": "2025-10-05T18:45:00+0000",
        "videos": [{"id": "stub-live-003-v1", "title": "Highlights", "embed": "<iframe></iframe>"}],
    },
    {
        "title": "Lyon - Lille",
        "competition": "FRANCE: Ligue 1",
        "matchviewUrl": "https://www.scorebat.com/embed/matchview/stub-live-004/",
        "thumbnail": "https://www.scorebat.com/og/m/stub-live-004.jpeg",
        "date": "2025-10-05T20:45:00+0000",
        "videos": [{"id": "stub-live-004-v1", "title": "Highlights", "embed": "<iframe></iframe>"}],
    },
]


def _get_mode(mode: str | None, x_stub_mode: str | None) -> str:
    """Resolve mode from query param or header. Default ok."""
    m = (mode or x_stub_mode or "ok").strip().lower()
    if m not in STUB_MODES:
        return "ok"
    return m


def create_stub_app(feed: List[Dict[str, Any]] | None = None, default_mode: str = "ok") -> FastAPI:
    """Create FastAPI app serving a fixed feed, with deterministic failure modes."""
    items = list(STUB_FEED if feed is None else feed)
    app = FastAPI(title="Stub Highlights Feed", version="1.0.0")
    # Drills may switch app.state.mode between requests; hits counts feed requests.
    app.state.mode = default_mode
    app.state.hits = 0

    @app.get("/health", summary="Health check")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "items": len(items)}

    @app.get("/feed/", summary="Video feed")
    async def get_feed(
        token: str | None = Query(None),
        mode: str | None = Query(None, alias="mode"),
        x_stub_mode: str | None = Header(None),
    ):
        app.state.hits += 1
        m = _get_mode(mode, x_stub_mode or app.state.mode)
        if not token or m == "forbidden":
            raise HTTPException(status_code=403, detail="Forbidden")
        if m == "timeout":
            await asyncio.sleep(STUB_TIMEOUT_SLEEP)
        elif m == "slow":
            await asyncio.sleep(STUB_SLOW_SLEEP)
        elif m == "500":
            raise HTTPException(status_code=500, detail="Stub mode=500")
        elif m == "invalid_json":
            return PlainTextResponse("<html>maintenance</html>")
        elif m == "empty":
            return {"response": []}
        return {"response": items}

    return app
