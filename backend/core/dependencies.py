from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request

from core.config import Settings
from ingestion.context import FetchContext, build_context
from ingestion.fallback import FallbackOrchestrator
from ingestion.highlights_service import HighlightsService
from ingestion.notifications import NotificationFeed
from ingestion.sources.base import HighlightsSource
from ingestion.sources.recorded import RecordedHighlightsSource
from ingestion.sources.scorebat import ScoreBatSource
from ingestion.status_monitor import ConnectionStatusMonitor


@dataclass
class HighlightsRuntime:
    """Everything the API needs, built once per application."""

    context: FetchContext
    service: HighlightsService
    monitor: ConnectionStatusMonitor
    feed: NotificationFeed
    remote: HighlightsSource

    async def aclose(self) -> None:
        self.monitor.detach()
        aclose = getattr(self.remote, "aclose", None)
        if aclose is not None:
            await aclose()


def build_runtime(
    settings: Settings,
    remote: HighlightsSource | None = None,
    local: HighlightsSource | None = None,
) -> HighlightsRuntime:
    """Wire sources, shared fetch context, orchestrator, and the status listener."""
    feed = NotificationFeed()
    context = build_context(
        max_retries=settings.circuit_max_retries,
        cooldown_seconds=settings.circuit_cooldown_seconds,
        sink=feed,
    )
    if remote is None:
        remote = ScoreBatSource(
            token=settings.scorebat_token,
            base_url=settings.scorebat_base_url,
            recommended_limit=settings.recommended_limit,
        )
    if local is None:
        fixtures_dir = Path(settings.fixtures_dir) if settings.fixtures_dir else None
        local = RecordedHighlightsSource(fixtures_dir, recommended_limit=settings.recommended_limit)
    orchestrator = FallbackOrchestrator(
        context,
        timeout_seconds=settings.remote_timeout_seconds,
        trip_on_failure=settings.circuit_trip_on_failure,
    )
    monitor = ConnectionStatusMonitor()
    monitor.attach(context.channel)
    return HighlightsRuntime(
        context=context,
        service=HighlightsService(orchestrator, remote, local),
        monitor=monitor,
        feed=feed,
        remote=remote,
    )


def get_runtime(request: Request) -> HighlightsRuntime:
    """FastAPI dependency returning the runtime built by the application factory."""
    return request.app.state.highlights


def get_highlights_service(request: Request) -> HighlightsService:
    return get_runtime(request).service
