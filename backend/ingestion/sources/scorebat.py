"""
Live highlights source: ScoreBat video feed over httpx.

One feed request per query; failures are raised as structured RemoteSourceError
subclasses so the fallback layer can classify them without string matching.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, List

import httpx

from ingestion.errors import AccessDeniedError, FetchTimeoutError, NetworkError, RemoteSourceError
from ingestion.schema import MatchHighlight
from ingestion.sources.base import DEFAULT_RECOMMENDED_LIMIT, HighlightsSource
from ingestion.sources.feed import parse_feed

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.scorebat.com/video-api/v3"
# Transport timeout; the orchestrator's deadline is what callers observe.
HTTP_TIMEOUT_SECONDS = 30.0


class ScoreBatSource(HighlightsSource):
    def __init__(
        self,
        token: str | None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        recommended_limit: int = DEFAULT_RECOMMENDED_LIMIT,
    ) -> None:
        self._token = (token or "").strip()
        self._base_url = str(base_url or DEFAULT_BASE_URL).rstrip("/")
        self._client = client
        self._owns_client = client is None
        self.recommended_limit = recommended_limit

    @property
    def name(self) -> str:
        return "scorebat"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=HTTP_TIMEOUT_SECONDS)
        return self._client

    async def _get_feed(self) -> Any:
        if not self._token:
            raise AccessDeniedError("ScoreBat API token is not configured (SCOREBAT_API_TOKEN)")
        url = f"{self._base_url}/feed/"
        t0 = time.perf_counter()
        try:
            r = await self._get_client().get(url, params={"token": self._token})
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(HTTP_TIMEOUT_SECONDS) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Failed to fetch feed: {e!s}") from e
        latency_ms = (time.perf_counter() - t0) * 1000
        logger.debug("GET %s -> %d in %.1fms", url, r.status_code, latency_ms)
        if r.status_code in (401, 403):
            raise AccessDeniedError(f"HTTP {r.status_code}: {r.text[:200]}")
        if r.status_code >= 400:
            raise RemoteSourceError(f"HTTP {r.status_code}: {r.text[:200]}")
        try:
            return r.json()
        except json.JSONDecodeError as e:
            raise NetworkError(f"Invalid JSON from feed: {e!s}") from e

    async def load_highlights(self) -> List[MatchHighlight]:
        data = await self._get_feed()
        if isinstance(data, dict):
            items = data.get("response")
        else:
            items = data
        highlights = parse_feed(items)
        logger.info("ScoreBat feed returned %d highlights", len(highlights))
        return highlights

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
