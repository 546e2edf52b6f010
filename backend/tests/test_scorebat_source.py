"""ScoreBat source against the in-process stub feed (no external IO)."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from dev.stub_server import create_stub_app
from ingestion.errors import AccessDeniedError, ErrorKind, FetchTimeoutError, NetworkError, RemoteSourceError
from ingestion.schema import EmptyResult, EntityResult, SequenceResult
from ingestion.sources.scorebat import ScoreBatSource

STUB_URL = "http://stub"


def _source(mode: str = "ok", token: str = "test-token") -> ScoreBatSource:
    client = AsyncClient(
        transport=ASGITransport(app=create_stub_app(default_mode=mode)),
        base_url=STUB_URL,
    )
    return ScoreBatSource(token=token, base_url=STUB_URL, client=client)


@pytest.mark.asyncio
async def test_ok_feed_parses_and_projects() -> None:
    source = _source()
    recommended = await source.get_recommended_highlights()
    assert isinstance(recommended, SequenceResult)
    assert [h.id for h in recommended.items] == ["stub-live-004", "stub-live-003", "stub-live-002", "stub-live-001"]

    leagues = await source.get_league_highlights()
    assert {league.name for league in leagues.items} == {"Premier League", "Serie A", "Ligue 1"}

    match = await source.get_match_by_id("stub-live-003")
    assert isinstance(match, EntityResult)
    assert match.value.home_team.name == "Napoli"
    assert isinstance(await source.get_match_by_id("demo-epl-001"), EmptyResult)

    assert len(await source.search_highlights("wolves")) == 1
    assert len(await source.get_team_highlights("lyon")) == 1
    assert len(await source.get_competition_highlights("england-premier-league")) == 2
    await source.aclose()


@pytest.mark.asyncio
async def test_empty_feed_returns_empty_sequence() -> None:
    result = await _source("empty").get_recommended_highlights()
    assert isinstance(result, SequenceResult)
    assert len(result) == 0


@pytest.mark.asyncio
async def test_forbidden_raises_access_denied() -> None:
    with pytest.raises(AccessDeniedError, match="HTTP 403"):
        await _source("forbidden").get_recommended_highlights()


@pytest.mark.asyncio
async def test_missing_token_raises_before_request() -> None:
    calls: list = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"response": []})

    client = AsyncClient(transport=httpx.MockTransport(handler), base_url=STUB_URL)
    source = ScoreBatSource(token="", base_url=STUB_URL, client=client)
    with pytest.raises(AccessDeniedError, match="SCOREBAT_API_TOKEN"):
        await source.get_recommended_highlights()
    assert calls == []


@pytest.mark.asyncio
async def test_server_error_raises_generic_remote_error() -> None:
    with pytest.raises(RemoteSourceError) as exc_info:
        await _source("500").get_league_highlights()
    assert exc_info.value.kind is ErrorKind.GENERIC
    assert "HTTP 500" in str(exc_info.value)


@pytest.mark.asyncio
async def test_invalid_json_raises_network_error() -> None:
    with pytest.raises(NetworkError, match="Invalid JSON"):
        await _source("invalid_json").get_recommended_highlights()


@pytest.mark.asyncio
async def test_transport_errors_are_structured() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def too_slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    refused = ScoreBatSource(
        token="t", base_url=STUB_URL, client=AsyncClient(transport=httpx.MockTransport(refuse)),
    )
    with pytest.raises(NetworkError, match="Failed to fetch"):
        await refused.get_recommended_highlights()

    slow = ScoreBatSource(
        token="t", base_url=STUB_URL, client=AsyncClient(transport=httpx.MockTransport(too_slow)),
    )
    with pytest.raises(FetchTimeoutError):
        await slow.get_recommended_highlights()


@pytest.mark.asyncio
async def test_token_is_sent_as_query_param() -> None:
    seen: list = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json={"response": []})

    source = ScoreBatSource(
        token="secret", base_url=STUB_URL + "/", client=AsyncClient(transport=httpx.MockTransport(handler)),
    )
    await source.get_recommended_highlights()
    assert seen[0].path == "/feed/"
    assert seen[0].params["token"] == "secret"
