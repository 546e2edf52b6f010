"""Unit tests for the deadline race: winner selection, no cancellation of the loser, timer cleanup."""

from __future__ import annotations

import asyncio
import gc
import logging
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from ingestion.deadline import race_deadline
from ingestion.errors import ErrorKind, FetchTimeoutError


def _spy_timers(monkeypatch: pytest.MonkeyPatch) -> list:
    """Record every TimerHandle created via loop.call_later on the running loop."""
    loop = asyncio.get_running_loop()
    original = loop.call_later
    handles: list = []

    def spy(delay, callback, *args, **kwargs):
        handle = original(delay, callback, *args, **kwargs)
        handles.append(handle)
        return handle

    monkeypatch.setattr(loop, "call_later", spy)
    return handles


@pytest.mark.asyncio
async def test_fast_operation_wins_and_timer_is_cleared(monkeypatch) -> None:
    handles = _spy_timers(monkeypatch)

    async def fast() -> str:
        await asyncio.sleep(0.01)
        return "live"

    assert await race_deadline(fast(), 1.0) == "live"
    # handles[0] is the deadline timer; later entries come from asyncio.sleep.
    assert handles[0].cancelled() is True


@pytest.mark.asyncio
async def test_operation_error_propagates_and_timer_is_cleared(monkeypatch) -> None:
    handles = _spy_timers(monkeypatch)

    async def failing() -> str:
        raise RuntimeError("HTTP 500")

    with pytest.raises(RuntimeError, match="HTTP 500"):
        await race_deadline(failing(), 1.0)
    assert handles[0].cancelled() is True


@pytest.mark.asyncio
async def test_slow_operation_times_out_before_it_resolves(monkeypatch) -> None:
    handles = _spy_timers(monkeypatch)
    finished: list = []

    async def slow() -> str:
        await asyncio.sleep(0.15)
        finished.append("done")
        return "late"

    with pytest.raises(FetchTimeoutError) as exc_info:
        await race_deadline(slow(), 0.1)
    assert exc_info.value.timeout_seconds == 0.1
    assert exc_info.value.kind is ErrorKind.TIMEOUT
    assert "timed out" in str(exc_info.value)
    assert finished == []
    assert handles[0].cancelled() is True

    # The loser is not cancelled; it completes in the background.
    await asyncio.sleep(0.1)
    assert finished == ["done"]


@pytest.mark.asyncio
async def test_late_failure_after_timeout_is_discarded(caplog) -> None:
    async def slow_failure() -> str:
        await asyncio.sleep(0.05)
        raise ValueError("Failed to fetch")

    with caplog.at_level(logging.DEBUG, logger="ingestion.deadline"):
        with pytest.raises(FetchTimeoutError):
            await race_deadline(slow_failure(), 0.01)
        # Settles in the background without surfacing anywhere.
        await asyncio.sleep(0.1)
    assert any("Failed to fetch" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_accepts_already_created_task() -> None:
    async def value() -> int:
        return 7

    task = asyncio.ensure_future(value())
    assert await race_deadline(task, 1.0) == 7


@pytest.mark.asyncio
async def test_cancelled_caller_still_retrieves_operation_failure(caplog) -> None:
    async def slow_failure() -> str:
        await asyncio.sleep(0.05)
        raise ValueError("Failed to fetch")

    operation = asyncio.ensure_future(slow_failure())
    caller = asyncio.ensure_future(race_deadline(operation, 1.0))
    await asyncio.sleep(0.01)

    with caplog.at_level(logging.DEBUG):
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        assert operation.cancelled() is False

        await asyncio.sleep(0.1)
        assert operation.done() is True
        del operation
        gc.collect()

    assert any("Failed to fetch" in r.getMessage() and r.name == "ingestion.deadline" for r in caplog.records)
    assert not any("never retrieved" in r.getMessage() for r in caplog.records)
