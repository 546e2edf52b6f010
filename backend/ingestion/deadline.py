"""
Deadline race: settle with an operation's result or a FetchTimeoutError, whichever comes first.

The operation is never cancelled. If it loses, it keeps running in the background
and its eventual result or error is retrieved and dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from ingestion.errors import FetchTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _discard_late_result(task: asyncio.Future) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned remote call failed: %s", exc)
    else:
        logger.debug("Abandoned remote call completed; result discarded")


async def race_deadline(operation: Awaitable[T], timeout_seconds: float) -> T:
    """
    Await operation, or raise FetchTimeoutError(timeout_seconds) if the timer fires first.
    The timer handle is cancelled on either outcome.
    """
    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(operation)
    deadline: asyncio.Future = loop.create_future()

    def _expire() -> None:
        if not deadline.done():
            deadline.set_result(None)

    timer = loop.call_later(timeout_seconds, _expire)
    try:
        await asyncio.wait({task, deadline}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.cancel()
        if not deadline.done():
            deadline.cancel()
        # Also reached when the caller itself is cancelled mid-race.
        if not task.done():
            task.add_done_callback(_discard_late_result)

    if task.done():
        return task.result()
    raise FetchTimeoutError(timeout_seconds)
