"""
Fallback orchestrator: live remote source first, recorded local source on any failure.

For one request: consult the circuit, race the remote call against the deadline,
classify the tagged result, and either return it or fall back to the local call.
Remote failures never reach the caller; a local failure propagates as-is.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Tuple

from ingestion.context import FetchContext
from ingestion.deadline import race_deadline
from ingestion.errors import ErrorKind, classify_error
from ingestion.events import StatusEvent, StatusKind
from ingestion.notifications import Notification, NotificationLevel
from ingestion.schema import EmptyResult, EntityResult, FetchResult, SequenceResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
STATUS_TOAST_ID = "highlights-api-status"

FetchCall = Callable[[], Awaitable[FetchResult]]

# (title, description) per failure category
_ERROR_TOASTS: Dict[ErrorKind, Tuple[str, str]] = {
    ErrorKind.ACCESS_DENIED: (
        "Highlights API access denied",
        "The live feed rejected our token. Showing demo highlights instead.",
    ),
    ErrorKind.TIMEOUT: (
        "Highlights API timed out",
        "The live feed is taking too long to respond. Showing demo highlights instead.",
    ),
    ErrorKind.NETWORK: (
        "Network error",
        "Could not reach the live feed. Check your connection. Showing demo highlights instead.",
    ),
    ErrorKind.GENERIC: (
        "Connection error",
        "Could not load live highlights. Showing demo highlights instead.",
    ),
}


class FallbackOrchestrator:
    def __init__(
        self,
        context: FetchContext,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        trip_on_failure: bool = False,
    ) -> None:
        self._context = context
        self._timeout_seconds = timeout_seconds
        self._trip_on_failure = trip_on_failure

    @property
    def context(self) -> FetchContext:
        return self._context

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    async def fetch_with_fallback(
        self,
        remote_call: FetchCall,
        local_call: FetchCall,
        threshold: int = 1,
        notify: bool = True,
    ) -> FetchResult:
        circuit = self._context.circuit
        if not circuit.should_retry():
            logger.info("Remote source in cooldown; serving local data")
            return await local_call()

        try:
            result = await race_deadline(remote_call(), self._timeout_seconds)
        except Exception as e:
            return await self._on_remote_error(e, local_call, notify)

        if isinstance(result, SequenceResult) and len(result) >= threshold:
            self._on_success(notify)
            return result
        if isinstance(result, EntityResult):
            self._on_success(notify)
            return result

        if isinstance(result, SequenceResult):
            logger.warning(
                "Remote returned %d items (threshold %d); using fallback data",
                len(result),
                threshold,
            )
        elif isinstance(result, EmptyResult):
            logger.warning("Remote returned no data; using fallback data")
        else:
            logger.warning("Remote returned unexpected %s; using fallback data", type(result).__name__)
        self._on_soft_failure(notify)
        return await local_call()

    def _on_success(self, notify: bool) -> None:
        guard = self._context.dedup_guard
        was_failing = guard.is_shown
        self._context.circuit.record_success()
        if notify and was_failing:
            self._context.sink.notify(Notification(
                level=NotificationLevel.SUCCESS,
                title="Connected to live highlights",
                description="Live data is available again.",
                duration_ms=3000,
                dedup_id=STATUS_TOAST_ID,
            ))

    def _on_soft_failure(self, notify: bool) -> None:
        """
        Too little data: warn once per failure streak. The ERROR status event goes out
        with that warning only, so with notify=False or an already-warned streak no
        event is published and listeners keep their current status. Remote exceptions
        publish an ERROR event on every failure instead.
        """
        guard = self._context.dedup_guard
        if notify and not guard.is_shown:
            self._context.sink.notify(Notification(
                level=NotificationLevel.WARNING,
                title="Limited live data",
                description="The live feed returned too few highlights. Showing demo highlights instead.",
                duration_ms=5000,
                dedup_id=STATUS_TOAST_ID,
            ))
            guard.mark_shown()
            self._context.channel.publish(StatusEvent(
                kind=StatusKind.ERROR,
                error_message="Insufficient data from remote source",
                refresh=False,
            ))
        if self._trip_on_failure:
            self._context.circuit.trip()

    async def _on_remote_error(
        self,
        error: Exception,
        local_call: FetchCall,
        notify: bool,
    ) -> FetchResult:
        kind = classify_error(error)
        logger.error("Remote call failed (%s): %s; using fallback data", kind.value, error)
        guard = self._context.dedup_guard
        if notify and not guard.is_shown:
            title, description = _ERROR_TOASTS[kind]
            self._context.sink.notify(Notification(
                level=NotificationLevel.ERROR,
                title=title,
                description=description,
                duration_ms=5000,
                dedup_id=STATUS_TOAST_ID,
            ))
            guard.mark_shown()
        self._context.channel.publish(StatusEvent(
            kind=StatusKind.ERROR,
            error_message=str(error),
            refresh=False,
        ))
        if self._trip_on_failure:
            self._context.circuit.trip()
        return await local_call()
