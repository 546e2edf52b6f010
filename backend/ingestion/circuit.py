"""
Circuit state tracker for the remote highlights source.

Permissive breaker: while enabled, the remote source is always attempted. Once
tripped, a call is allowed when either the cooldown since the last success has
elapsed or the retry budget is not yet spent. Only the methods here mutate state.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict

from ingestion.events import RefreshRequested, StatusEvent, StatusEventChannel, StatusKind
from ingestion.notifications import NotificationDedupGuard

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_COOLDOWN_SECONDS = 60.0


class CircuitStateTracker:
    def __init__(
        self,
        channel: StatusEventChannel,
        dedup_guard: NotificationDedupGuard,
        max_retries: int = DEFAULT_MAX_RETRIES,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._channel = channel
        self._dedup_guard = dedup_guard
        self._clock = clock
        self.max_retries = max(0, int(max_retries))
        self.cooldown_seconds = max(0.0, float(cooldown_seconds))

        self._last_success_time: float = 0.0
        self._retry_count = 0
        self._enabled = True

    @property
    def last_success_time(self) -> float:
        return self._last_success_time

    @property
    def retry_count(self) -> int:
        return self._retry_count

    @property
    def enabled(self) -> bool:
        return self._enabled

    def should_retry(self) -> bool:
        """True if the remote source should be attempted on this call."""
        if self._enabled:
            return True
        if self._clock() - self._last_success_time > self.cooldown_seconds:
            logger.info("Remote source cooldown elapsed; attempting live fetch")
            return True
        if self._retry_count < self.max_retries:
            self._retry_count += 1
            logger.info("Remote source retry %d/%d", self._retry_count, self.max_retries)
            return True
        return False

    def record_success(self) -> None:
        """Reset the breaker after a good remote response and announce the connection."""
        was_enabled = self._enabled
        self._last_success_time = self._clock()
        self._retry_count = 0
        self._enabled = True
        self._dedup_guard.reset()
        if not was_enabled:
            logger.info("Remote source recovered")
        self._channel.publish(StatusEvent(kind=StatusKind.CONNECTED, refresh=False))

    def trip(self) -> None:
        """Stop attempting the remote source until cooldown or retry budget allows it."""
        if self._enabled:
            logger.warning(
                "Remote source disabled (cooldown %.0fs, %d retries)",
                self.cooldown_seconds,
                self.max_retries,
            )
        self._enabled = False

    def force_reset(self) -> None:
        """Clear all breaker state so the next call attempts the remote source."""
        self._retry_count = 0
        self._last_success_time = 0.0
        self._enabled = True
        self._dedup_guard.reset()
        logger.info("Remote source circuit reset; requesting refresh")
        self._channel.publish(RefreshRequested(reason="force_retry"))

    def snapshot(self) -> Dict[str, Any]:
        return {
            "enabled": self._enabled,
            "retry_count": self._retry_count,
            "max_retries": self.max_retries,
            "cooldown_seconds": self.cooldown_seconds,
            "last_success_time": self._last_success_time,
        }
