"""
Status event channel: synchronous publish/subscribe for connectivity transitions.

Owned by the composition root and injected into the circuit tracker, the
fallback orchestrator, and any listener. No queue and no replay: a handler
registered after a publish never sees that event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

logger = logging.getLogger(__name__)


class StatusKind(str, Enum):
    CONNECTED = "connected"
    ERROR = "error"


@dataclass(frozen=True)
class StatusEvent:
    """Remote source became reachable (connected) or failed (error)."""

    kind: StatusKind
    error_message: Optional[str] = None
    refresh: bool = False


@dataclass(frozen=True)
class RefreshRequested:
    """Listeners should re-fetch; published on an explicit retry."""

    reason: str = "force_retry"


ChannelEvent = Union[StatusEvent, RefreshRequested]
EventHandler = Callable[[ChannelEvent], None]


class StatusEventChannel:
    """Broadcasts events to the handlers registered at publish time."""

    def __init__(self) -> None:
        self._handlers: List[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def publish(self, event: ChannelEvent) -> None:
        """Call every current handler in registration order; a failing handler does not stop the rest."""
        logger.debug("Publishing %s", event)
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("Status event handler %r failed for %s", handler, event)
