"""
Connection status monitor: a channel listener tracking whether the feed is live or demo.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ingestion.events import ChannelEvent, RefreshRequested, StatusEvent, StatusEventChannel, StatusKind

logger = logging.getLogger(__name__)

STATUS_LIVE = "live"
STATUS_DEMO = "demo"
STATUS_CHECKING = "checking"


class ConnectionStatusMonitor:
    def __init__(self) -> None:
        self.status = STATUS_CHECKING
        self.last_error: Optional[str] = None
        self.refresh_requests = 0
        self._channel: Optional[StatusEventChannel] = None

    def attach(self, channel: StatusEventChannel) -> None:
        self.detach()
        channel.subscribe(self.handle)
        self._channel = channel

    def detach(self) -> None:
        if self._channel is not None:
            self._channel.unsubscribe(self.handle)
            self._channel = None

    def handle(self, event: ChannelEvent) -> None:
        previous = self.status
        if isinstance(event, RefreshRequested):
            self.status = STATUS_CHECKING
            self.refresh_requests += 1
        elif isinstance(event, StatusEvent):
            if event.kind is StatusKind.CONNECTED:
                self.status = STATUS_LIVE
                self.last_error = None
            elif event.kind is StatusKind.ERROR:
                self.status = STATUS_DEMO
                self.last_error = event.error_message
        if self.status != previous:
            logger.info("Highlights source status %s -> %s", previous, self.status)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "last_error": self.last_error,
            "refresh_requests": self.refresh_requests,
        }
