"""
User-facing notifications: leveled messages, sinks, and the once-per-streak dedup guard.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """One toast for the front end."""

    level: NotificationLevel
    title: str
    description: str = ""
    duration_ms: int = Field(5000, ge=0)
    dedup_id: Optional[str] = Field(None, description="Front end replaces toasts sharing this id")
    created_at_utc: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class LoggingNotificationSink:
    """Writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        logger.log(
            _LOG_LEVELS[notification.level],
            "[%s] %s: %s",
            notification.level.value,
            notification.title,
            notification.description,
        )


class NotificationFeed:
    """
    Keeps the most recent notifications in memory for the front end to poll.
    Also logs each one.
    """

    def __init__(self, max_items: int = 50) -> None:
        self._items: Deque[Notification] = deque(maxlen=max_items)
        self._lock = threading.Lock()
        self._log_sink = LoggingNotificationSink()

    def notify(self, notification: Notification) -> None:
        self._log_sink.notify(notification)
        with self._lock:
            self._items.append(notification)

    def recent(self, limit: int | None = None) -> List[Notification]:
        """Newest first."""
        with self._lock:
            items = list(self._items)
        items.reverse()
        if limit is not None:
            items = items[: max(0, limit)]
        return items

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class NotificationDedupGuard:
    """At most one error notification per unbroken failure streak."""

    def __init__(self) -> None:
        self._shown = False

    @property
    def is_shown(self) -> bool:
        return self._shown

    def mark_shown(self) -> None:
        self._shown = True

    def reset(self) -> None:
        self._shown = False

    def snapshot(self) -> Dict[str, Any]:
        return {"has_shown_error": self._shown}
