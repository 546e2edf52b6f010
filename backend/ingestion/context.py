"""
FetchContext: the shared state of the data-acquisition layer.

Built once by the composition root (main.py) and injected everywhere; tests
build a fresh one per case.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from ingestion.circuit import DEFAULT_COOLDOWN_SECONDS, DEFAULT_MAX_RETRIES, CircuitStateTracker
from ingestion.events import StatusEventChannel
from ingestion.notifications import NotificationDedupGuard, NotificationFeed, NotificationSink


@dataclass
class FetchContext:
    channel: StatusEventChannel
    dedup_guard: NotificationDedupGuard
    circuit: CircuitStateTracker
    sink: NotificationSink = field(default_factory=NotificationFeed)


def build_context(
    max_retries: int = DEFAULT_MAX_RETRIES,
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
    sink: NotificationSink | None = None,
    clock: Callable[[], float] = time.time,
) -> FetchContext:
    """Wire channel, dedup guard and circuit tracker together."""
    channel = StatusEventChannel()
    dedup_guard = NotificationDedupGuard()
    circuit = CircuitStateTracker(
        channel,
        dedup_guard,
        max_retries=max_retries,
        cooldown_seconds=cooldown_seconds,
        clock=clock,
    )
    return FetchContext(
        channel=channel,
        dedup_guard=dedup_guard,
        circuit=circuit,
        sink=sink if sink is not None else NotificationFeed(),
    )
