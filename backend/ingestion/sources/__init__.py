"""Highlights sources: live ScoreBat feed and recorded demo fixtures."""

from .base import HighlightsSource
from .recorded import RecordedHighlightsSource
from .scorebat import ScoreBatSource

__all__ = [
    "HighlightsSource",
    "RecordedHighlightsSource",
    "ScoreBatSource",
]
