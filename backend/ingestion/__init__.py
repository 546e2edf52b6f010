"""Ingestion: highlights schema, live/recorded sources, and the fallback fetch layer."""

from .schema import (
    Competition,
    EmptyResult,
    EntityResult,
    FetchResult,
    League,
    MatchHighlight,
    SequenceResult,
    Team,
    Video,
)

__all__ = [
    "Competition",
    "EmptyResult",
    "EntityResult",
    "FetchResult",
    "League",
    "MatchHighlight",
    "SequenceResult",
    "Team",
    "Video",
]
