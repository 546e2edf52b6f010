"""
Normalized, source-agnostic schema for match highlights.

Both the live feed and the recorded fixtures map into these models, and every
data-source query returns a tagged FetchResult so callers never inspect shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


class Video(BaseModel):
    """One embeddable highlight clip."""

    id: str = Field(..., description="Video identifier")
    title: str = Field(..., description="Clip title (e.g. Highlights, Goal 1-0)")
    embed: str = Field("", description="Embed HTML or player URL")


class Competition(BaseModel):
    """Competition/league a match belongs to."""

    id: str = Field(..., description="Slug identifier (e.g. england-premier-league)")
    name: str = Field(..., description="Display name")
    country: Optional[str] = Field(None, description="Country or region")
    logo: Optional[str] = Field(None, description="Logo URL")


class Team(BaseModel):
    id: str = Field(..., description="Slug identifier")
    name: str = Field(..., description="Display name")


class MatchHighlight(BaseModel):
    """Highlights for one match."""

    id: str = Field(..., description="Unique match identifier")
    title: str = Field(..., description="Feed title, usually 'Home - Away'")
    competition: Competition
    home_team: Team
    away_team: Team
    date: datetime = Field(..., description="Match date (UTC)")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL")
    match_url: Optional[str] = Field(None, description="Match page URL on the provider")
    videos: List[Video] = Field(default_factory=list)


class League(BaseModel):
    """A competition together with its highlights."""

    id: str
    name: str
    country: Optional[str] = None
    logo: Optional[str] = None
    highlights: List[MatchHighlight] = Field(default_factory=list)


# --- Tagged fetch results ---


@dataclass(frozen=True)
class SequenceResult(Generic[T]):
    """A query returned a list of entities."""

    items: List[T] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def unwrap(self) -> List[T]:
        return list(self.items)


@dataclass(frozen=True)
class EntityResult(Generic[T]):
    """A query returned exactly one entity."""

    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class EmptyResult:
    """A query returned nothing usable."""

    def unwrap(self) -> None:
        return None


FetchResult = Union[SequenceResult, EntityResult, EmptyResult]


def entity_or_empty(value: Optional[T]) -> FetchResult:
    """EntityResult when value is present, else EmptyResult."""
    if value is None:
        return EmptyResult()
    return EntityResult(value=value)
