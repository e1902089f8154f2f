#!/usr/bin/env python
"""
Pydantic models for the catalog domain.

These are the stable shapes handed to callers regardless of how the provider
names its fields. Every model is frozen; sequences are stored as tuples so a
cached instance can be shared without becoming a live view.
"""

from __future__ import annotations

import time
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _DomainModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Track(_DomainModel):
    """A single playable track."""

    id: str
    name: str
    artist: str
    album: str
    album_cover: str = ""
    duration_ms: int = Field(default=0, ge=0, alias="duration")
    preview_url: Optional[str] = None


class Album(_DomainModel):
    """An album, or a playlist presented in album shape."""

    id: str
    name: str
    artist: str
    cover_image: str = ""
    release_date: str = ""
    total_tracks: int = Field(default=0, ge=0)
    tracks: Optional[Tuple[Track, ...]] = None

    @classmethod
    def empty(cls) -> "Album":
        return cls(id="", name="", artist="")

    @property
    def is_empty(self) -> bool:
        return not self.id


class Artist(_DomainModel):
    id: str
    name: str
    image: str = ""
    genres: Tuple[str, ...] = ()
    # None means the provider did not report a count, which is not zero
    followers: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def empty(cls) -> "Artist":
        return cls(id="", name="")

    @property
    def is_empty(self) -> bool:
        return not self.id


class SearchResult(_DomainModel):
    tracks: Tuple[Track, ...] = ()
    albums: Tuple[Album, ...] = ()
    artists: Tuple[Artist, ...] = ()

    @classmethod
    def empty(cls) -> "SearchResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.tracks or self.albums or self.artists)


class Credential(BaseModel):
    """Bearer token plus the absolute instant (epoch seconds) it stops working."""

    model_config = ConfigDict(frozen=True)

    # Kept out of repr so bearer tokens never land in logs or tracebacks
    token: str = Field(repr=False)
    expires_at: float

    def is_valid(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time()
        return bool(self.token) and now < self.expires_at


__all__ = ["Track", "Album", "Artist", "SearchResult", "Credential"]
