#!/usr/bin/env python
"""
Catalog port: the capability boundary between application logic and a
concrete provider.

Operations never raise for provider failures. They return a FetchResult whose
value is always usable (the empty default when the call failed) and whose
error tag says whether that emptiness is genuine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from spotcat.models import Album, Artist, SearchResult, Track

from .errors import FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    value: T
    error: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, default: T, kind: FailureKind) -> "FetchResult[T]":
        return cls(value=default, error=kind)


class CatalogPort:
    def search_tracks(self, query: str) -> FetchResult[List[Track]]:  # pragma: no cover - interface
        raise NotImplementedError

    def search_all(self, query: str) -> FetchResult[SearchResult]:  # pragma: no cover - interface
        raise NotImplementedError

    def get_album(self, album_id: str) -> FetchResult[Album]:  # pragma: no cover - interface
        raise NotImplementedError

    def get_artist(self, artist_id: str) -> FetchResult[Artist]:  # pragma: no cover - interface
        raise NotImplementedError

    def get_featured_playlists(self) -> FetchResult[List[Album]]:  # pragma: no cover - interface
        raise NotImplementedError

    def get_new_releases(self) -> FetchResult[List[Album]]:  # pragma: no cover - interface
        raise NotImplementedError


__all__ = ["CatalogPort", "FetchResult"]
