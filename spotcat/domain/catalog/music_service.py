#!/usr/bin/env python
"""
Application facade over the catalog port.

Blank queries short-circuit to empty results without touching the cache or
the provider. Everything else is looked up in the result cache first; only
successful provider results are stored. List results are kept as tuples in
the cache and handed out as fresh lists so callers never share a live view.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from spotcat.auth import CredentialManager
from spotcat.core.ports import CatalogPort, FetchResult
from spotcat.models import Album, Artist, SearchResult, Track
from spotcat.observability.metrics import record_cache_lookup
from spotcat.utils.cache import MISSING, ResultCache, cache_key

logger = logging.getLogger(__name__)


def _is_blank(query: Optional[str]) -> bool:
    return not query or not query.strip()


def _freeze(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value


def _thaw(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value


class MusicService:
    # Port operation -> factory for its result when the query is blank (None: takes an id, not a query)
    _OPERATIONS: Dict[str, Optional[Callable[[], Any]]] = {
        'search_tracks': list,
        'search_all': SearchResult.empty,
        'get_album': None,
        'get_artist': None,
        'get_featured_playlists': None,
        'get_new_releases': None,
    }

    def __init__(self, catalog: CatalogPort, cache: Optional[ResultCache] = None,
                 credentials: Optional[CredentialManager] = None):
        self._catalog = catalog
        self._cache = cache if cache is not None else ResultCache()
        self._credentials = credentials

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the first valid credential exists.

        Joins the exchange already in flight if there is one, otherwise starts
        it. Raises AuthFailure as soon as that exchange fails. With ``timeout``
        set, waits at most that long for an in-flight exchange and returns
        False if it has not finished.
        """
        if self._credentials is None:
            return True
        if self._credentials.has_valid_credential():
            return True
        if not self._credentials.wait_until_ready(timeout):
            return False
        logger.info('Spotify catalog ready.')
        return True

    def search_tracks(self, query: str) -> List[Track]:
        return self.fetch('search_tracks', query).value

    def search_all(self, query: str) -> SearchResult:
        return self.fetch('search_all', query).value

    def get_album(self, album_id: str) -> Album:
        return self.fetch('get_album', album_id).value

    def get_artist(self, artist_id: str) -> Artist:
        return self.fetch('get_artist', artist_id).value

    def get_featured_playlists(self) -> List[Album]:
        return self.fetch('get_featured_playlists').value

    def get_new_releases(self) -> List[Album]:
        return self.fetch('get_new_releases').value

    def fetch(self, operation: str, *args: str) -> FetchResult:
        """Run a catalog operation by name and return the tagged outcome.

        A failed result still carries the operation's empty value; its
        ``error`` says why it is empty.
        """
        try:
            blank_result = self._OPERATIONS[operation]
        except KeyError:
            raise ValueError(f"Unknown catalog operation: {operation}") from None

        if blank_result is not None and _is_blank(args[0] if args else None):
            logger.debug('Blank query for %s; returning empty result.', operation)
            return FetchResult.success(blank_result())

        key = cache_key(operation, *args)
        cached = self._cache.get(key, MISSING)
        record_cache_lookup(operation, hit=cached is not MISSING)
        if cached is not MISSING:
            logger.debug('Cache hit for %s%r', operation, args)
            return FetchResult.success(_thaw(cached))

        result = getattr(self._catalog, operation)(*args)
        if result.ok:
            snapshot = _freeze(result.value)
            self._cache.put(key, snapshot)
            return FetchResult.success(_thaw(snapshot))
        return result

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info('Catalog result cache cleared.')


__all__ = ["MusicService"]
