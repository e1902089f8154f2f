# spotcat/domain/catalog/spotify_adapter.py
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import quote

import requests

from spotcat.auth import CredentialManager
from spotcat.core.errors import CatalogError, CatalogFetchFailure, FailureKind
from spotcat.core.ports import CatalogPort, FetchResult
from spotcat.models import Album, Artist, Credential, SearchResult, Track
from spotcat.observability.metrics import record_fetch_failure

from . import mapping

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Raised by the mapping helpers (and pydantic, a ValueError) on unexpected payload shapes
_SCHEMA_ERRORS = (TypeError, ValueError, KeyError, AttributeError)


class SpotifyCatalogAdapter(CatalogPort):
    def __init__(self, credentials: CredentialManager,
                 api_url: str,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = 10.0,
                 search_tracks_limit: int = 20,
                 search_all_limit: int = 10,
                 browse_limit: int = 10):
        """Catalog port backed by bearer-authorized GETs against the Spotify Web API."""
        self._credentials = credentials
        self._api_url = api_url.rstrip('/')
        self._session = session or requests.Session()
        self._timeout = timeout
        self._search_tracks_limit = search_tracks_limit
        self._search_all_limit = search_all_limit
        self._browse_limit = browse_limit

    def search_tracks(self, query: str) -> FetchResult[List[Track]]:
        def _load():
            payload = self._get_json('search_tracks', '/search', {
                'q': query, 'type': 'track', 'limit': self._search_tracks_limit,
            })
            return mapping.tracks_from_items(mapping.page_items(payload, 'tracks'))

        return self._run('search_tracks', list, _load)

    def search_all(self, query: str) -> FetchResult[SearchResult]:
        def _load():
            payload = self._get_json('search_all', '/search', {
                'q': query, 'type': 'track,album,artist', 'limit': self._search_all_limit,
            })
            return mapping.search_result_from_payload(payload)

        return self._run('search_all', SearchResult.empty, _load)

    def get_album(self, album_id: str) -> FetchResult[Album]:
        def _load():
            payload = self._get_json('get_album', f'/albums/{quote(album_id, safe="")}')
            return mapping.album_from_payload(payload, include_tracks=True)

        return self._run('get_album', Album.empty, _load)

    def get_artist(self, artist_id: str) -> FetchResult[Artist]:
        def _load():
            payload = self._get_json('get_artist', f'/artists/{quote(artist_id, safe="")}')
            return mapping.artist_from_payload(payload)

        return self._run('get_artist', Artist.empty, _load)

    def get_featured_playlists(self) -> FetchResult[List[Album]]:
        def _load():
            payload = self._get_json('get_featured_playlists', '/browse/featured-playlists',
                                     {'limit': self._browse_limit})
            return mapping.playlists_from_items(mapping.page_items(payload, 'playlists'))

        return self._run('get_featured_playlists', list, _load)

    def get_new_releases(self) -> FetchResult[List[Album]]:
        def _load():
            payload = self._get_json('get_new_releases', '/browse/new-releases',
                                     {'limit': self._browse_limit})
            return mapping.albums_from_items(mapping.page_items(payload, 'albums'))

        return self._run('get_new_releases', list, _load)

    def _run(self, operation: str, default: Callable[[], T], load: Callable[[], T]) -> FetchResult[T]:
        """Run one operation, turning any failure into the operation's empty result."""
        try:
            return FetchResult.success(load())
        except CatalogError as exc:
            kind = exc.kind
            logger.warning('Spotify %s failed (%s): %s', operation, kind.value, exc,
                           extra={'operation': operation, 'failure_kind': kind.value})
        except _SCHEMA_ERRORS as exc:
            kind = FailureKind.SCHEMA
            logger.warning('Unexpected Spotify payload during %s: %s', operation, exc,
                           extra={'operation': operation, 'failure_kind': kind.value})
        record_fetch_failure(operation, kind.value)
        return FetchResult.failure(default(), kind)

    def _get_json(self, operation: str, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        credential = self._credentials.get_valid_credential()
        response = self._send(operation, path, params, credential)
        if response.status_code == 401:
            # Revoked early or clock skew; one retry with a fresh token, no further backoff
            logger.warning('Spotify rejected the access token during %s. Refreshing credentials.', operation)
            self._credentials.invalidate(credential)
            credential = self._credentials.get_valid_credential()
            response = self._send(operation, path, params, credential)

        if response.status_code != 200:
            raise CatalogFetchFailure(
                operation,
                f'HTTP {response.status_code} from {path}',
                kind=FailureKind.HTTP,
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogFetchFailure(operation, f'invalid JSON body: {exc}', kind=FailureKind.SCHEMA) from exc
        if not isinstance(payload, dict):
            raise CatalogFetchFailure(operation, 'response body is not a JSON object', kind=FailureKind.SCHEMA)
        return payload

    def _send(self, operation: str, path: str, params: Optional[Dict[str, Any]],
              credential: Credential) -> requests.Response:
        url = f'{self._api_url}{path}'
        logger.debug('GET %s for %s', url, operation)
        try:
            return self._session.get(
                url,
                params=params,
                headers={'Authorization': f'Bearer {credential.token}'},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise CatalogFetchFailure(operation, str(exc), kind=FailureKind.NETWORK) from exc


__all__ = ["SpotifyCatalogAdapter"]
