import logging
from typing import Optional

import requests

from spotcat.auth import CredentialManager
from spotcat.domain.catalog import MusicService, SpotifyCatalogAdapter
from spotcat.settings import CatalogSettings, load_catalog_settings
from spotcat.utils.cache import ResultCache

logger = logging.getLogger(__name__)


def build_cache(settings: CatalogSettings) -> ResultCache:
    maxsize = settings.cache_maxsize or None
    ttl = settings.cache_ttl or None
    if maxsize is None and ttl is None:
        logger.debug("Catalog result cache is unbounded and never expires; clear_cache() is the only invalidation.")
    return ResultCache(maxsize=maxsize, ttl=ttl)


def create_music_service(settings: Optional[CatalogSettings] = None,
                         session: Optional[requests.Session] = None,
                         prefetch: bool = True) -> MusicService:
    """
    Wire credential manager, Spotify adapter, result cache and facade together.

    With ``prefetch`` the first token exchange starts right away on a
    background thread; ``MusicService.ready()`` and any catalog call made
    before it finishes wait for that same exchange.
    """
    settings = settings or load_catalog_settings()
    session = session or requests.Session()

    credentials = CredentialManager(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        auth_url=settings.auth_url,
        session=session,
        timeout=settings.http_timeout,
    )
    adapter = SpotifyCatalogAdapter(
        credentials,
        api_url=settings.api_url,
        session=session,
        timeout=settings.http_timeout,
        search_tracks_limit=settings.search_tracks_limit,
        search_all_limit=settings.search_all_limit,
        browse_limit=settings.browse_limit,
    )
    service = MusicService(adapter, cache=build_cache(settings), credentials=credentials)
    if prefetch:
        credentials.prefetch()
    logger.info("Spotify catalog service created for %s", settings.api_url)
    return service


__all__ = ["create_music_service", "build_cache"]
