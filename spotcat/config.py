#!/usr/bin/env python
# spotcat/config.py
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


class Config:
    # Spotify API (client-credentials flow only)
    SPOTIFY_CLIENT_ID = os.environ.get('SPOTIFY_CLIENT_ID')
    SPOTIFY_CLIENT_SECRET = os.environ.get('SPOTIFY_CLIENT_SECRET')
    SPOTIFY_AUTH_URL = os.environ.get('SPOTIFY_AUTH_URL') or 'https://accounts.spotify.com/api/token'
    SPOTIFY_API_URL = os.environ.get('SPOTIFY_API_URL') or 'https://api.spotify.com/v1'

    # Transport
    HTTP_TIMEOUT_SECONDS = _get_float('HTTP_TIMEOUT_SECONDS', 10.0)

    # Page sizes per catalog operation (Spotify caps at 50)
    CATALOG_SEARCH_TRACKS_LIMIT = _get_int('CATALOG_SEARCH_TRACKS_LIMIT', 20)
    CATALOG_SEARCH_ALL_LIMIT = _get_int('CATALOG_SEARCH_ALL_LIMIT', 10)
    CATALOG_BROWSE_LIMIT = _get_int('CATALOG_BROWSE_LIMIT', 10)

    # Result cache bounds; 0 keeps the cache unbounded and without expiry
    CATALOG_CACHE_MAXSIZE = max(0, _get_int('CATALOG_CACHE_MAXSIZE', 0))
    CATALOG_CACHE_TTL_SECONDS = max(0, _get_int('CATALOG_CACHE_TTL_SECONDS', 0))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON = _get_bool('LOG_JSON', False)
