"""Catalog domain services (provider adapter, schema mapping, facade)."""

from .music_service import MusicService
from .spotify_adapter import SpotifyCatalogAdapter

__all__ = ["MusicService", "SpotifyCatalogAdapter"]
