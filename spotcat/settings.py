#!/usr/bin/env python
"""
Centralized configuration schema for the catalog access layer.

Merges defaults from spotcat.config.Config (looked up at call time) with optional runtime overrides
and validates them once at process start.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from spotcat import config
from spotcat.core.errors import ConfigurationError

# Spotify rejects page sizes outside 1..50
_MIN_LIMIT = 1
_MAX_LIMIT = 50


class CatalogSettings(BaseModel):
    """Credentials, endpoints and tuning knobs for the catalog service."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    client_id: str
    client_secret: str
    auth_url: str = "https://accounts.spotify.com/api/token"
    api_url: str = "https://api.spotify.com/v1"

    http_timeout: Optional[float] = 10.0

    search_tracks_limit: int = 20
    search_all_limit: int = 10
    browse_limit: int = 10

    cache_maxsize: int = 0
    cache_ttl: float = 0

    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("client_id", "client_secret")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("auth_url", "api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return value

    @field_validator("search_tracks_limit", "search_all_limit", "browse_limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: object) -> int:
        try:
            limit = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10
        return max(_MIN_LIMIT, min(limit, _MAX_LIMIT))

    @field_validator("http_timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> Optional[float]:
        if value is None:
            return None
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10.0
        return timeout if timeout > 0 else None

    @field_validator("cache_maxsize", mode="before")
    @classmethod
    def _coerce_maxsize(cls, value: object) -> int:
        try:
            maxsize = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0
        return max(0, maxsize)

    @field_validator("cache_ttl", mode="before")
    @classmethod
    def _coerce_ttl(cls, value: object) -> float:
        try:
            ttl = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0.0
        return max(0.0, ttl)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()


def load_catalog_settings(overrides: Optional[Dict[str, Any]] = None) -> CatalogSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "client_id": config.Config.SPOTIFY_CLIENT_ID or "",
        "client_secret": config.Config.SPOTIFY_CLIENT_SECRET or "",
        "auth_url": config.Config.SPOTIFY_AUTH_URL,
        "api_url": config.Config.SPOTIFY_API_URL,
        "http_timeout": config.Config.HTTP_TIMEOUT_SECONDS,
        "search_tracks_limit": config.Config.CATALOG_SEARCH_TRACKS_LIMIT,
        "search_all_limit": config.Config.CATALOG_SEARCH_ALL_LIMIT,
        "browse_limit": config.Config.CATALOG_BROWSE_LIMIT,
        "cache_maxsize": config.Config.CATALOG_CACHE_MAXSIZE,
        "cache_ttl": config.Config.CATALOG_CACHE_TTL_SECONDS,
        "log_level": config.Config.LOG_LEVEL,
        "log_json": config.Config.LOG_JSON,
    }
    if overrides:
        data.update(overrides)
    try:
        return CatalogSettings.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
        raise ConfigurationError(f"Invalid catalog settings: {', '.join(fields)}") from exc


__all__ = [
    "CatalogSettings",
    "load_catalog_settings",
]
