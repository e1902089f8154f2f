#!/usr/bin/env python
"""Failure taxonomy shared by the credential manager and catalog adapter."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    AUTH = "auth"
    NETWORK = "network"
    HTTP = "http"
    SCHEMA = "schema"


class CatalogError(Exception):
    """Base class for runtime failures talking to the catalog provider."""

    kind: FailureKind = FailureKind.NETWORK


class AuthFailure(CatalogError):
    """The client-credentials exchange failed (network, rejection or bad payload)."""

    kind = FailureKind.AUTH

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogFetchFailure(CatalogError):
    """An authorized catalog call failed at network, HTTP or schema level."""

    def __init__(
        self,
        operation: str,
        message: str,
        kind: FailureKind = FailureKind.NETWORK,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.kind = kind
        self.status_code = status_code


class ConfigurationError(ValueError):
    """Required settings are missing or invalid."""


__all__ = [
    "FailureKind",
    "CatalogError",
    "AuthFailure",
    "CatalogFetchFailure",
    "ConfigurationError",
]
