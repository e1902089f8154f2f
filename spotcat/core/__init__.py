"""Core primitives shared across layers: failures and the catalog port."""

from .errors import AuthFailure, CatalogError, CatalogFetchFailure, ConfigurationError, FailureKind
from .ports import CatalogPort, FetchResult

__all__ = [
    "AuthFailure",
    "CatalogError",
    "CatalogFetchFailure",
    "ConfigurationError",
    "FailureKind",
    "CatalogPort",
    "FetchResult",
]
