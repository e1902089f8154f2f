"""Domain models shared by the adapter, cache and facade."""

from .dto import Album, Artist, Credential, SearchResult, Track

__all__ = ["Album", "Artist", "Credential", "SearchResult", "Track"]
