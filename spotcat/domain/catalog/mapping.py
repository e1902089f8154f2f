#!/usr/bin/env python
"""
Spotify Web API payload -> domain model conversion.

Every helper tolerates missing or null nested objects and arrays: they map to
the documented defaults ("Unknown", "", 0, empty tuples), never to an error.
Anything that is not shaped like a JSON object where one is required raises
TypeError, which the adapter reports as a schema failure.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from spotcat.models import Album, Artist, SearchResult, Track

UNKNOWN = "Unknown"
PLAYLIST_DEFAULT_OWNER = "Spotify"


def _obj(value: Any) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _items(value: Any) -> List[Mapping[str, Any]]:
    """Entries of a JSON array; null entries (Spotify sends some) are skipped."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected a JSON array, got {type(value).__name__}")
    return [_obj(entry) for entry in value if entry is not None]


def _strings(value: Any) -> tuple:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"expected a JSON array, got {type(value).__name__}")
    return tuple(str(entry) for entry in value if entry is not None)


def _first_name(entries: Any) -> Optional[str]:
    listed = _items(entries)
    if not listed:
        return None
    return listed[0].get("name") or None


def _first_image_url(images: Any) -> str:
    listed = _items(images)
    if not listed:
        return ""
    return listed[0].get("url") or ""


def _count(value: Any) -> int:
    if value is None:
        return 0
    return max(0, int(value))


def track_from_payload(item: Mapping[str, Any], parent_album: Optional[Mapping[str, Any]] = None) -> Track:
    """Map a full or simplified track object.

    Simplified tracks (the ones nested in an album payload) carry no ``album``
    field; ``parent_album`` stands in for it there.
    """
    item = _obj(item)
    album = _obj(item.get("album")) if item.get("album") is not None else _obj(parent_album)
    return Track(
        id=item.get("id") or "",
        name=item.get("name") or "",
        artist=_first_name(item.get("artists")) or UNKNOWN,
        album=album.get("name") or UNKNOWN,
        album_cover=_first_image_url(album.get("images")),
        duration_ms=_count(item.get("duration_ms")),
        preview_url=item.get("preview_url") or None,
    )


def album_from_payload(item: Mapping[str, Any], include_tracks: bool = False) -> Album:
    item = _obj(item)
    tracks = None
    if include_tracks:
        tracks = tuple(
            track_from_payload(track, parent_album=item)
            for track in _items(_obj(item.get("tracks")).get("items"))
        )
    return Album(
        id=item.get("id") or "",
        name=item.get("name") or "",
        artist=_first_name(item.get("artists")) or UNKNOWN,
        cover_image=_first_image_url(item.get("images")),
        release_date=item.get("release_date") or "",
        total_tracks=_count(item.get("total_tracks")),
        tracks=tracks,
    )


def playlist_from_payload(item: Mapping[str, Any]) -> Album:
    """Present a playlist in album shape: owner as artist, no release date."""
    item = _obj(item)
    return Album(
        id=item.get("id") or "",
        name=item.get("name") or "",
        artist=_obj(item.get("owner")).get("display_name") or PLAYLIST_DEFAULT_OWNER,
        cover_image=_first_image_url(item.get("images")),
        release_date="",
        total_tracks=_count(_obj(item.get("tracks")).get("total")),
    )


def artist_from_payload(item: Mapping[str, Any]) -> Artist:
    item = _obj(item)
    followers = _obj(item.get("followers")).get("total")
    return Artist(
        id=item.get("id") or "",
        name=item.get("name") or "",
        image=_first_image_url(item.get("images")),
        genres=_strings(item.get("genres")),
        followers=int(followers) if followers is not None else None,
    )


def tracks_from_items(items: Iterable[Any]) -> List[Track]:
    return [track_from_payload(item) for item in _items(items)]


def albums_from_items(items: Iterable[Any]) -> List[Album]:
    return [album_from_payload(item) for item in _items(items)]


def playlists_from_items(items: Iterable[Any]) -> List[Album]:
    return [playlist_from_payload(item) for item in _items(items)]


def artists_from_items(items: Iterable[Any]) -> List[Artist]:
    return [artist_from_payload(item) for item in _items(items)]


def page_items(payload: Mapping[str, Any], section: str) -> Any:
    """``payload[section]["items"]`` with missing levels treated as empty."""
    return _obj(_obj(payload).get(section)).get("items")


def search_result_from_payload(payload: Dict[str, Any]) -> SearchResult:
    return SearchResult(
        tracks=tuple(tracks_from_items(page_items(payload, "tracks"))),
        albums=tuple(albums_from_items(page_items(payload, "albums"))),
        artists=tuple(artists_from_items(page_items(payload, "artists"))),
    )


__all__ = [
    "UNKNOWN",
    "PLAYLIST_DEFAULT_OWNER",
    "track_from_payload",
    "album_from_payload",
    "playlist_from_payload",
    "artist_from_payload",
    "tracks_from_items",
    "albums_from_items",
    "playlists_from_items",
    "artists_from_items",
    "page_items",
    "search_result_from_payload",
]
