#!/usr/bin/env python
"""Command-line lookups against the Spotify catalog, printed as JSON.

Usage: python -m spotcat <command> [argument]
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from pydantic import BaseModel

from spotcat.app import create_music_service
from spotcat.core.errors import AuthFailure, ConfigurationError
from spotcat.observability import configure_logging
from spotcat.settings import load_catalog_settings


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spotcat", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("search", help="search tracks").add_argument("query")
    sub.add_parser("search-all", help="search tracks, albums and artists").add_argument("query")
    sub.add_parser("album", help="album with its tracks").add_argument("album_id")
    sub.add_parser("artist", help="artist details").add_argument("artist_id")
    sub.add_parser("featured", help="featured playlists")
    sub.add_parser("new-releases", help="new album releases")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = load_catalog_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level, json_output=settings.log_json)

    service = create_music_service(settings)
    try:
        service.ready()
    except AuthFailure as exc:
        print(f"Spotify authentication failed: {exc}", file=sys.stderr)
        return 1

    if args.command == "search":
        result = service.fetch("search_tracks", args.query)
    elif args.command == "search-all":
        result = service.fetch("search_all", args.query)
    elif args.command == "album":
        result = service.fetch("get_album", args.album_id)
    elif args.command == "artist":
        result = service.fetch("get_artist", args.artist_id)
    elif args.command == "featured":
        result = service.fetch("get_featured_playlists")
    else:
        result = service.fetch("get_new_releases")

    print(json.dumps(_to_jsonable(result.value), indent=2, ensure_ascii=False))
    if not result.ok:
        print(f"Lookup failed ({result.error.value}); result is empty.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
