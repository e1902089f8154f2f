"""Authenticated access layer to the Spotify Web API catalog."""

__version__ = "0.1.0"
