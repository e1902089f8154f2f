#!/usr/bin/env python
"""Server-to-server authentication against the Spotify accounts service."""

from __future__ import annotations

from .credentials import CredentialManager, basic_auth_header

__all__ = ["CredentialManager", "basic_auth_header"]
