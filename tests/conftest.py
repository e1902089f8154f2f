import importlib
import os
import sys

import pytest

# Ensure project root is on sys.path so 'spotcat' imports without an install
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Ensure a clean env for tests with fake Spotify credentials."""
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "test-client-secret")
    monkeypatch.setenv("SPOTIFY_AUTH_URL", test_stubs.AUTH_URL)
    monkeypatch.setenv("SPOTIFY_API_URL", test_stubs.API_URL)
    for name in ("CATALOG_CACHE_MAXSIZE", "CATALOG_CACHE_TTL_SECONDS", "CATALOG_SEARCH_TRACKS_LIMIT",
                 "CATALOG_SEARCH_ALL_LIMIT", "CATALOG_BROWSE_LIMIT", "HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    import spotcat.config
    importlib.reload(spotcat.config)
    yield


@pytest.fixture
def clock():
    return test_stubs.FakeClock()


@pytest.fixture
def spotify_session():
    return test_stubs.FakeSpotifySession()


@pytest.fixture
def credentials(spotify_session, clock):
    from spotcat.auth import CredentialManager

    return CredentialManager(
        client_id="test-client-id",
        client_secret="test-client-secret",
        auth_url=test_stubs.AUTH_URL,
        session=spotify_session,
        timeout=5,
        clock=clock,
    )


@pytest.fixture
def adapter(credentials, spotify_session):
    from spotcat.domain.catalog import SpotifyCatalogAdapter

    return SpotifyCatalogAdapter(credentials, api_url=test_stubs.API_URL, session=spotify_session, timeout=5)


@pytest.fixture
def music_service(adapter, credentials):
    from spotcat.domain.catalog import MusicService
    from spotcat.utils.cache import ResultCache

    return MusicService(adapter, cache=ResultCache(), credentials=credentials)
