import threading
import time

import pytest
from prometheus_client import REGISTRY

from spotcat.core.errors import AuthFailure, FailureKind
from spotcat.core.ports import CatalogPort, FetchResult
from spotcat.domain.catalog import MusicService
from spotcat.models import Album, SearchResult
from tests.support.factories import AlbumPayloadFactory, TrackPayloadFactory, album_detail, paging
from tests.support.stubs import FakeResponse


class _RecordingCatalog(CatalogPort):
    """Port double returning canned results and counting calls."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def search_tracks(self, query):
        self.calls.append(("search_tracks", query))
        return self.result or FetchResult.success([])

    def search_all(self, query):
        self.calls.append(("search_all", query))
        return self.result or FetchResult.success(SearchResult.empty())


@pytest.mark.unit
@pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
def test_blank_query_short_circuits_without_network(music_service, spotify_session, query):
    assert music_service.search_all(query) == SearchResult(tracks=(), albums=(), artists=())
    assert music_service.search_tracks(query) == []

    assert spotify_session.token_calls == []
    assert spotify_session.get_calls == []
    assert len(music_service.cache) == 0


@pytest.mark.unit
def test_warm_cache_returns_identical_results_without_second_call(music_service, spotify_session):
    spotify_session.routes["/search"] = FakeResponse(200, {"tracks": paging(TrackPayloadFactory(), TrackPayloadFactory())})

    first = music_service.search_tracks("queen")
    second = music_service.search_tracks("queen")

    assert first == second
    assert len(first) == 2
    assert len(spotify_session.get_calls) == 1


@pytest.mark.unit
def test_returned_lists_are_independent_snapshots(music_service, spotify_session):
    spotify_session.routes["/search"] = FakeResponse(200, {"tracks": paging(TrackPayloadFactory())})

    first = music_service.search_tracks("queen")
    first.clear()

    assert len(music_service.search_tracks("queen")) == 1


@pytest.mark.unit
def test_same_query_under_different_operations_is_cached_separately(music_service, spotify_session):
    spotify_session.routes["/search"] = FakeResponse(200, {"tracks": paging(TrackPayloadFactory())})

    music_service.search_tracks("a")
    music_service.search_all("a")
    music_service.search_all("a")

    assert [call["params"]["type"] for call in spotify_session.get_calls] == ["track", "track,album,artist"]


@pytest.mark.unit
def test_failed_results_are_not_cached(music_service, spotify_session):
    spotify_session.routes["/albums/alb1"] = [
        FakeResponse(500, {"error": {"status": 500}}),
        FakeResponse(200, album_detail(id="alb1")),
    ]

    assert music_service.get_album("alb1") == Album.empty()
    album = music_service.get_album("alb1")

    assert album.id == "alb1"
    assert len(spotify_session.get_calls) == 2
    assert music_service.get_album("alb1") == album
    assert len(spotify_session.get_calls) == 2


@pytest.mark.unit
def test_fetch_exposes_failure_tag(music_service, spotify_session):
    spotify_session.routes["/browse/new-releases"] = FakeResponse(502, {})

    result = music_service.fetch("get_new_releases")

    assert result.error is FailureKind.HTTP
    assert result.value == []


@pytest.mark.unit
def test_fetch_rejects_unknown_operation(music_service):
    with pytest.raises(ValueError):
        music_service.fetch("delete_everything")


@pytest.mark.unit
def test_clear_cache_forces_refetch(music_service, spotify_session):
    spotify_session.routes["/browse/new-releases"] = FakeResponse(200, {"albums": paging(AlbumPayloadFactory())})

    music_service.get_new_releases()
    music_service.clear_cache()
    music_service.get_new_releases()

    assert len(spotify_session.get_calls) == 2


@pytest.mark.unit
def test_cache_lookups_are_counted(music_service, spotify_session):
    hits_before = REGISTRY.get_sample_value("spotcat_cache_hits_total", {"operation": "get_featured_playlists"}) or 0.0
    spotify_session.routes["/browse/featured-playlists"] = FakeResponse(200, {"playlists": paging()})

    music_service.get_featured_playlists()
    music_service.get_featured_playlists()

    assert REGISTRY.get_sample_value("spotcat_cache_hits_total", {"operation": "get_featured_playlists"}) == hits_before + 1


@pytest.mark.unit
def test_service_works_against_any_port_implementation():
    catalog = _RecordingCatalog(FetchResult.failure([], FailureKind.NETWORK))
    service = MusicService(catalog)

    assert service.search_tracks("x") == []
    assert service.search_tracks("x") == []
    assert catalog.calls == [("search_tracks", "x"), ("search_tracks", "x")]
    assert service.ready() is True


@pytest.mark.unit
def test_ready_performs_first_exchange(music_service, spotify_session, credentials):
    assert music_service.ready() is True
    assert music_service.ready() is True

    assert credentials.has_valid_credential()
    assert len(spotify_session.token_calls) == 1


@pytest.mark.unit
def test_ready_raises_auth_failure(music_service, spotify_session):
    spotify_session.token_response = FakeResponse(401, {"error": "invalid_client"})

    with pytest.raises(AuthFailure):
        music_service.ready()


@pytest.mark.unit
def test_ready_times_out_while_exchange_is_held(music_service, spotify_session, credentials):
    spotify_session.token_gate = threading.Event()
    credentials.prefetch()
    assert spotify_session.token_entered.wait(2)

    assert music_service.ready(timeout=0.05) is False

    spotify_session.token_gate.set()
    assert music_service.ready(timeout=2) is True


@pytest.mark.unit
def test_ready_with_timeout_raises_once_held_exchange_fails(music_service, spotify_session, credentials):
    spotify_session.token_gate = threading.Event()
    spotify_session.token_response = FakeResponse(401, {"error": "invalid_client"})
    credentials.prefetch()
    assert spotify_session.token_entered.wait(2)

    threading.Timer(0.05, spotify_session.token_gate.set).start()
    started = time.monotonic()
    with pytest.raises(AuthFailure):
        music_service.ready(timeout=1.0)

    assert time.monotonic() - started < 0.9
    assert not credentials.refresh_in_flight


@pytest.mark.unit
def test_operations_before_readiness_wait_for_first_exchange(music_service, spotify_session, credentials):
    spotify_session.routes["/search"] = FakeResponse(200, {"tracks": paging(TrackPayloadFactory(name="Queued"))})
    spotify_session.token_gate = threading.Event()
    credentials.prefetch()
    assert spotify_session.token_entered.wait(2)

    results = []
    worker = threading.Thread(target=lambda: results.append(music_service.search_tracks("early")))
    worker.start()
    worker.join(0.1)
    assert worker.is_alive()
    assert spotify_session.get_calls == []

    spotify_session.token_gate.set()
    worker.join(2)

    assert [track.name for track in results[0]] == ["Queued"]
    assert len(spotify_session.token_calls) == 1
