# ABOUTME: Unit tests for the concurrent provider aggregator.
# ABOUTME: Tests eligibility gating, fixed result order, failure isolation, and join-all behavior.

import asyncio
from dataclasses import replace

import httpx
import pytest

from tests.fixtures.fake_http import (
    GENIUS,
    ITUNES,
    LASTFM,
    SPOTIFY_SEARCH,
    SPOTIFY_TOKEN,
    Reply,
    RoutedTransport,
    run_with_client,
)
from tests.fixtures.provider_responses import (
    GENIUS_SEARCH_RESPONSE,
    ITUNES_RESPONSE,
    ITUNES_RESPONSE_SINGLE,
    LASTFM_SEARCH_RESPONSE,
    SPOTIFY_SEARCH_RESPONSE,
    SPOTIFY_TOKEN_RESPONSE,
)
from tunetag.config import ProviderSettings
from tunetag.metadata import AuthError, MetadataResult, RequestError, Source
from tunetag.metadata.aggregator import build_providers, search_all, search_all_sync
from tunetag.metadata.apple_music import AppleMusicProvider
from tunetag.metadata.http import MusicHttpClient


def _all_routes() -> dict[str, object]:
    return {
        ITUNES: ITUNES_RESPONSE,
        SPOTIFY_TOKEN: SPOTIFY_TOKEN_RESPONSE,
        SPOTIFY_SEARCH: SPOTIFY_SEARCH_RESPONSE,
        GENIUS: GENIUS_SEARCH_RESPONSE,
        LASTFM: LASTFM_SEARCH_RESPONSE,
    }


def _search_all(transport, settings, on_error=None):
    return run_with_client(
        transport,
        lambda http: search_all("term", settings, http_client=http, on_error=on_error),
    )


class TestEligibility:
    """Tests for provider eligibility gating."""

    def test_all_disabled_returns_empty_without_requests(
        self, all_disabled_settings: ProviderSettings
    ) -> None:
        transport = RoutedTransport(_all_routes())
        assert _search_all(transport, all_disabled_settings) == []
        assert transport.requests == []

    def test_all_disabled_without_client(self, all_disabled_settings: ProviderSettings) -> None:
        assert asyncio.run(search_all("term", all_disabled_settings)) == []

    @pytest.mark.parametrize(
        ("flag", "prefixes"),
        [
            ("enable_apple_music", [ITUNES]),
            ("enable_spotify", [SPOTIFY_TOKEN, SPOTIFY_SEARCH]),
            ("enable_genius", [GENIUS]),
            ("enable_lastfm", [LASTFM]),
        ],
    )
    def test_disabled_provider_is_not_contacted(
        self, all_enabled_settings: ProviderSettings, flag: str, prefixes: list[str]
    ) -> None:
        settings = replace(all_enabled_settings, **{flag: False})
        transport = RoutedTransport(_all_routes())
        _search_all(transport, settings)
        for prefix in prefixes:
            assert transport.calls_to(prefix) == []

    def test_genius_enabled_with_empty_token(self) -> None:
        """No Genius call, no Genius results, and no failure reported."""
        settings = ProviderSettings(
            enable_apple_music=False, enable_genius=True, genius_token=""
        )
        errors: list[tuple[Source, Exception]] = []
        transport = RoutedTransport(_all_routes())

        results = _search_all(transport, settings, on_error=lambda s, e: errors.append((s, e)))

        assert results == []
        assert transport.requests == []
        assert errors == []

    def test_spotify_needs_id_and_secret(self, all_enabled_settings: ProviderSettings) -> None:
        settings = replace(all_enabled_settings, spotify_secret="")
        transport = RoutedTransport(_all_routes())
        results = _search_all(transport, settings)
        assert transport.calls_to(SPOTIFY_TOKEN) == []
        assert not any(r.source is Source.SPOTIFY for r in results)

    def test_build_providers_pairs_sources_in_order(
        self, all_enabled_settings: ProviderSettings
    ) -> None:
        settings = replace(all_enabled_settings, enable_genius=False)
        async def scenario(http):
            return build_providers(settings, http)

        pairs = run_with_client(RoutedTransport(), scenario)
        assert [source for source, _ in pairs] == [
            Source.APPLE_MUSIC,
            Source.SPOTIFY,
            Source.GENIUS,
            Source.LASTFM,
        ]
        assert pairs[2][1] is None
        assert all(provider is not None for _, provider in (pairs[0], pairs[1], pairs[3]))


class TestResults:
    """Tests for aggregated result content and order."""

    def test_apple_only_scenario(self) -> None:
        settings = ProviderSettings()
        transport = RoutedTransport({ITUNES: ITUNES_RESPONSE_SINGLE})
        results = _search_all(transport, settings)
        assert results == [
            MetadataResult(
                title="Song A",
                artist="Artist A",
                album="Album A",
                cover_url="http://x/600x600bb.jpg",
                source=Source.APPLE_MUSIC,
            )
        ]

    def test_fixed_provider_order(self, all_enabled_settings: ProviderSettings) -> None:
        results = _search_all(RoutedTransport(_all_routes()), all_enabled_settings)
        assert [r.source for r in results] == (
            [Source.APPLE_MUSIC] * 2 + [Source.SPOTIFY] * 2 + [Source.GENIUS] * 2 + [Source.LASTFM] * 2
        )
        assert [r.title for r in results] == [
            "Song A",
            "Song B",
            "Paranoid Android",
            "Airbag",
            "Hey Jude",
            "Hey Jude (Remastered)",
            "Believe",
            "Believe (Remix)",
        ]

    def test_fresh_spotify_token_per_call(self, all_enabled_settings: ProviderSettings) -> None:
        transport = RoutedTransport(_all_routes())

        async def scenario(http):
            await search_all("one", all_enabled_settings, http_client=http)
            await search_all("two", all_enabled_settings, http_client=http)

        run_with_client(transport, scenario)
        assert len(transport.calls_to(SPOTIFY_TOKEN)) == 2

    def test_sync_wrapper(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a client, the call opens and closes its own."""
        transport = RoutedTransport({ITUNES: ITUNES_RESPONSE_SINGLE})
        monkeypatch.setattr(
            "tunetag.metadata.aggregator.MusicHttpClient",
            lambda: MusicHttpClient(transport=transport),
        )
        results = search_all_sync("song a", ProviderSettings())
        assert [r.title for r in results] == ["Song A"]


class TestFailureIsolation:
    """Tests that one provider's failure never affects the others."""

    def test_failed_provider_contributes_nothing(
        self, all_enabled_settings: ProviderSettings
    ) -> None:
        routes = _all_routes()
        routes[ITUNES] = Reply(500, json={})
        routes[LASTFM] = httpx.ConnectError("offline")
        errors: list[tuple[Source, Exception]] = []

        results = _search_all(
            RoutedTransport(routes),
            all_enabled_settings,
            on_error=lambda s, e: errors.append((s, e)),
        )

        assert [r.source for r in results] == [Source.SPOTIFY] * 2 + [Source.GENIUS] * 2
        assert [source for source, _ in errors] == [Source.APPLE_MUSIC, Source.LASTFM]
        assert isinstance(errors[0][1], RequestError)

    def test_spotify_auth_failure_is_absorbed(
        self, all_enabled_settings: ProviderSettings
    ) -> None:
        routes = _all_routes()
        routes[SPOTIFY_TOKEN] = Reply(400, json={"error": "invalid_client"})
        errors: list[tuple[Source, Exception]] = []

        results = _search_all(
            RoutedTransport(routes),
            all_enabled_settings,
            on_error=lambda s, e: errors.append((s, e)),
        )

        assert not any(r.source is Source.SPOTIFY for r in results)
        assert len(results) == 6
        assert errors[0][0] is Source.SPOTIFY
        assert isinstance(errors[0][1], AuthError)

    def test_every_provider_failing_returns_empty(
        self, all_enabled_settings: ProviderSettings
    ) -> None:
        transport = RoutedTransport({})
        assert _search_all(transport, all_enabled_settings) == []

    def test_unexpected_exception_is_absorbed(
        self, all_enabled_settings: ProviderSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(self, term: str) -> list[MetadataResult]:
            raise RuntimeError("bug")

        monkeypatch.setattr(AppleMusicProvider, "search", broken)
        results = _search_all(RoutedTransport(_all_routes()), all_enabled_settings)
        assert results[0].source is Source.SPOTIFY
        assert len(results) == 6


class _GatedTransport(httpx.AsyncBaseTransport):
    """Holds the iTunes reply until the Last.fm request has arrived."""

    def __init__(self) -> None:
        self.lastfm_seen = asyncio.Event()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "itunes.apple.com":
            await asyncio.wait_for(self.lastfm_seen.wait(), timeout=2.0)
            return httpx.Response(200, json=ITUNES_RESPONSE_SINGLE)
        self.lastfm_seen.set()
        return httpx.Response(200, json=LASTFM_SEARCH_RESPONSE)


class TestConcurrency:
    """Tests that providers run concurrently and are all joined."""

    def test_providers_run_concurrently(self) -> None:
        """A slow first provider does not hold back the later ones' requests."""
        settings = ProviderSettings(enable_lastfm=True, lastfm_api_key="k")
        results = _search_all(_GatedTransport(), settings)
        assert [r.source for r in results] == [Source.APPLE_MUSIC] + [Source.LASTFM] * 2
