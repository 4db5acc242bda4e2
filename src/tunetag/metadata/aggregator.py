# ABOUTME: Fans a search term out to every eligible music provider concurrently.
# ABOUTME: Joins all outcomes, drops per-provider failures, and concatenates in fixed order.

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from tunetag.metadata.apple_music import AppleMusicProvider
from tunetag.metadata.genius import GeniusProvider
from tunetag.metadata.http import HttpClient, MusicHttpClient
from tunetag.metadata.lastfm import LastFmProvider
from tunetag.metadata.provider import MetadataProvider
from tunetag.metadata.spotify import SpotifyProvider
from tunetag.metadata.types import SOURCE_ORDER, MetadataResult, Source

if TYPE_CHECKING:
    from tunetag.config import ProviderSettings

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Source, Exception], None]


def build_providers(
    settings: "ProviderSettings", http_client: HttpClient
) -> list[tuple[Source, MetadataProvider | None]]:
    """Create a provider for every eligible source, in aggregation order.

    Ineligible sources are paired with None. Each call builds fresh instances,
    so a Spotify token never outlives the providers returned here.
    """
    factories: dict[Source, Callable[[], MetadataProvider]] = {
        Source.APPLE_MUSIC: lambda: AppleMusicProvider(http_client),
        Source.SPOTIFY: lambda: SpotifyProvider(
            http_client, settings.spotify_id, settings.spotify_secret
        ),
        Source.GENIUS: lambda: GeniusProvider(http_client, settings.genius_token),
        Source.LASTFM: lambda: LastFmProvider(http_client, settings.lastfm_api_key),
    }
    return [
        (source, factories[source]() if settings.is_eligible(source) else None)
        for source in SOURCE_ORDER
    ]


async def _search_one(provider: MetadataProvider | None, term: str) -> list[MetadataResult]:
    if provider is None:
        return []
    return await provider.search(term)


async def search_all(
    term: str,
    settings: "ProviderSettings",
    *,
    http_client: HttpClient | None = None,
    on_error: ErrorCallback | None = None,
) -> list[MetadataResult]:
    """Search every eligible provider concurrently and concatenate the results.

    Never raises for a provider failure: a failed provider contributes no
    results, and its exception is passed to on_error if given. The call
    returns once every provider has finished. Results are ordered Apple Music,
    Spotify, Genius, Last.fm, each block in the provider's own order.

    If http_client is omitted, a MusicHttpClient is opened for the call and
    closed before returning.
    """
    if not any(settings.is_eligible(source) for source in SOURCE_ORDER):
        logger.debug("No eligible providers for %r", term)
        return []

    if http_client is None:
        async with MusicHttpClient() as client:
            return await search_all(term, settings, http_client=client, on_error=on_error)

    providers = build_providers(settings, http_client)
    outcomes = await asyncio.gather(
        *(_search_one(provider, term) for _, provider in providers),
        return_exceptions=True,
    )

    results: list[MetadataResult] = []
    for (source, _), outcome in zip(providers, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.debug("%s search failed for %r: %s", source.display, term, outcome)
            if on_error is not None:
                on_error(source, outcome)
            continue
        results.extend(outcome)
    return results


def search_all_sync(term: str, settings: "ProviderSettings", **kwargs: Any) -> list[MetadataResult]:
    """Run search_all in a fresh event loop for synchronous callers."""
    return asyncio.run(search_all(term, settings, **kwargs))
