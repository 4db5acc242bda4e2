# ABOUTME: Last.fm metadata provider using the track.search method.
# ABOUTME: Authenticates with an API key query parameter; fails fast when it is missing.

import logging

from tunetag.metadata.http import ConfigError, HttpClient
from tunetag.metadata.parsers import parse_lastfm_response
from tunetag.metadata.types import MetadataResult, Source

logger = logging.getLogger(__name__)

_LASTFM_API_URL = "http://ws.audioscrobbler.com/2.0/"


class LastFmProvider:
    """Metadata provider backed by the Last.fm web service."""

    def __init__(self, http_client: HttpClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> Source:
        return Source.LASTFM

    async def search(self, term: str) -> list[MetadataResult]:
        """Search Last.fm tracks.

        Raises:
            ConfigError: If the API key is empty. No request is sent.
        """
        if not self._api_key:
            raise ConfigError("Last.fm API key is missing")

        params = {
            "method": "track.search",
            "track": term,
            "api_key": self._api_key,
            "format": "json",
        }
        data = await self._http.get_json(_LASTFM_API_URL, params=params)
        results = parse_lastfm_response(data)
        logger.debug("Last.fm returned %d result(s) for %r", len(results), term)
        return results
