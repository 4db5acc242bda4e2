# ABOUTME: Genius metadata provider using a static API access token.
# ABOUTME: Fails fast with ConfigError when no token is configured.

import logging

from tunetag.metadata.http import ConfigError, HttpClient
from tunetag.metadata.parsers import parse_genius_response
from tunetag.metadata.types import MetadataResult, Source

logger = logging.getLogger(__name__)

_GENIUS_SEARCH_URL = "https://api.genius.com/search"


class GeniusProvider:
    """Metadata provider backed by the Genius search API."""

    def __init__(self, http_client: HttpClient, access_token: str) -> None:
        self._http = http_client
        self._access_token = access_token

    @property
    def name(self) -> Source:
        return Source.GENIUS

    async def search(self, term: str) -> list[MetadataResult]:
        """Search Genius songs.

        Raises:
            ConfigError: If the access token is empty. No request is sent.
        """
        if not self._access_token:
            raise ConfigError("Genius access token is missing")

        data = await self._http.get_json(
            _GENIUS_SEARCH_URL,
            params={"q": term},
            headers={"Authorization": f"Bearer {self._access_token}"},
        )
        results = parse_genius_response(data)
        logger.debug("Genius returned %d result(s) for %r", len(results), term)
        return results
