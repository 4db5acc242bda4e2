# ABOUTME: Apple Music metadata provider backed by the public iTunes Search API.
# ABOUTME: Unauthenticated; one GET per search, limited to ten song results.

import logging

from tunetag.metadata.http import HttpClient
from tunetag.metadata.parsers import parse_itunes_response
from tunetag.metadata.types import MetadataResult, Source

logger = logging.getLogger(__name__)

_ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
_SEARCH_LIMIT = 10


class AppleMusicProvider:
    """Metadata provider backed by the iTunes Search API.

    Needs no credentials. Artwork URLs are upgraded to 600x600 by the parser.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> Source:
        return Source.APPLE_MUSIC

    async def search(self, term: str) -> list[MetadataResult]:
        """Search iTunes for songs matching a free-text term."""
        params = {
            "term": term,
            "media": "music",
            "entity": "song",
            "limit": str(_SEARCH_LIMIT),
        }
        data = await self._http.get_json(_ITUNES_SEARCH_URL, params=params)
        results = parse_itunes_response(data)
        logger.debug("iTunes returned %d result(s) for %r", len(results), term)
        return results
