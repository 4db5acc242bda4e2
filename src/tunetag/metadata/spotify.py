# ABOUTME: Spotify metadata provider with OAuth2 client-credentials authentication.
# ABOUTME: Acquires a token lazily and re-authenticates once when a search gets a 401.

import asyncio
import logging
from typing import Any

from tunetag.metadata.http import AuthError, HttpClient, ParseError, RequestError
from tunetag.metadata.parsers import parse_spotify_response, parse_spotify_token
from tunetag.metadata.types import MetadataResult, Source

logger = logging.getLogger(__name__)

_TOKEN_URL = "https://accounts.spotify.com/api/token"
_SEARCH_URL = "https://api.spotify.com/v1/search"
_SEARCH_LIMIT = 10
_UNAUTHORIZED = 401


class SpotifyProvider:
    """Metadata provider backed by the Spotify Web API.

    Holds its own access token. The token starts absent and is fetched on the
    first search; there is no expiry tracking, so the only renewal trigger is
    a 401 from the search endpoint. After a 401 the token is dropped, a new
    one is exchanged, and the search is retried exactly once.

    All token reads and writes happen under an asyncio.Lock, so concurrent
    searches on one instance share a single re-authentication.
    """

    def __init__(self, http_client: HttpClient, client_id: str, client_secret: str) -> None:
        self._http = http_client
        self._client_id = client_id
        self._client_secret = client_secret
        self._access_token: str | None = None
        self._lock = asyncio.Lock()

    @property
    def name(self) -> Source:
        return Source.SPOTIFY

    @property
    def access_token(self) -> str | None:
        """The current bearer token, or None when unauthenticated."""
        return self._access_token

    async def authenticate(self) -> str:
        """Exchange the client credentials for a new access token.

        Raises:
            AuthError: If the exchange is rejected or the body is unparsable.
            TransportError: If the token endpoint cannot be reached.
        """
        async with self._lock:
            return await self._exchange_token()

    async def search(self, term: str) -> list[MetadataResult]:
        """Search Spotify tracks, authenticating first if needed.

        A 401 triggers one re-authentication and one retried search. Any
        failure of the retried search, another 401 included, is raised.
        """
        token = await self._ensure_token()
        try:
            data = await self._search_request(term, token)
        except RequestError as exc:
            if exc.status_code != _UNAUTHORIZED:
                raise
            logger.info("Spotify rejected the access token, re-authenticating")
            token = await self._reauthenticate(rejected=token)
            data = await self._search_request(term, token)

        results = parse_spotify_response(data)
        logger.debug("Spotify returned %d result(s) for %r", len(results), term)
        return results

    async def _search_request(self, term: str, token: str) -> Any:
        params = {"q": term, "type": "track", "limit": str(_SEARCH_LIMIT)}
        return await self._http.get_json(
            _SEARCH_URL,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )

    async def _ensure_token(self) -> str:
        async with self._lock:
            if self._access_token is None:
                return await self._exchange_token()
            return self._access_token

    async def _reauthenticate(self, rejected: str) -> str:
        async with self._lock:
            # Another search already replaced the rejected token.
            if self._access_token is not None and self._access_token != rejected:
                return self._access_token
            self._access_token = None
            return await self._exchange_token()

    async def _exchange_token(self) -> str:
        """Run the client-credentials grant. Caller must hold the lock."""
        try:
            data = await self._http.post_form(
                _TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
            )
            token = parse_spotify_token(data)
        except RequestError as exc:
            raise AuthError(f"Spotify token exchange rejected: {exc}") from exc
        except ParseError as exc:
            raise AuthError(f"Spotify token response unparsable: {exc}") from exc

        self._access_token = token
        logger.debug("Spotify access token acquired")
        return token
