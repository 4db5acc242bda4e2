# ABOUTME: Async HTTP client abstraction for music metadata provider API calls.
# ABOUTME: Maps transport, status, and decoding failures onto a typed error hierarchy.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from tunetag import __version__

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ProviderError(Exception):
    """Base class for every failure a metadata provider can surface."""


class ConfigError(ProviderError):
    """Raised before any network call when a required credential is missing."""


class AuthError(ProviderError):
    """Raised when an OAuth token exchange is rejected or unparsable."""


class TransportError(ProviderError):
    """Raised on DNS, connection, or timeout failures."""


class RequestError(ProviderError):
    """Raised when a provider answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(ProviderError):
    """Raised when a response body does not match the expected schema."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations providers need."""

    async def get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...

    async def post_form(
        self,
        url: str,
        data: dict[str, str],
        auth: tuple[str, str] | None = None,
    ) -> Any: ...

    async def get_bytes(self, url: str) -> bytes: ...


class MusicHttpClient:
    """Async HTTP client shared by the metadata providers.

    Wraps httpx.AsyncClient. Every call performs exactly one round trip; there
    is no retry or rate limiting at this layer. Query parameters are URL-escaped
    by httpx. An alternative transport can be injected for testing.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"tunetag/{__version__}"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    async def get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a GET request and return the decoded JSON body.

        Raises:
            TransportError: On network-level failures.
            RequestError: On a non-2xx status.
            ParseError: If the body is not valid JSON.
        """
        response = await self._send("GET", url, params=params, headers=headers)
        return _decode_json(response)

    async def post_form(
        self,
        url: str,
        data: dict[str, str],
        auth: tuple[str, str] | None = None,
    ) -> Any:
        """POST a form-encoded body, optionally with HTTP Basic auth, and decode JSON."""
        response = await self._send("POST", url, data=data, auth=auth)
        return _decode_json(response)

    async def get_bytes(self, url: str) -> bytes:
        """Fetch a URL and return the raw response body."""
        response = await self._send("GET", url)
        return response.content

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.InvalidURL as exc:
            raise TransportError(f"Invalid URL {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request failed: {url}: {exc}") from exc

        if not response.is_success:
            raise RequestError(
                f"HTTP {response.status_code} from {url}", response.status_code
            )
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "MusicHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ParseError(f"Invalid JSON from {response.request.url}: {exc}") from exc
