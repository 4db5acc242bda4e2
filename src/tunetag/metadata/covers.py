# ABOUTME: Cover-art download and thumbnail pipeline for aggregated search results.
# ABOUTME: Fetches artwork concurrently per result and resizes it into square PNG thumbnails.

import asyncio
import logging
from collections.abc import Sequence
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from tunetag.metadata.http import HttpClient, MusicHttpClient
from tunetag.metadata.types import MetadataResult

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = 50


class ThumbnailError(Exception):
    """Raised when downloaded bytes cannot be decoded or resized as an image."""


async def fetch_cover(http_client: HttpClient, url: str) -> bytes:
    """Download raw cover-art bytes. Raises ProviderError subclasses on failure."""
    return await http_client.get_bytes(url)


async def download_cover(url: str, *, http_client: HttpClient | None = None) -> bytes:
    """Download full-size cover art, opening a client if none is given."""
    if http_client is None:
        async with MusicHttpClient() as client:
            return await fetch_cover(client, url)
    return await fetch_cover(http_client, url)


def make_thumbnail(data: bytes, size: int = THUMBNAIL_SIZE) -> bytes:
    """Crop-to-fill image bytes into a size x size PNG thumbnail.

    Raises:
        ThumbnailError: If the bytes are not a decodable image.
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ThumbnailError(f"Cannot decode image: {exc}") from exc

    thumbnail = ImageOps.fit(rgba, (size, size), method=Image.Resampling.BILINEAR)
    out = BytesIO()
    thumbnail.save(out, format="PNG")
    return out.getvalue()


async def _thumbnail_for(http_client: HttpClient, url: str | None, size: int) -> bytes | None:
    if not url:
        return None
    data = await fetch_cover(http_client, url)
    return await asyncio.to_thread(make_thumbnail, data, size)


async def fetch_thumbnails(
    results: Sequence[MetadataResult],
    *,
    http_client: HttpClient | None = None,
    size: int = THUMBNAIL_SIZE,
) -> list[bytes | None]:
    """Build a thumbnail for every result that has a cover URL.

    The returned list is index-aligned with results. Fetches run concurrently;
    a failed fetch or decode leaves None at that index without affecting others.
    """
    if not any(result.cover_url for result in results):
        return [None] * len(results)

    if http_client is None:
        async with MusicHttpClient() as client:
            return await fetch_thumbnails(results, http_client=client, size=size)

    outcomes = await asyncio.gather(
        *(_thumbnail_for(http_client, result.cover_url, size) for result in results),
        return_exceptions=True,
    )

    thumbnails: list[bytes | None] = []
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.debug("No thumbnail for result %d: %s", index, outcome)
            thumbnails.append(None)
        else:
            thumbnails.append(outcome)
    return thumbnails
