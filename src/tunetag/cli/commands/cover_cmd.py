# ABOUTME: The `tunetag cover` command for downloading cover art to a file.
# ABOUTME: Saves the full image or, with --thumbnail, a square PNG thumbnail.

import asyncio
from pathlib import Path

import click
from rich.console import Console

from tunetag.metadata.covers import THUMBNAIL_SIZE, ThumbnailError, fetch_cover, make_thumbnail
from tunetag.metadata.http import MusicHttpClient, ProviderError

console = Console()


def _create_http_client() -> MusicHttpClient:
    """Create the HTTP client used for the cover download."""
    return MusicHttpClient()


async def _download(url: str) -> bytes:
    async with _create_http_client() as http_client:
        return await fetch_cover(http_client, url)


@click.command("cover")
@click.argument("url")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="File to write the image to.",
)
@click.option(
    "--thumbnail",
    is_flag=True,
    default=False,
    help="Write a square PNG thumbnail instead of the original image.",
)
@click.option(
    "--size",
    type=click.IntRange(min=1),
    default=THUMBNAIL_SIZE,
    show_default=True,
    help="Thumbnail edge length in pixels.",
)
def cover(url: str, output: Path, thumbnail: bool, size: int) -> None:
    """Download cover art from URL."""
    try:
        data = asyncio.run(_download(url))
        if thumbnail:
            data = make_thumbnail(data, size)
    except (ProviderError, ThumbnailError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]Saved[/green] {len(data)} bytes to {output}")
