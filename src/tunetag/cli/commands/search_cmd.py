# ABOUTME: The `tunetag search` command for looking up track metadata online.
# ABOUTME: Queries every eligible provider at once and prints the combined results.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tunetag.cli.options import settings_option
from tunetag.config import ProviderSettings, load_settings
from tunetag.metadata.aggregator import search_all
from tunetag.metadata.covers import fetch_thumbnails
from tunetag.metadata.http import MusicHttpClient
from tunetag.metadata.types import MetadataResult, Source

console = Console()


def _create_http_client() -> MusicHttpClient:
    """Create the HTTP client shared by providers and the thumbnail pipeline."""
    return MusicHttpClient()


async def _run_search(
    term: str,
    settings: ProviderSettings,
    with_thumbnails: bool,
) -> tuple[list[MetadataResult], list[bytes | None] | None, list[tuple[Source, Exception]]]:
    failures: list[tuple[Source, Exception]] = []

    def record_failure(source: Source, exc: Exception) -> None:
        failures.append((source, exc))

    async with _create_http_client() as http_client:
        results = await search_all(
            term, settings, http_client=http_client, on_error=record_failure
        )
        thumbnails = None
        if with_thumbnails and results:
            thumbnails = await fetch_thumbnails(results, http_client=http_client)
    return results, thumbnails, failures


@click.command("search")
@click.argument("term")
@settings_option
@click.option(
    "--thumbnails",
    is_flag=True,
    default=False,
    help="Download cover art and build a thumbnail for each result.",
)
def search(term: str, settings_path: Path | None, thumbnails: bool) -> None:
    """Search enabled providers for TERM and list matching tracks."""
    settings = load_settings(settings_path)
    results, thumbs, failures = asyncio.run(_run_search(term, settings, thumbnails))

    for source, exc in failures:
        console.print(f"[dim]{source.display} unavailable: {escape(str(exc))}[/dim]")

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Source")
    table.add_column("Title", style="bold")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Cover")

    for index, result in enumerate(results):
        if thumbs is not None:
            cover = "[green]thumbnail[/green]" if thumbs[index] else "[dim]none[/dim]"
        else:
            cover = "yes" if result.has_cover else "[dim]no[/dim]"
        table.add_row(
            str(index + 1),
            result.source.display,
            escape(result.title),
            escape(result.artist) or "[dim]unknown[/dim]",
            escape(result.album),
            cover,
        )

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
