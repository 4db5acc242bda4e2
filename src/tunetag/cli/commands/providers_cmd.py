# ABOUTME: The `tunetag providers` command for inspecting provider eligibility.
# ABOUTME: Shows which providers are enabled, credentialed, and will be queried.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tunetag.cli.options import settings_option
from tunetag.config import load_settings
from tunetag.metadata.types import SOURCE_ORDER, Source

console = Console()

_CREDENTIAL_LABELS = {
    Source.APPLE_MUSIC: "not required",
    Source.SPOTIFY: "client id + secret",
    Source.GENIUS: "access token",
    Source.LASTFM: "API key",
}


@click.command("providers")
@settings_option
def providers(settings_path: Path | None) -> None:
    """List metadata providers and whether searches will use them."""
    settings = load_settings(settings_path)

    table = Table()
    table.add_column("Provider", style="bold")
    table.add_column("Enabled")
    table.add_column("Credentials")
    table.add_column("Eligible")

    for source in SOURCE_ORDER:
        enabled = "[green]yes[/green]" if settings.is_enabled(source) else "[dim]no[/dim]"
        label = _CREDENTIAL_LABELS[source]
        if settings.has_credentials(source):
            credentials = f"[green]{label}[/green]"
        else:
            credentials = f"[red]missing {label}[/red]"
        eligible = "[green]yes[/green]" if settings.is_eligible(source) else "[yellow]no[/yellow]"
        table.add_row(source.display, enabled, credentials, eligible)

    console.print(table)
