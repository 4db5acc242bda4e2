# ABOUTME: The `tunetag config` command group for viewing and editing provider settings.
# ABOUTME: Reads and writes the JSON settings file used by searches.

from dataclasses import asdict, fields
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from tunetag.cli.options import settings_option
from tunetag.config import SECRET_FIELDS, ProviderSettings, load_settings, save_settings

console = Console()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

SETTING_KEYS = [f.name for f in fields(ProviderSettings)]


def _mask(value: str) -> str:
    """Hide all but the last four characters of a secret."""
    if not value:
        return ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise click.BadParameter(f"{key} expects true/false, got {value!r}", param_hint="VALUE")


@click.group("config")
def config() -> None:
    """View or change provider settings."""


@config.command("show")
@settings_option
def show(settings_path: Path | None) -> None:
    """Print current settings with secrets masked."""
    settings = load_settings(settings_path)

    table = Table()
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in asdict(settings).items():
        if key in SECRET_FIELDS and isinstance(value, str):
            shown = _mask(value) or "[dim]unset[/dim]"
        elif isinstance(value, bool):
            shown = "true" if value else "false"
        else:
            shown = value or "[dim]unset[/dim]"
        table.add_row(key, shown)
    console.print(table)


@config.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
@settings_option
def set_value(key: str, value: str, settings_path: Path | None) -> None:
    """Set KEY to VALUE in the settings file."""
    settings = load_settings(settings_path)
    current = getattr(settings, key)
    new_value: object = _parse_bool(key, value) if isinstance(current, bool) else value
    setattr(settings, key, new_value)
    written = save_settings(settings, settings_path)
    console.print(f"[green]Saved[/green] {key} to {written}")
