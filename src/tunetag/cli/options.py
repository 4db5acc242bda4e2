# ABOUTME: Shared Click options for tunetag CLI commands.
# ABOUTME: Provides the reusable --settings flag pointing at the provider settings file.

from pathlib import Path

import click

from tunetag.config import DEFAULT_SETTINGS_PATH

settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to provider settings file (default: {DEFAULT_SETTINGS_PATH})",
)
