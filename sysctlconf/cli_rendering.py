"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
parsed setting listings, validation reports, and rendered trees.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import CommandStageError
from .schema.model import ValidationReport
from .table import ConfigTable


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_settings(table: ConfigTable) -> None:
    """Print the setting count and sorted `key = value` rows."""

    typer.echo(f"Loaded settings: {len(table)}")
    typer.echo("")
    for key, value in sorted(table.items()):
        typer.echo(f"{key} = {value}")


def echo_violations(report: ValidationReport) -> None:
    """Print one line per validation violation."""

    for message in report.messages():
        typer.secho(f"  - {message}", fg=typer.colors.RED, err=True)


def echo_rendered_tree(rendered: str, output_format: str, with_header: bool = True) -> None:
    """Print a rendered tree, optionally preceded by a format header."""

    if with_header:
        typer.echo("")
        typer.echo(f"{output_format.upper()}:")
    typer.echo(rendered)
