"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
scanned entry listings, and bound option summaries.
"""

from __future__ import annotations

import json
from typing import Mapping, NoReturn

import typer

from .errors import CommandStageError


OUTPUT_FORMATS = ("pairs", "canonical", "json")


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


def format_canonical_line(name: str, value: str) -> str:
    """Serialize one entry so that scanning the line reproduces it exactly.

    Double quotes are preferred; single quotes are used when the value itself
    contains a double quote.

    Raises:
        ValueError: If the value contains both quote characters.
    """

    if '"' not in value:
        return f'{name}="{value}"'
    if "'" not in value:
        return f"{name}='{value}'"
    raise ValueError(f"Value of `{name}` contains both quote characters and has no canonical form.")


def render_canonical(values: Mapping[str, str]) -> str:
    """Render a mapping as canonical config text, one entry per line, sorted by name."""

    return "".join(
        f"{format_canonical_line(name, values[name])}\n" for name in sorted(values)
    )


def echo_entries(values: Mapping[str, str], output_format: str) -> None:
    """Print scanned entries in the requested output format."""

    if output_format == "json":
        typer.echo(json.dumps(dict(values), ensure_ascii=False, indent=2, sort_keys=True))
        return
    if output_format == "canonical":
        typer.echo(render_canonical(values), nl=False)
        return
    for name in sorted(values):
        typer.echo(f"param={name} value={values[name]}")


def echo_bound_options(bound: Mapping[str, str], unknown: list[str]) -> None:
    """Print resolved option values in declaration order and any ignored names."""

    for name, value in bound.items():
        typer.echo(f"- {name}: {value}")
    for name in unknown:
        typer.secho(f'Ignored unknown parameter "{name}"', fg=typer.colors.YELLOW, err=True)
