"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and export summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import ExportResult


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
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


def echo_export_summary(result: ExportResult) -> None:
    """Print input/output paths and sentence totals for a finished export."""

    typer.echo(f"Input: {result.input_path}")
    typer.echo(f"XML output: {result.xml_path}")
    typer.echo(f"CSV output: {result.csv_path}")
    typer.echo(f"Sentences: {result.sentence_count}")
    typer.echo(f"Batches: {result.batch_count}")
    typer.echo(f"Max words: {result.max_words}")
