"""Command-line interface for sentsort.

Responsibilities:
- Expose user-facing commands for the sentence export.
- Convert CLI arguments into `ExportConfig` and run the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .cli_rendering import echo_export_summary, exit_with_command_error
from .config import ConfigLoader, ExportConfig
from .errors import PipelineStageError
from .pipeline import SentenceExportPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="sentsort",
    no_args_is_help=True,
    help="Split text into sentences and export sorted words as XML and CSV.",
)


class ExportProgressIndicator:
    """Render deterministic per-stage progress lines for the export command."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> ExportConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _resolve_export_config(
    config_file: Path | None,
    input_file: Path | None,
    output_dir: Path | None,
    chunk_size: int | None,
    output_name: str | None,
    timestamp_suffix: bool | None,
) -> ExportConfig:
    """Resolve effective export config from YAML defaults and explicit CLI overrides."""

    base_config = _load_yaml_config(config_file) or ExportConfig()

    overrides: dict[str, object] = {}
    if input_file is not None:
        overrides["input_path"] = input_file
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if chunk_size is not None:
        overrides["chunk_size_chars"] = chunk_size
    if output_name is not None:
        overrides["output_name"] = output_name
    if timestamp_suffix is not None:
        overrides["timestamp_suffix"] = timestamp_suffix
    return replace(base_config, **overrides)


@app.command("export")
def export_command(
    input_file: Annotated[
        Path | None,
        typer.Argument(
            help="Path to the UTF-8 input text. Defaults to the bundled sample.",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Argument(help="Directory for the XML and CSV outputs (created if absent)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to YAML config file with command defaults.",
        ),
    ] = None,
    chunk_size: Annotated[
        int | None,
        typer.Option("--chunk-size", help="Characters read from the input per cycle."),
    ] = None,
    output_name: Annotated[
        str | None,
        typer.Option("--output-name", help="Base name for outputs (defaults to input stem)."),
    ] = None,
    timestamp_suffix: Annotated[
        bool | None,
        typer.Option(
            "--timestamp-suffix/--no-timestamp-suffix",
            help="Append `_HH-MM-SS` to the output base name.",
        ),
    ] = None,
) -> None:
    """Export sentences from a text file to XML and CSV."""

    try:
        config = _resolve_export_config(
            config_file=config_file,
            input_file=input_file,
            output_dir=output_dir,
            chunk_size=chunk_size,
            output_name=output_name,
            timestamp_suffix=timestamp_suffix,
        )
        progress = ExportProgressIndicator(command_name="export")
        pipeline = SentenceExportPipeline(
            run_logger=RunLogger(),
            stage_progress_callback=progress.on_stage_start,
        )
        result = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("export", exc)

    echo_export_summary(result)


@app.command("version")
def version_command() -> None:
    """Print the installed sentsort version."""

    typer.echo(__version__)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
