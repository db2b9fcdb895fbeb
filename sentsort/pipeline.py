"""Export orchestration for sentsort.

Responsibilities:
- Define the stage order for the text-to-XML/CSV export flow.
- Drive the single-threaded read, normalize, and write loop.
- Map stage failures to `PipelineStageError` with operator hints.

Key types:
- `SentenceExportPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from .config import ExportConfig
from .errors import InputNotFoundError, PipelineStageError, SegmenterSetupError
from .io.csv_writer import CsvSentenceWriter
from .io.extractor import StreamingExtractor
from .io.sinks import OutputSink
from .io.xml_writer import XmlSentenceWriter
from .models.datatypes import ExportResult, Sentence
from .telemetry.logger import RunLogger
from .text.normalizer import WordNormalizer
from .text.segmenter import SentenceSegmenter

_StageResult = TypeVar("_StageResult")


class SentenceExportPipeline:
    """Coordinate all stages for a single export run."""

    _PHASE_SEQUENCE = ("config", "input", "output", "extract", "finalize")

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
    ) -> None:
        """Initialize optional logging and progress hooks."""

        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback

    def run(self, config: ExportConfig, now: datetime | None = None) -> ExportResult:
        """Export sentences from the configured input to XML and CSV files.

        Each batch is written to both sinks before the next chunk is read, so
        the two artifacts always list sentences in the same order.
        """

        self._run_stage("config", lambda: self._validate_config(config))
        xml_path, csv_path = config.output_paths(now)

        with ExitStack() as stack:
            extractor = self._run_stage("input", lambda: self._open_extractor(config))
            stack.enter_context(extractor)

            xml_writer, csv_writer = self._run_stage(
                "output", lambda: self._open_writers(config, xml_path, csv_path, stack)
            )
            sinks: tuple[OutputSink, ...] = (xml_writer, csv_writer)

            batch_count, sentence_count = self._run_stage(
                "extract", lambda: self._extract_all(extractor, sinks)
            )
            self._run_stage("finalize", lambda: self._finalize(sinks))

        if self._run_logger is not None:
            self._run_logger.log_summary(sentence_count, batch_count, csv_writer.max_words)

        return ExportResult(
            input_path=config.input_path,
            xml_path=xml_path,
            csv_path=csv_path,
            sentence_count=sentence_count,
            batch_count=batch_count,
            max_words=csv_writer.max_words,
        )

    def _validate_config(self, config: ExportConfig) -> None:
        """Validate configuration and map failures to stage-aware error."""

        try:
            config.validate()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=str(exc),
                hint="Fix the CLI options or config file values and rerun.",
            ) from exc

    def _open_extractor(self, config: ExportConfig) -> StreamingExtractor:
        """Build tokenizer rules and open the input before any output exists."""

        try:
            normalizer = WordNormalizer(config.abbreviations)
            segmenter = SentenceSegmenter(normalizer.abbreviations)
        except SegmenterSetupError as exc:
            raise PipelineStageError(
                stage="input",
                detail=f"Failed to initialize sentence rules: {exc}",
                hint="Check the configured `abbreviations` list.",
            ) from exc

        try:
            return StreamingExtractor(
                config.input_path,
                chunk_size=config.chunk_size_chars,
                normalizer=normalizer,
                segmenter=segmenter,
            )
        except InputNotFoundError as exc:
            raise PipelineStageError(
                stage="input",
                detail=f"Input file not found: `{config.input_path}`.",
                hint="Pass an existing UTF-8 text file as `<input-file>`.",
            ) from exc
        except OSError as exc:
            raise PipelineStageError(
                stage="input",
                detail=f"Failed to open input file `{config.input_path}`: {exc}",
                hint="Verify file permissions.",
            ) from exc

    def _open_writers(
        self, config: ExportConfig, xml_path: Path, csv_path: Path, stack: ExitStack
    ) -> tuple[XmlSentenceWriter, CsvSentenceWriter]:
        """Create the output directory and open both writers under the exit stack."""

        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
            xml_writer = stack.enter_context(XmlSentenceWriter(xml_path))
            csv_writer = stack.enter_context(CsvSentenceWriter(csv_path))
            xml_writer.open_document()
        except OSError as exc:
            raise PipelineStageError(
                stage="output",
                detail=f"Failed to prepare outputs in `{config.output_dir}`: {exc}",
                hint="Verify the output directory is writable.",
            ) from exc
        return xml_writer, csv_writer

    def _extract_all(
        self, extractor: StreamingExtractor, sinks: Sequence[OutputSink]
    ) -> tuple[int, int]:
        """Read batches until drained and forward each one to every sink."""

        batch_count = 0
        sentence_count = 0
        while not extractor.drained:
            batch = self._read_batch(extractor)
            if not batch:
                continue
            batch_count += 1
            sentence_count += len(batch)
            self._write_batch(batch, sinks)
            if self._run_logger is not None:
                self._run_logger.log_batch(batch_count, len(batch))
        return batch_count, sentence_count

    def _read_batch(self, extractor: StreamingExtractor) -> list[Sentence]:
        """Read one batch and map I/O and decoding failures to stage errors."""

        try:
            return extractor.read_next_sentences()
        except UnicodeDecodeError as exc:
            raise PipelineStageError(
                stage="extract",
                detail=f"Input file `{extractor.input_path}` is not valid UTF-8: {exc}",
                hint="Convert the input to UTF-8 and rerun.",
            ) from exc
        except OSError as exc:
            raise PipelineStageError(
                stage="extract",
                detail=f"Failed to read input file `{extractor.input_path}`: {exc}",
            ) from exc

    def _write_batch(self, batch: list[Sentence], sinks: Sequence[OutputSink]) -> None:
        """Write one batch to every sink, in order."""

        for sink in sinks:
            try:
                sink.write_sentences(batch)
            except OSError as exc:
                raise PipelineStageError(
                    stage="write",
                    detail=f"Failed to write sentences: {exc}",
                    hint="Check free disk space and output directory permissions.",
                ) from exc

    def _finalize(self, sinks: Sequence[OutputSink]) -> None:
        """Close every sink so both artifacts are complete on disk."""

        for sink in sinks:
            try:
                sink.close()
            except OSError as exc:
                raise PipelineStageError(
                    stage="finalize",
                    detail=f"Failed to finalize output: {exc}",
                    hint="Check free disk space and output directory permissions.",
                ) from exc

    def _stage_position(self, stage_name: str) -> tuple[int, int] | None:
        """Return 1-based stage index and total stage count for known stages."""

        try:
            index = self._PHASE_SEQUENCE.index(stage_name) + 1
        except ValueError:
            return None
        return index, len(self._PHASE_SEQUENCE)

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        stage_position = self._stage_position(stage_name)
        if stage_position and self._stage_progress_callback is not None:
            self._stage_progress_callback(stage_name, stage_position[0], stage_position[1])
        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            raise
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name)
        return result
