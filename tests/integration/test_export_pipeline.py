"""Integration tests for the end-to-end XML/CSV export pipeline."""

from __future__ import annotations

from collections.abc import Callable
import io
import os
from pathlib import Path

from loguru import logger
import pytest

from sentsort.config import ExportConfig
from sentsort.errors import PipelineStageError
from sentsort.io.xml_writer import XmlSentenceWriter
from sentsort.pipeline import SentenceExportPipeline
from sentsort.telemetry.logger import RunLogger

_INPUT_TEXT = (
    "Mr. Smith went to Washington. It's a test, don't fail!\n"
    "Just a phrase"
)


def _read(path: Path) -> str:
    """Read an output artifact without newline translation."""

    return path.read_bytes().decode("utf-8")


def test_pipeline_writes_matching_xml_and_csv(
    write_input: Callable[..., Path], tmp_path: Path
) -> None:
    """Both artifacts should list the same sentences in detection order."""

    out_dir = tmp_path / "nested" / "out"
    config = ExportConfig(input_path=write_input(_INPUT_TEXT), output_dir=out_dir)

    result = SentenceExportPipeline().run(config)

    assert result.xml_path == out_dir / "input.xml"
    assert result.csv_path == out_dir / "input.csv"
    assert result.sentence_count == 3
    assert result.batch_count == 2
    assert result.max_words == 5

    assert _read(result.xml_path) == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<text>\n"
        "<sentence><word>Mr.</word><word>Smith</word><word>to</word>"
        "<word>Washington</word><word>went</word></sentence>\n"
        "<sentence><word>a</word><word>don&apos;t</word><word>fail</word>"
        "<word>It&apos;s</word><word>test</word></sentence>\n"
        "<sentence><word>a</word><word>Just</word><word>phrase</word></sentence>\n"
        "</text>\n"
    )
    assert _read(result.csv_path) == os.linesep.join(
        [
            ", Word 1, Word 2, Word 3, Word 4, Word 5",
            "Sentence 1, Mr., Smith, to, Washington, went",
            "Sentence 2, a, don't, fail, It's, test",
            "Sentence 3, a, Just, phrase",
            "",
        ]
    )


def test_pipeline_output_does_not_depend_on_chunk_size(
    sample_input_path: Path, tmp_path: Path
) -> None:
    """Tiny read chunks should produce byte-identical artifacts."""

    whole = SentenceExportPipeline().run(
        ExportConfig(input_path=sample_input_path, output_dir=tmp_path / "whole")
    )
    chunked = SentenceExportPipeline().run(
        ExportConfig(
            input_path=sample_input_path,
            output_dir=tmp_path / "chunked",
            chunk_size_chars=7,
        )
    )

    assert whole.sentence_count == chunked.sentence_count == 8
    assert whole.max_words == chunked.max_words == 11
    assert chunked.batch_count > whole.batch_count
    assert _read(whole.xml_path) == _read(chunked.xml_path)
    assert _read(whole.csv_path) == _read(chunked.csv_path)
    assert _read(whole.csv_path).endswith(
        "Sentence 8, am, and, I, Jones, left, Mrs., not, said, she, sure, then" + os.linesep
    )


def test_pipeline_with_punctuation_only_input_writes_empty_artifacts(
    write_input: Callable[..., Path], tmp_path: Path
) -> None:
    """Input without words should yield an empty root element and an empty CSV."""

    config = ExportConfig(input_path=write_input("  .   ? !  "), output_dir=tmp_path)

    result = SentenceExportPipeline().run(config)

    assert result.sentence_count == 0
    assert result.batch_count == 0
    assert _read(result.xml_path).endswith("<text>\n</text>\n")
    assert _read(result.csv_path) == ""


def test_missing_input_fails_before_creating_outputs(tmp_path: Path) -> None:
    """A missing input file should abort at the input stage without output files."""

    out_dir = tmp_path / "out"
    config = ExportConfig(input_path=tmp_path / "missing.in", output_dir=out_dir)

    with pytest.raises(PipelineStageError) as exc_info:
        SentenceExportPipeline().run(config)

    assert exc_info.value.stage == "input"
    assert "Input file not found" in exc_info.value.detail
    assert not out_dir.exists()


def test_invalid_config_fails_at_config_stage(tmp_path: Path) -> None:
    """Invalid configuration should be reported before the input is opened."""

    config = ExportConfig(input_path=tmp_path / "missing.in", chunk_size_chars=0)

    with pytest.raises(PipelineStageError) as exc_info:
        SentenceExportPipeline().run(config)

    assert exc_info.value.stage == "config"
    assert "`chunk_size_chars` must be a positive integer" in exc_info.value.detail


def test_invalid_utf8_fails_at_extract_stage_and_discards_csv(tmp_path: Path) -> None:
    """Undecodable input should fail the run and leave no rendered CSV."""

    input_path = tmp_path / "latin1.txt"
    input_path.write_bytes("Café au lait.".encode("latin-1"))
    config = ExportConfig(input_path=input_path, output_dir=tmp_path / "out")

    with pytest.raises(PipelineStageError) as exc_info:
        SentenceExportPipeline().run(config)

    assert exc_info.value.stage == "extract"
    assert "not valid UTF-8" in exc_info.value.detail
    assert not (tmp_path / "out" / "latin1.csv").exists()
    assert _read(tmp_path / "out" / "latin1.xml").endswith("</text>\n")


def test_write_failure_is_reported_at_write_stage(
    write_input: Callable[..., Path], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Sink I/O errors should be mapped to the write stage."""

    def _failing_write(self: XmlSentenceWriter, sentences: object) -> None:
        """Simulate a full disk."""

        raise OSError("No space left on device")

    monkeypatch.setattr(XmlSentenceWriter, "write_sentences", _failing_write)
    config = ExportConfig(input_path=write_input("Hello there."), output_dir=tmp_path / "out")

    with pytest.raises(PipelineStageError) as exc_info:
        SentenceExportPipeline().run(config)

    assert exc_info.value.stage == "write"
    assert "No space left on device" in exc_info.value.detail


def test_pipeline_emits_stage_batch_and_summary_logs(
    write_input: Callable[..., Path], tmp_path: Path
) -> None:
    """Run logger should record stage transitions, batches, and totals."""

    sink = io.StringIO()
    progress: list[tuple[str, int, int]] = []
    pipeline = SentenceExportPipeline(
        run_logger=RunLogger(sink=sink),
        stage_progress_callback=lambda name, index, total: progress.append((name, index, total)),
    )

    pipeline.run(ExportConfig(input_path=write_input(_INPUT_TEXT), output_dir=tmp_path))

    log_text = sink.getvalue()
    assert "[phase] level=INFO stage=config event=start" in log_text
    assert "[phase] level=INFO stage=extract event=batch batch_index=1 sentences=2" in log_text
    assert "[phase] level=INFO stage=finalize event=summary batches=2 max_words=5 sentences=3" in (
        log_text
    )
    assert [name for name, _, _ in progress] == ["config", "input", "output", "extract", "finalize"]
    assert progress[-1] == ("finalize", 5, 5)


def test_pipeline_logs_stage_failure_with_error_type(tmp_path: Path) -> None:
    """Stage failures should be logged with the exception type only."""

    sink = io.StringIO()
    pipeline = SentenceExportPipeline(run_logger=RunLogger(sink=sink))

    with pytest.raises(PipelineStageError):
        pipeline.run(ExportConfig(input_path=tmp_path / "missing.in", output_dir=tmp_path))

    assert (
        "[phase] level=ERROR stage=input event=failure error_type=PipelineStageError"
        in sink.getvalue()
    )


def test_pipeline_without_run_logger_emits_no_log_records(
    write_input: Callable[..., Path], tmp_path: Path
) -> None:
    """Library use without a `RunLogger` should stay silent at every level."""

    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        config = ExportConfig(input_path=write_input(_INPUT_TEXT), output_dir=tmp_path / "out")
        SentenceExportPipeline().run(config)
    finally:
        logger.remove(handler_id)

    assert messages == []
