"""Domain exceptions for pipeline and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class InputNotFoundError(FileNotFoundError):
    """Raised when the input text file does not exist."""


class SegmenterSetupError(RuntimeError):
    """Raised when tokenizer or segmenter rules cannot be built."""


class DocumentStateError(RuntimeError):
    """Raised when an output writer is used out of its open/write/close order."""
