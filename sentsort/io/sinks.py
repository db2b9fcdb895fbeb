"""Output sink interface consumed by the export pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..models.datatypes import Sentence


class OutputSink(Protocol):
    """Protocol for writers that accept sentence batches in detection order."""

    def write_sentences(self, sentences: Sequence[Sentence] | None) -> None:
        """Write one batch of sentences and flush it."""

    def close(self) -> None:
        """Finalize the output artifact."""
