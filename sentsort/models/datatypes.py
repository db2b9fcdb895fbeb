"""Core datatypes shared across sentsort modules.

Responsibilities:
- Represent immutable records exchanged between extraction and output stages.
- Provide explicit typing for deterministic processing.

Key types:
- `Sentence`, `Span`, and `ExportResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Sentence:
    """One detected sentence as its normalized, sorted words.

    Attributes:
        words: Non-empty word strings in word sort order (not appearance order).
    """

    words: tuple[str, ...]

    def __post_init__(self) -> None:
        """Freeze the word sequence and reject empty words."""

        words = tuple(self.words)
        if any(not word for word in words):
            raise ValueError("Sentence words must be non-empty strings.")
        object.__setattr__(self, "words", words)

    def __len__(self) -> int:
        """Return the number of words in the sentence."""

        return len(self.words)


@dataclass(frozen=True, slots=True)
class Span:
    """Offset range of one sentence within a text buffer snapshot.

    Attributes:
        start: Inclusive start offset.
        end: Exclusive end offset, including trailing terminator and whitespace.
    """

    start: int
    end: int

    def covered_text(self, text: str) -> str:
        """Return the buffer substring covered by this span."""

        return text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Summary of one completed export run."""

    input_path: Path
    xml_path: Path
    csv_path: Path
    sentence_count: int
    batch_count: int
    max_words: int
