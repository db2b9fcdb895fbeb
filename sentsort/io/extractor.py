"""Streaming sentence extraction from a UTF-8 text file.

Responsibilities:
- Read the input in fixed-size chunks into a rolling buffer.
- Turn completed sentence spans into `Sentence` batches.
- Flush trailing unterminated text once the input is exhausted.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from ..errors import InputNotFoundError
from ..models.datatypes import Sentence
from ..text.normalizer import WordNormalizer
from ..text.segmenter import SentenceSegmenter


DEFAULT_CHUNK_SIZE_CHARS = 10240


class StreamingExtractor:
    """Pull batches of fully recognized sentences from a text file.

    Memory is bounded by the chunk size plus at most one pending partial
    sentence. The extractor owns its file handle and buffer; both are released
    by `close()`, which is safe to call repeatedly.
    """

    def __init__(
        self,
        input_path: Path,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE_CHARS,
        normalizer: WordNormalizer | None = None,
        segmenter: SentenceSegmenter | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Open the input file and prepare tokenizer and segmenter rules.

        Raises:
            ValueError: If `chunk_size` is not positive.
            InputNotFoundError: If `input_path` is not an existing file.
        """

        if chunk_size <= 0:
            raise ValueError("`chunk_size` must be a positive integer.")

        self.input_path = Path(input_path)
        self.chunk_size = chunk_size
        self._normalizer = normalizer or WordNormalizer()
        self._segmenter = segmenter or SentenceSegmenter(self._normalizer.abbreviations)

        if not self.input_path.is_file():
            raise InputNotFoundError(f"Input file not found: {self.input_path}")

        self._reader = self.input_path.open("r", encoding=encoding)
        self._buffer = ""
        self._eof_reached = False
        self._closed = False

    @property
    def drained(self) -> bool:
        """Return whether the input is exhausted and no buffered text remains."""

        return self._closed or (self._eof_reached and not self._buffer)

    @property
    def pending_text(self) -> str:
        """Return buffered text not yet recognized as a complete sentence."""

        return self._buffer

    def read_next_sentences(self) -> list[Sentence]:
        """Read one chunk (unless exhausted) and return completed sentences.

        An empty list is returned on every call once the extractor is drained.
        Before that, an empty list only means the current chunk did not
        complete any sentence.
        """

        if self.drained:
            return []

        if not self._eof_reached:
            chunk = self._reader.read(self.chunk_size)
            if chunk:
                self._buffer += chunk
            else:
                self._eof_reached = True

        text = self._buffer
        spans = self._segmenter.segment(text, final=self._eof_reached)
        sentences: list[Sentence] = []
        for span in spans:
            sentence = self._normalizer.build_sentence(span.covered_text(text))
            if sentence is not None:
                sentences.append(sentence)

        if spans:
            self._buffer = text[spans[-1].end :]
        elif self._eof_reached and self._buffer:
            sentence = self._normalizer.build_sentence(text)
            if sentence is not None:
                sentences.append(sentence)
            self._buffer = ""

        return sentences

    def __iter__(self) -> Iterator[list[Sentence]]:
        """Yield non-empty sentence batches until the extractor is drained."""

        while not self.drained:
            batch = self.read_next_sentences()
            if batch:
                yield batch

    def close(self) -> None:
        """Release the input handle and buffered text."""

        if self._closed:
            return
        self._closed = True
        self._buffer = ""
        self._reader.close()

    def __enter__(self) -> StreamingExtractor:
        """Return the open extractor for use in a `with` block."""

        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the extractor on every exit path."""

        self.close()
