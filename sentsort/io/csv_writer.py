"""Two-pass CSV output for sentence batches.

Responsibilities:
- Spool sentence rows to a temporary file while tracking the widest sentence.
- Render the final table with a `Word 1 ... Word N` header on close.
"""

from __future__ import annotations

from collections.abc import Sequence
import json
import os
from pathlib import Path
import tempfile
from types import TracebackType

from ..errors import DocumentStateError
from ..models.datatypes import Sentence


DELIMITER = ", "
NEWLINE = os.linesep

_CHARACTERS_REQUIRING_QUOTES = (",", '"', "\n")


def escape_csv_field(field: str | None) -> str:
    """Quote a field containing a comma, quote, or newline, doubling inner quotes."""

    if field is None:
        return ""
    if any(character in field for character in _CHARACTERS_REQUIRING_QUOTES):
        return '"' + field.replace('"', '""') + '"'
    return field


class CsvSentenceWriter:
    """Write sentences as `Sentence <k>, <word>, ...` rows under a sized header.

    Rows are not padded to the header width. When no sentence was written the
    final file is empty.
    """

    def __init__(self, output_path: Path, *, line_terminator: str = NEWLINE) -> None:
        """Open the temporary row storage; the final file is written on close."""

        self.output_path = Path(output_path)
        self.line_terminator = line_terminator
        self.max_words = 0
        self.sentence_count = 0
        self._rows = tempfile.TemporaryFile(
            mode="w+", encoding="utf-8", newline="", prefix="sentsort_csv_", suffix=".tmp"
        )
        self._closed = False

    def write_sentences(self, sentences: Sequence[Sentence] | None) -> None:
        """Spool one batch of sentence rows and update the running width.

        Raises:
            DocumentStateError: If the writer is already closed.
        """

        if self._closed:
            raise DocumentStateError("Cannot write sentences to a closed CSV writer.")
        if not sentences:
            return

        for sentence in sentences:
            self.max_words = max(self.max_words, len(sentence.words))
            self._rows.write(json.dumps(list(sentence.words), ensure_ascii=False))
            self._rows.write("\n")
            self.sentence_count += 1
        self._rows.flush()

    def close(self) -> None:
        """Render the final CSV file and drop the temporary rows."""

        if self._closed:
            return
        self._closed = True
        try:
            self._write_final_file()
        finally:
            self._rows.close()

    def discard(self) -> None:
        """Drop the temporary rows without rendering the final file."""

        if self._closed:
            return
        self._closed = True
        self._rows.close()

    def header_line(self) -> str:
        """Return the header row for the current maximum sentence width."""

        columns = [""] + [f"Word {index}" for index in range(1, self.max_words + 1)]
        return DELIMITER.join(columns)

    def _write_final_file(self) -> None:
        """Write header and numbered rows from the temporary storage."""

        self._rows.seek(0)
        with self.output_path.open("w", encoding="utf-8", newline="") as final_file:
            if self.max_words > 0:
                final_file.write(self.header_line())
                final_file.write(self.line_terminator)
            for sentence_number, line in enumerate(self._rows, start=1):
                words = json.loads(line)
                fields = [f"Sentence {sentence_number}"]
                fields.extend(escape_csv_field(word) for word in words)
                final_file.write(DELIMITER.join(fields))
                final_file.write(self.line_terminator)

    def __enter__(self) -> CsvSentenceWriter:
        """Return the writer for use in a `with` block."""

        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Render on clean exit; discard spooled rows when an error is propagating."""

        if exc_type is not None:
            self.discard()
            return
        self.close()
