"""Streaming XML output for sentence batches.

Responsibilities:
- Emit a `<text>` document with one `<sentence>` element per sentence.
- Enforce the open, write, close order of the document.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from xml.sax.saxutils import escape

from ..errors import DocumentStateError
from ..models.datatypes import Sentence


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_XML_ESCAPE_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def escape_xml_text(value: str) -> str:
    """Escape `< > & ' "` as XML entities."""

    return escape(value, _XML_ESCAPE_ENTITIES)


class XmlSentenceWriter:
    """Write sentences as `<sentence><word>...</word></sentence>` lines."""

    def __init__(self, output_path: Path) -> None:
        """Create or truncate the output file."""

        self.output_path = Path(output_path)
        self._handle = self.output_path.open("w", encoding="utf-8", newline="")
        self._document_started = False
        self._closed = False
        self.sentence_count = 0

    def open_document(self) -> None:
        """Write the XML declaration and the root start tag once."""

        if self._closed:
            raise DocumentStateError("XML document is already closed.")
        if self._document_started:
            return
        self._handle.write(f"{XML_DECLARATION}\n<text>\n")
        self._document_started = True

    def write_sentences(self, sentences: Sequence[Sentence] | None) -> None:
        """Append one line per sentence and flush.

        Raises:
            DocumentStateError: If the document was not opened or is closed.
        """

        if self._closed:
            raise DocumentStateError("Cannot write sentences to a closed XML document.")
        if not self._document_started:
            raise DocumentStateError("Document must be opened before writing sentences.")
        if not sentences:
            return

        for sentence in sentences:
            words = "".join(f"<word>{escape_xml_text(word)}</word>" for word in sentence.words)
            self._handle.write(f"<sentence>{words}</sentence>\n")
        self.sentence_count += len(sentences)
        self._handle.flush()

    def close(self) -> None:
        """Write the root end tag when the document was opened, then release the file."""

        if self._closed:
            return
        self._closed = True
        try:
            if self._document_started:
                self._handle.write("</text>\n")
            self._handle.flush()
        finally:
            self._handle.close()

    def __enter__(self) -> XmlSentenceWriter:
        """Return the writer for use in a `with` block."""

        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the writer on every exit path."""

        self.close()
