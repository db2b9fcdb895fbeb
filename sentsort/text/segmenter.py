"""Rule-based sentence boundary detection over a rolling text buffer.

Responsibilities:
- Find sentence spans ending at `.`, `?`, or `!` followed by whitespace.
- Avoid splitting on abbreviations, acronyms, and decimal numbers.
- Report only spans whose end is a safe buffer truncation point.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from ..models.datatypes import Span
from .normalizer import DEFAULT_ABBREVIATIONS


class SentenceSegmenter:
    """Detect sentence spans in buffer text with deterministic rules.

    A terminator only closes a sentence once the whitespace after it has been
    seen, so a span never ends where unread text could still extend it. With
    `final=True` the end of the text also counts as a boundary.
    """

    _TERMINATORS = ".!?"
    _TRAILING_SENTENCE_CLOSERS = "\"')]}»”’"
    _ACRONYM_WINDOW_CHARS = 8
    _COMMON_ABBREVIATIONS = frozenset(
        {
            "mr.",
            "mrs.",
            "ms.",
            "dr.",
            "prof.",
            "sr.",
            "jr.",
            "e.g.",
            "i.e.",
            "vs.",
            "fig.",
            "al.",
        }
    )
    _ACRONYM_PATTERN = re.compile(r"(?:[A-Za-z]\.){2,}$")

    def __init__(self, abbreviations: Iterable[str] = DEFAULT_ABBREVIATIONS) -> None:
        """Initialize with extra non-breaking abbreviations on top of common ones."""

        self.abbreviations = self._COMMON_ABBREVIATIONS | {
            abbreviation.lower() for abbreviation in abbreviations
        }

    def segment(self, text: str, *, final: bool = False) -> list[Span]:
        """Return ordered, non-overlapping sentence spans over `text`.

        Args:
            text: Current buffer contents.
            final: Whether no more text will follow, so end-of-text closes a sentence.

        Returns:
            Spans covering each sentence with its terminator and trailing whitespace.
            A sentence only starts counting once it holds alphanumeric content, so
            punctuation-only text yields no spans.
        """

        spans: list[Span] = []
        text_length = len(text)
        start = 0
        has_content = False
        index = 0

        while index < text_length:
            character = text[index]
            if character.isalnum():
                has_content = True
                index += 1
                continue
            if (
                character not in self._TERMINATORS
                or not has_content
                or not self._is_sentence_boundary(text, start, index)
            ):
                index += 1
                continue

            end = self._consume_terminal_run(text, index)
            if end < text_length and text[end].isspace():
                end = self._consume_whitespace(text, end)
            elif not (final and end == text_length):
                index = end
                continue

            spans.append(Span(start=start, end=end))
            start = end
            has_content = False
            index = end

        return spans

    def _is_sentence_boundary(self, text: str, start: int, punctuation_index: int) -> bool:
        """Return whether punctuation at index terminates a sentence."""

        if text[punctuation_index] != ".":
            return True
        if self._is_decimal_period(text, punctuation_index):
            return False
        if self._is_abbreviation_period(text, start, punctuation_index):
            return False
        return True

    def _is_decimal_period(self, text: str, punctuation_index: int) -> bool:
        """Return whether a period is part of a decimal number."""

        if punctuation_index <= 0 or punctuation_index + 1 >= len(text):
            return False
        return text[punctuation_index - 1].isdigit() and text[punctuation_index + 1].isdigit()

    def _is_abbreviation_period(self, text: str, start: int, punctuation_index: int) -> bool:
        """Return whether a period belongs to a likely abbreviation token.

        Lookback never crosses `start`, so the decision does not depend on how
        much already-consumed text is still buffered.
        """

        token_start = punctuation_index
        while token_start > start and text[token_start - 1].isalpha():
            token_start -= 1
        token = text[token_start : punctuation_index + 1].lower()
        if token in self.abbreviations:
            return True

        # dotted forms such as "e.g." or "U.S."
        acronym_start = max(start, punctuation_index - self._ACRONYM_WINDOW_CHARS)
        acronym_window = text[acronym_start : punctuation_index + 1]
        return bool(self._ACRONYM_PATTERN.search(acronym_window))

    def _consume_terminal_run(self, text: str, index: int) -> int:
        """Consume repeated terminators and trailing closing punctuation."""

        adjusted = index
        text_length = len(text)
        while adjusted < text_length and text[adjusted] in self._TERMINATORS:
            adjusted += 1
        while adjusted < text_length and text[adjusted] in self._TRAILING_SENTENCE_CLOSERS:
            adjusted += 1
        return adjusted

    def _consume_whitespace(self, text: str, index: int) -> int:
        """Consume whitespace following a sentence terminator."""

        adjusted = index
        text_length = len(text)
        while adjusted < text_length and text[adjusted].isspace():
            adjusted += 1
        return adjusted
