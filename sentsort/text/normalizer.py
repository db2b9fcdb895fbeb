"""Word tokenization, cleanup, and ordering for detected sentences.

Responsibilities:
- Split sentence text into word, contraction, and punctuation tokens.
- Strip boundary punctuation except for allow-listed abbreviations.
- Order words case-insensitively with lowercase-initial words first.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from ..errors import SegmenterSetupError
from ..models.datatypes import Sentence


DEFAULT_ABBREVIATIONS: tuple[str, ...] = ("Mr.", "Mrs.", "Ms.")

_STRIP_CHARACTERS = ".,!?:;()\"'"
_STANDALONE_HYPHEN = "-"
_DOTTED_ACRONYM_PATTERN = r"(?<!\w)(?:[A-Za-z]\.){2,}"
_WORD_PATTERN = r"\w+(?:(?:['’\-]|(?<=\d)[.,](?=\d))\w+)*"
_PUNCTUATION_RUN_PATTERN = r"[^\w\s]+"


def word_sort_key(word: str) -> tuple[str, bool, str]:
    """Return the ordering key for one word.

    Words compare case-insensitively first. Ties are broken by placing a word
    with a lowercase first character before one with an uppercase first
    character, and finally by plain codepoint order.
    """

    return word.lower(), word[:1].isupper(), word


def compare_words(left: str, right: str) -> int:
    """Compare two words with `word_sort_key` ordering, returning -1, 0, or 1."""

    left_key = word_sort_key(left)
    right_key = word_sort_key(right)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def sort_words(words: Iterable[str]) -> list[str]:
    """Return words sorted with `word_sort_key` ordering."""

    return sorted(words, key=word_sort_key)


class WordNormalizer:
    """Turn raw sentence text into a sorted list of cleaned words."""

    def __init__(self, abbreviations: Iterable[str] = DEFAULT_ABBREVIATIONS) -> None:
        """Compile the tokenizer for the given abbreviation allow-list."""

        self.abbreviations = frozenset(_validated_abbreviations(abbreviations))
        self._token_re = _compile_token_pattern(self.abbreviations)

    def tokenize(self, text: str) -> list[str]:
        """Split text into word, contraction, abbreviation, acronym, and punctuation tokens."""

        return self._token_re.findall(text)

    def clean_token(self, token: str) -> str:
        """Return the cleaned token, or an empty string when it should be dropped."""

        if token in self.abbreviations:
            return token
        cleaned = token.strip(_STRIP_CHARACTERS)
        if cleaned == _STANDALONE_HYPHEN:
            return ""
        return cleaned

    def extract_words(self, text: str) -> list[str]:
        """Tokenize, clean, filter, and sort the words of one sentence."""

        cleaned = (self.clean_token(token) for token in self.tokenize(text))
        return sort_words(word for word in cleaned if word)

    def build_sentence(self, text: str) -> Sentence | None:
        """Build a `Sentence` from raw text, or `None` when no words remain."""

        stripped = text.strip()
        if not stripped:
            return None
        words = self.extract_words(stripped)
        if not words:
            return None
        return Sentence(words=tuple(words))


def _validated_abbreviations(abbreviations: Iterable[str]) -> list[str]:
    """Validate the abbreviation allow-list used by the tokenizer."""

    validated: list[str] = []
    for abbreviation in abbreviations:
        if not isinstance(abbreviation, str) or not abbreviation.strip():
            raise SegmenterSetupError("Abbreviations must be non-empty strings.")
        if abbreviation != abbreviation.strip() or any(ch.isspace() for ch in abbreviation):
            raise SegmenterSetupError(
                f"Abbreviation `{abbreviation}` must not contain whitespace."
            )
        if not abbreviation.endswith(".") or len(abbreviation) < 2:
            raise SegmenterSetupError(
                f"Abbreviation `{abbreviation}` must be a word followed by a period."
            )
        validated.append(abbreviation)
    return validated


def _compile_token_pattern(abbreviations: Iterable[str]) -> re.Pattern[str]:
    """Compile the token pattern.

    Abbreviations are tried first, then dotted acronyms such as `U.S.`, so
    neither is broken into single letters by the plain word pattern.
    """

    alternatives: list[str] = []
    ordered = sorted(abbreviations, key=lambda item: (-len(item), item))
    if ordered:
        alternatives.append(
            r"(?<!\w)(?:" + "|".join(re.escape(item) for item in ordered) + ")"
        )
    alternatives.append(_DOTTED_ACRONYM_PATTERN)
    alternatives.append(_WORD_PATTERN)
    alternatives.append(_PUNCTUATION_RUN_PATTERN)
    return re.compile("|".join(alternatives))
