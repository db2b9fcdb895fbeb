"""Unit tests for rule-based sentence boundary detection."""

from __future__ import annotations

import pytest

from sentsort.models.datatypes import Span
from sentsort.text.segmenter import SentenceSegmenter


def _covered(text: str, spans: list[Span]) -> list[str]:
    """Return the text covered by each span."""

    return [span.covered_text(text) for span in spans]


def test_segment_splits_on_terminators_followed_by_whitespace() -> None:
    """Question marks, exclamation marks, and periods should close sentences."""

    text = "First sentence? Second sentence! Third one ends here."
    segmenter = SentenceSegmenter()

    assert _covered(text, segmenter.segment(text)) == [
        "First sentence? ",
        "Second sentence! ",
    ]
    assert _covered(text, segmenter.segment(text, final=True)) == [
        "First sentence? ",
        "Second sentence! ",
        "Third one ends here.",
    ]


def test_segment_spans_are_contiguous_and_advancing() -> None:
    """Spans should start at zero, never overlap, and strictly advance."""

    text = "One. Two!  Three?\nFour."
    spans = SentenceSegmenter().segment(text, final=True)

    assert spans[0].start == 0
    assert spans[-1].end == len(text)
    for previous, current in zip(spans, spans[1:]):
        assert previous.end == current.start
        assert current.start > previous.start


def test_segment_does_not_split_on_abbreviations() -> None:
    """Allow-listed and common abbreviations should not end sentences."""

    text = "Mr. Smith went to Washington. Mrs. Jones stayed home."

    assert _covered(text, SentenceSegmenter().segment(text, final=True)) == [
        "Mr. Smith went to Washington. ",
        "Mrs. Jones stayed home.",
    ]


def test_segment_does_not_split_on_decimals_or_acronyms() -> None:
    """Decimal points and dotted acronyms should stay inside their sentence."""

    text = "It costs 3.50 in the U.S. today. Fine, e.g. later."

    assert _covered(text, SentenceSegmenter().segment(text, final=True)) == [
        "It costs 3.50 in the U.S. today. ",
        "Fine, e.g. later.",
    ]


def test_segment_uses_configured_extra_abbreviations() -> None:
    """Extra abbreviations should be treated as non-breaking periods."""

    text = "See Gen. Grant now. Done."

    assert len(SentenceSegmenter().segment(text, final=True)) == 3
    assert _covered(text, SentenceSegmenter(["Gen."]).segment(text, final=True)) == [
        "See Gen. Grant now. ",
        "Done.",
    ]


def test_segment_includes_closing_quotes_in_sentence() -> None:
    """Closing quotes and brackets after a terminator should stay with the sentence."""

    text = 'He said "stop." Then (he left.) Done'

    assert _covered(text, SentenceSegmenter().segment(text)) == [
        'He said "stop." ',
        "Then (he left.) ",
    ]


@pytest.mark.parametrize("final", [False, True])
def test_segment_returns_no_spans_for_punctuation_only_text(final: bool) -> None:
    """Text without alphanumeric content should produce zero spans."""

    assert SentenceSegmenter().segment("  .   ? !  ", final=final) == []
    assert SentenceSegmenter().segment("", final=final) == []


def test_segment_waits_for_whitespace_before_closing_at_buffer_end() -> None:
    """A terminator at the end of non-final text should not be a safe boundary yet."""

    segmenter = SentenceSegmenter()

    assert segmenter.segment("Hello world.") == []
    assert segmenter.segment('Hello world."') == []
    assert segmenter.segment("Price is 3.") == []
    assert _covered("Hello world.", segmenter.segment("Hello world.", final=True)) == [
        "Hello world."
    ]


def test_segment_leading_punctuation_joins_following_sentence() -> None:
    """Punctuation before any words should be carried into the next sentence span."""

    text = "... Hello there. Bye."

    assert _covered(text, SentenceSegmenter().segment(text, final=True)) == [
        "... Hello there. ",
        "Bye.",
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("The answer is no. We left early.", ["The answer is no. ", "We left early."]),
        (
            "I bought apples, pears, etc. Then I went home.",
            ["I bought apples, pears, etc. ", "Then I went home."],
        ),
        ("I live on Main St. He lives nearby.", ["I live on Main St. ", "He lives nearby."]),
    ],
)
def test_segment_splits_after_ordinary_words_ending_in_period(
    text: str, expected: list[str]
) -> None:
    """Ordinary words that look like abbreviations should still end sentences."""

    assert _covered(text, SentenceSegmenter().segment(text, final=True)) == expected
