"""Sentence segmentation and word normalization components.

This package provides deterministic boundary detection and word cleanup
building blocks used by the streaming extractor.
"""

from .normalizer import (
    DEFAULT_ABBREVIATIONS,
    WordNormalizer,
    compare_words,
    sort_words,
    word_sort_key,
)
from .segmenter import SentenceSegmenter

__all__ = [
    "DEFAULT_ABBREVIATIONS",
    "WordNormalizer",
    "SentenceSegmenter",
    "compare_words",
    "sort_words",
    "word_sort_key",
]
