"""Shared datatypes for sentsort stages."""

from .datatypes import ExportResult, Sentence, Span

__all__ = ["Sentence", "Span", "ExportResult"]
