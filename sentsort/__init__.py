"""Top-level package for sentsort.

This package splits plain-text documents into sentences, normalizes and
sorts their words, and exports the result as XML and CSV. The main
orchestration entry point is `SentenceExportPipeline`.
"""

__version__ = "0.1.0"

from .pipeline import SentenceExportPipeline

__all__ = ["SentenceExportPipeline", "__version__"]
