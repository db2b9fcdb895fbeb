"""Input/output stage components for sentsort.

This package contains the streaming extractor and the XML/CSV sentence
writers used by the export pipeline.
"""

from .csv_writer import CsvSentenceWriter
from .extractor import DEFAULT_CHUNK_SIZE_CHARS, StreamingExtractor
from .sinks import OutputSink
from .xml_writer import XmlSentenceWriter

__all__ = [
    "DEFAULT_CHUNK_SIZE_CHARS",
    "StreamingExtractor",
    "OutputSink",
    "XmlSentenceWriter",
    "CsvSentenceWriter",
]
