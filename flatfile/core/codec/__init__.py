"""Line classification and the flat file collection."""

from flatfile.core.codec.classifier import (
    LineClassifier,
    as_classifier,
    layout_to_formats,
    length_classifier,
    static_classifier,
)
from flatfile.core.codec.flatfile import CRLF, LF, FlatFile

__all__ = [
    "CRLF",
    "LF",
    "FlatFile",
    "LineClassifier",
    "as_classifier",
    "layout_to_formats",
    "length_classifier",
    "static_classifier",
]
