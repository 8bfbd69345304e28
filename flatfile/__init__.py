"""Codec for fixed-width ("flat") text records."""

from loguru import logger

from flatfile.core.codec import (
    CRLF,
    LF,
    FlatFile,
    LineClassifier,
    layout_to_formats,
    length_classifier,
    static_classifier,
)
from flatfile.core.exceptions import (
    ErrorKind,
    FieldIndexError,
    FieldLengthExceededError,
    FieldOutOfRangeError,
    FlatFileException,
    InvalidFormatError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
    LineIndexError,
    LineParseError,
    UnrecognizedFormatError,
)
from flatfile.core.models import Field, FieldFormat, Line

# Silent until the application calls flatfile.config.configure_logging()
logger.disable("flatfile")

__version__ = "0.1.0"

__all__ = [
    "CRLF",
    "LF",
    "ErrorKind",
    "Field",
    "FieldFormat",
    "FieldIndexError",
    "FieldLengthExceededError",
    "FieldOutOfRangeError",
    "FlatFile",
    "FlatFileException",
    "InvalidFormatError",
    "KeyAlreadyExistsError",
    "KeyNotFoundError",
    "Line",
    "LineClassifier",
    "LineIndexError",
    "LineParseError",
    "UnrecognizedFormatError",
    "layout_to_formats",
    "length_classifier",
    "static_classifier",
]
