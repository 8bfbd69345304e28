"""Core exceptions for the codec."""

from flatfile.core.exceptions.codec import (
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

__all__ = [
    "ErrorKind",
    "FlatFileException",
    # Format / field
    "InvalidFormatError",
    "KeyNotFoundError",
    "KeyAlreadyExistsError",
    "FieldLengthExceededError",
    # Collection
    "LineIndexError",
    "FieldIndexError",
    # Decoding
    "LineParseError",
    "FieldOutOfRangeError",
    "UnrecognizedFormatError",
]
