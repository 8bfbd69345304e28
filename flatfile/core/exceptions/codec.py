"""Codec-related exceptions.

Every failure the codec can report belongs to exactly one ``ErrorKind``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of codec error kinds."""

    INVALID_FORMAT = "invalid_format"
    KEY_NOT_FOUND = "key_not_found"
    KEY_ALREADY_EXISTS = "key_already_exists"
    OUT_OF_RANGE = "out_of_range"
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    FIELD_LENGTH_EXCEEDED = "field_length_exceeded"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


class FlatFileException(Exception):
    """Base exception for flat file codec errors."""

    kind: ErrorKind

    def __init__(self, message: str = "A flat file error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidFormatError(FlatFileException):
    """Raised when a field format is malformed (e.g. zero or negative length)."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, key: str, offset: int, length: int, reason: str = "length must be positive"):
        self.key = key
        self.offset = offset
        self.length = length
        super().__init__(f"Invalid format for field '{key}' (offset={offset}, length={length}): {reason}")


class KeyNotFoundError(FlatFileException):
    """Raised when a field key is not present in a line."""

    kind = ErrorKind.KEY_NOT_FOUND

    def __init__(self, key: str, available: list[str] | None = None):
        self.key = key
        self.available = available
        message = f"Field not found: '{key}'"
        if available is not None:
            message = f"{message}. Available fields: {', '.join(available) or 'none'}"
        super().__init__(message)


class KeyAlreadyExistsError(FlatFileException):
    """Raised when inserting a field whose key is already present."""

    kind = ErrorKind.KEY_ALREADY_EXISTS

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Field already exists: '{key}'")


class FieldLengthExceededError(FlatFileException):
    """Raised when an explicit field update would not fit its format."""

    kind = ErrorKind.FIELD_LENGTH_EXCEEDED

    def __init__(self, key: str, value: str, size: int, length: int):
        self.key = key
        self.value = value
        self.size = size
        self.length = length
        super().__init__(
            f"Value for field '{key}' is {size} bytes long, "
            f"format allows at most {length}"
        )


class LineIndexError(FlatFileException):
    """Raised when a line position is outside the flat file."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Line index {index} out of range for flat file with {size} line(s)")


class FieldIndexError(FlatFileException):
    """Raised when a field position is outside a line."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(f"Field position {position} out of range for line with {size} field(s)")


class LineParseError(FlatFileException):
    """Raised when a raw line cannot be decoded.

    Base class for decode errors with optional line number and content tracking.
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        content: str | None = None,
    ):
        self.line_number = line_number
        self.content = content

        if line_number:
            message = f"Line {line_number}: {message}"
        if content is not None:
            message = f"{message}\n  Content: {content[:100]!r}"

        super().__init__(message)


class FieldOutOfRangeError(LineParseError):
    """Raised when a format reaches past the end of the raw line."""

    kind = ErrorKind.OUT_OF_RANGE

    def __init__(
        self,
        key: str,
        end: int,
        width: int,
        line_number: int | None = None,
        content: str | None = None,
    ):
        self.key = key
        self.end = end
        self.width = width
        super().__init__(
            f"Field '{key}' ends at {end} but line is {width} bytes long",
            line_number=line_number,
            content=content,
        )


class UnrecognizedFormatError(LineParseError):
    """Raised when the classifier rejects a raw line."""

    kind = ErrorKind.UNRECOGNIZED_FORMAT

    def __init__(self, content: str, line_number: int | None = None, width: int | None = None):
        self.width = len(content) if width is None else width
        super().__init__(
            f"No format recognized for line of {self.width} bytes",
            line_number=line_number,
            content=content,
        )
