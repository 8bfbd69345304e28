"""
Flat file collection engine.

A ``FlatFile`` is an ordered, in-memory list of ``Line`` objects plus the
classifier that decides how each raw line is decoded. Lines may follow
different layouts within the same file. Reading and writing are single,
whole-buffer passes over any object exposing ``read()`` / ``write()``.

Instances are not thread-safe; callers sharing one across threads must
serialize access themselves.
"""

import io
from functools import cmp_to_key
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Union

from loguru import logger

from flatfile.api.schemas import FieldRecord, FlatFileRecord, LineRecord
from flatfile.config.settings import settings
from flatfile.core.codec.classifier import LineClassifier, as_classifier
from flatfile.core.exceptions import (
    FieldLengthExceededError,
    KeyNotFoundError,
    LineIndexError,
    LineParseError,
    UnrecognizedFormatError,
)
from flatfile.core.models import Field, FieldFormat, Line

LF = "\n"
CR = "\r"
CRLF = "\r\n"

LessFunc = Callable[[Line, Line], bool]


class FlatFile:
    """Ordered collection of fixed-width lines."""

    def __init__(
        self,
        classifier: Union[LineClassifier, Sequence[FieldFormat]],
        encoding: Optional[str] = None,
    ):
        """Initialize a flat file.

        Args:
            classifier: Callable choosing the formats for a raw line (``None``
                rejects the line), or a fixed list of formats shared by all lines
            encoding: Encoding for raw bytes; defaults to settings.FLATFILE_ENCODING
        """
        self.classifier = as_classifier(classifier)
        self.encoding = encoding or settings.FLATFILE_ENCODING
        self._lines: List[Line] = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self._lines):
            raise LineIndexError(i, len(self._lines))

    def _encode(self, raw: Union[str, bytes]) -> bytes:
        if isinstance(raw, str):
            return raw.encode(self.encoding)
        return raw

    def _parse(self, raw: Union[str, bytes], line_number: Optional[int] = None) -> Line:
        data = self._encode(raw)
        formats = self.classifier(data)
        if not formats:
            raise UnrecognizedFormatError(
                data.decode(self.encoding, errors="replace"),
                line_number=line_number,
                width=len(data),
            )
        return Line.parse(data, formats, encoding=self.encoding, line_number=line_number)

    # ------------------------------------------------------------------
    # Classification and appending
    # ------------------------------------------------------------------

    def formats(self, raw: Union[str, bytes]) -> Optional[Sequence[FieldFormat]]:
        """Run the classifier on a raw line without adding it."""
        return self.classifier(self._encode(raw))

    def append(self, *lines: Line) -> None:
        """Append copies of already built lines, bypassing the classifier."""
        self._lines.extend(line.copy(self.encoding) for line in lines)

    def append_raw(self, raw: Union[str, bytes]) -> Line:
        """Classify, decode and append a raw line.

        Returns:
            The appended line

        Raises:
            UnrecognizedFormatError: If the classifier rejects the line
            FieldOutOfRangeError: If a chosen format does not fit the line
        """
        line = self._parse(raw)
        self._lines.append(line)
        return line

    def extend_raw(self, raws: Iterable[Union[str, bytes]]) -> int:
        """Append several raw lines, stopping at the first rejected one.

        Returns:
            Number of lines appended
        """
        count = 0
        for raw in raws:
            self.append_raw(raw)
            count += 1
        return count

    def write(self, raw: Union[str, bytes]) -> int:
        """Append a single raw line; returns its size in bytes. Writer-style ``append_raw``."""
        data = self._encode(raw)
        self.append_raw(data)
        return len(data)

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def read_from(self, stream: Any) -> int:
        """Read a whole stream and append every non-empty line.

        Lines are split on LF; one trailing CR per line is dropped. Reading
        stops at the first line that fails to decode. Lines appended before
        it stay in place.

        Args:
            stream: Binary or text object exposing ``read()``

        Returns:
            Number of bytes (characters for text streams) read

        Raises:
            UnrecognizedFormatError: If the classifier rejects a line
            FieldOutOfRangeError: If a chosen format does not fit a line
        """
        data = stream.read()
        text = data.decode(self.encoding) if isinstance(data, bytes) else data

        # Strip BOM if present
        if text.startswith("\ufeff"):
            text = text[1:]
            logger.debug("Stripped BOM from stream content")

        appended = 0
        for line_number, raw in enumerate(text.split(LF), 1):
            raw = raw.removesuffix(CR)
            if not raw:
                continue
            try:
                self._lines.append(self._parse(raw, line_number=line_number))
            except LineParseError as e:
                logger.warning(
                    f"Stopped reading at line {line_number} after {appended} line(s): {e.message}"
                )
                raise
            appended += 1

        logger.info(f"Read {len(data)} bytes: {appended} line(s) appended, {len(self._lines)} total")
        return len(data)

    def write_to(
        self,
        stream: Any,
        line_ending: Optional[str] = None,
        trailing: bool = False,
    ) -> int:
        """Encode every line and write them to a stream.

        Args:
            stream: Binary or text object exposing ``write()``
            line_ending: Separator between lines; defaults to settings.FLATFILE_LINE_ENDING
            trailing: Also terminate the last line

        Returns:
            Number of bytes (characters for text streams) written
        """
        if isinstance(stream, io.TextIOBase):
            payload: Union[str, bytes] = self.to_string(line_ending=line_ending, trailing=trailing)
        else:
            payload = self.to_bytes(line_ending=line_ending, trailing=trailing)
        stream.write(payload)
        logger.debug(f"Wrote {len(self._lines)} line(s), {len(payload)} units")
        return len(payload)

    def read_file(self, filepath: Union[str, Path]) -> int:
        """Append the contents of a file. See ``read_from``."""
        path = Path(filepath)
        if not path.exists():
            logger.error(f"File not found: {filepath}")
            raise FileNotFoundError(f"File not found: {filepath}")

        logger.info(f"Reading flat file: {filepath} (size: {path.stat().st_size} bytes)")
        with path.open("rb") as f:
            return self.read_from(f)

    def write_file(
        self,
        filepath: Union[str, Path],
        line_ending: Optional[str] = None,
        trailing: bool = False,
    ) -> int:
        """Write the flat file to a path, replacing any existing file."""
        path = Path(filepath)
        with path.open("wb") as f:
            written = self.write_to(f, line_ending=line_ending, trailing=trailing)
        logger.info(f"Wrote flat file: {filepath} ({written} bytes)")
        return written

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def strings(self) -> List[str]:
        return [line.encode() for line in self._lines]

    def to_string(self, line_ending: Optional[str] = None, trailing: bool = False) -> str:
        if line_ending is None:
            line_ending = settings.FLATFILE_LINE_ENDING
        text = line_ending.join(self.strings())
        if trailing and self._lines:
            text += line_ending
        return text

    def to_bytes(self, line_ending: Optional[str] = None, trailing: bool = False) -> bytes:
        if line_ending is None:
            line_ending = settings.FLATFILE_LINE_ENDING
        separator = line_ending.encode(self.encoding)
        data = separator.join(line.to_bytes() for line in self._lines)
        if trailing and self._lines:
            data += separator
        return data

    def byte_len(self, line_ending: Optional[str] = None, trailing: bool = False) -> int:
        """Size of ``to_bytes`` output with the same arguments."""
        if line_ending is None:
            line_ending = settings.FLATFILE_LINE_ENDING
        separators = len(self._lines) - 1 if self._lines else 0
        if trailing and self._lines:
            separators += 1
        body = sum(line.width for line in self._lines)
        return body + separators * len(line_ending.encode(self.encoding))

    def string_at(self, i: int) -> str:
        self._check_index(i)
        return self._lines[i].encode()

    def bytes_at(self, i: int) -> bytes:
        self._check_index(i)
        return self._lines[i].to_bytes()

    def to_records(self) -> List[List[dict]]:
        """Project the file to nested ``{key, value, offset, length}`` records."""
        return [line.to_records() for line in self._lines]

    def to_json(self, indent: Optional[int] = None) -> str:
        """Export the file as JSON: a list of lines, each a list of field records."""
        export = FlatFileRecord(
            [
                LineRecord([FieldRecord(**record) for record in line.to_records()])
                for line in self._lines
            ]
        )
        return export.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "FlatFile":
        """Importing from the structured export is not supported."""
        raise NotImplementedError("FlatFile.from_json is not implemented; the JSON export is one-way")

    # ------------------------------------------------------------------
    # Line level operations
    # ------------------------------------------------------------------

    def line(self, i: int) -> Line:
        """Return a copy of the ith line."""
        self._check_index(i)
        return self._lines[i].copy()

    def set_line(self, i: int, line: Line) -> None:
        """Replace the ith line with a copy of ``line``."""
        self._check_index(i)
        self._lines[i] = line.copy(self.encoding)

    def set_raw(self, i: int, raw: Union[str, bytes]) -> None:
        """Replace the ith line with a classified raw line."""
        self._check_index(i)
        self._lines[i] = self._parse(raw)

    def remove(self, i: int) -> Line:
        """Remove and return the ith line."""
        self._check_index(i)
        line = self._lines.pop(i)
        logger.debug(f"Removed line {i}, {len(self._lines)} line(s) remain")
        return line

    def clear(self) -> None:
        """Remove every line."""
        self._lines = []

    def swap(self, i: int, j: int) -> None:
        self._check_index(i)
        self._check_index(j)
        self._lines[i], self._lines[j] = self._lines[j], self._lines[i]

    def sort(
        self,
        less: Optional[LessFunc] = None,
        *,
        key: Optional[Callable[[Line], Any]] = None,
        reverse: bool = False,
    ) -> None:
        """Stable sort of the lines.

        Args:
            less: Predicate returning True when the first line sorts before the second
            key: Alternatively, a sort key computed per line
            reverse: Reverse the resulting order (stability is kept)
        """
        if (less is None) == (key is None):
            raise ValueError("sort() takes exactly one of 'less' or 'key'")

        if less is not None:
            def compare(a: Line, b: Line) -> int:
                if less(a, b):
                    return -1
                if less(b, a):
                    return 1
                return 0

            key = cmp_to_key(compare)

        self._lines.sort(key=key, reverse=reverse)

    # ------------------------------------------------------------------
    # Field level operations
    # ------------------------------------------------------------------

    def value(self, i: int, key: str) -> str:
        self._check_index(i)
        return self._lines[i].get(key)

    def value_at(self, i: int, j: int) -> str:
        self._check_index(i)
        return self._lines[i].value_at(j)

    def field(self, i: int, key: str) -> Field:
        self._check_index(i)
        return self._lines[i].field(key)

    def field_at(self, i: int, j: int) -> Field:
        self._check_index(i)
        return self._lines[i].field_at(j)

    def index_of(self, i: int, key: str) -> int:
        self._check_index(i)
        return self._lines[i].index_of(key)

    def keys(self, i: int) -> List[str]:
        self._check_index(i)
        return self._lines[i].keys()

    def values(self, i: int) -> List[str]:
        self._check_index(i)
        return self._lines[i].values()

    def key_values(self, i: int) -> dict:
        self._check_index(i)
        return self._lines[i].key_values()

    def key_value(self, i: int, j: int) -> tuple:
        self._check_index(i)
        return self._lines[i].key_value_at(j)

    def formats_at(self, i: int) -> List[FieldFormat]:
        self._check_index(i)
        return self._lines[i].formats()

    def set_field(self, i: int, key: str, value: str) -> None:
        """Set a field, rejecting values that would not fit.

        Raises:
            LineIndexError: If ``i`` is not a valid position
            KeyNotFoundError: If line ``i`` has no field ``key``
            FieldLengthExceededError: If ``value`` encodes to more bytes than the field holds
        """
        self._check_index(i)
        line = self._lines[i]
        if key not in line:
            raise KeyNotFoundError(key, available=line.keys())

        length = line.field(key).length
        size = len(value.encode(line.encoding))
        if size > length:
            logger.warning(f"Rejected value for '{key}' on line {i}: {size} > {length} bytes")
            raise FieldLengthExceededError(key, value, size, length)

        line.set(key, value)

    def set_value(self, i: int, key: str, value: str) -> None:
        """Set a field, truncating values that do not fit."""
        self._check_index(i)
        self._lines[i].set(key, value)

    def set_value_at(self, i: int, j: int, value: str) -> None:
        """Set the jth field of line ``i``, truncating values that do not fit."""
        self._check_index(i)
        self._lines[i].set_at(j, value)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return (line.copy() for line in self._lines)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"FlatFile(lines={len(self._lines)}, encoding={self.encoding!r})"
