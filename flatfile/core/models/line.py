"""Per-line decode/encode engine.

A ``Line`` keeps its fields as a list ordered by offset plus a key -> position
index. The list fixes the serialization order; the index gives constant time
lookup by key. Both are updated together on every structural change.

Offsets, lengths and the line width count bytes of the encoded line. The
encoding must render a space as a single byte (ASCII-compatible code pages,
UTF-8, EBCDIC).
"""

from typing import Iterable, Sequence

from loguru import logger

from flatfile.core.exceptions import (
    FieldIndexError,
    FieldOutOfRangeError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
)
from flatfile.core.models.field import DEFAULT_ENCODING, PAD_CHAR, Field
from flatfile.core.models.field_format import FieldFormat


def _order(field: Field) -> tuple[int, int]:
    return field.offset, field.length


class Line:
    """One fixed-width record: ordered fields indexed by key.

    ``width`` is the rendered length of the line in bytes. Lines built by
    ``parse`` remember the raw length so gaps and trailing space survive a
    round trip; programmatically built lines are as wide as their furthest
    field.
    """

    __slots__ = ("_fields", "_index", "width", "encoding")

    def __init__(
        self,
        fields: Iterable[Field] | None = None,
        width: int = 0,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.encoding = encoding
        self._fields: list[Field] = sorted(
            (f if f.encoding == encoding else f.copy(encoding) for f in fields or []),
            key=_order,
        )
        self._index: dict[str, int] = {}
        self._reindex()
        self.width = max([width] + [f.format.end for f in self._fields])

    @classmethod
    def parse(
        cls,
        raw: str | bytes,
        formats: Sequence[FieldFormat],
        encoding: str = DEFAULT_ENCODING,
        line_number: int | None = None,
    ) -> "Line":
        """Decode a raw fixed-width line using the given formats.

        Each format slices ``raw[offset:offset + length]`` of the encoded
        line; surrounding spaces are stripped from the slice and the rest is
        decoded to obtain the value.

        Args:
            raw: The raw line, without its line terminator; text is encoded first
            formats: Layout to apply; keys must be unique
            encoding: Encoding of the raw bytes
            line_number: Optional 1-based position, reported in errors

        Returns:
            The decoded line, as wide as ``raw`` in bytes

        Raises:
            FieldOutOfRangeError: If a format reaches past the end of ``raw``
            KeyAlreadyExistsError: If two formats share a key
            UnicodeDecodeError: If a field boundary splits a multibyte character
        """
        if isinstance(raw, str):
            raw = raw.encode(encoding)

        pad = PAD_CHAR.encode(encoding)
        width = len(raw)
        fields: list[Field] = []
        seen: set[str] = set()
        for fmt in formats:
            if fmt.end > width:
                raise FieldOutOfRangeError(
                    fmt.key, fmt.end, width,
                    line_number=line_number,
                    content=raw.decode(encoding, errors="replace"),
                )
            if fmt.key in seen:
                raise KeyAlreadyExistsError(fmt.key)
            seen.add(fmt.key)
            value = raw[fmt.offset:fmt.end].strip(pad).decode(encoding)
            fields.append(Field(fmt, value, encoding))

        return cls(fields, width=width, encoding=encoding)

    def _reindex(self) -> None:
        index: dict[str, int] = {}
        for position, field in enumerate(self._fields):
            if field.key in index:
                raise KeyAlreadyExistsError(field.key)
            index[field.key] = position
        self._index = index

    def _lookup(self, key: str) -> Field:
        try:
            return self._fields[self._index[key]]
        except KeyError:
            raise KeyNotFoundError(key, available=self.keys()) from None

    def _at(self, position: int) -> Field:
        if not 0 <= position < len(self._fields):
            raise FieldIndexError(position, len(self._fields))
        return self._fields[position]

    # ------------------------------------------------------------------
    # Key access
    # ------------------------------------------------------------------

    def contains(self, key: str) -> bool:
        return key in self._index

    def get(self, key: str) -> str:
        """Return the value stored under ``key``."""
        return self._lookup(key).value

    def set(self, key: str, value: str) -> None:
        """Overwrite the value under ``key``, truncating it to the field length.

        Raises:
            KeyNotFoundError: If the line has no such field
        """
        self._lookup(key).set(value)

    def insert(self, format: FieldFormat, value: str = "") -> None:
        """Add a new field. Use ``set`` to overwrite an existing one.

        Raises:
            KeyAlreadyExistsError: If the key is already present
        """
        if format.key in self._index:
            raise KeyAlreadyExistsError(format.key)

        self._fields.append(Field(format, value, self.encoding))
        self._fields.sort(key=_order)
        self._reindex()
        self.width = max(self.width, format.end)

    def delete(self, key: str) -> None:
        """Remove the field under ``key``. Its slot renders as spaces afterwards.

        Raises:
            KeyNotFoundError: If the line has no such field
        """
        if key not in self._index:
            raise KeyNotFoundError(key, available=self.keys())

        del self._fields[self._index[key]]
        self._reindex()
        logger.debug(f"Deleted field '{key}', {len(self._fields)} field(s) remain")

    def field(self, key: str) -> Field:
        """Return a copy of the field under ``key``."""
        return self._lookup(key).copy()

    def index_of(self, key: str) -> int:
        """Return the position of ``key`` in offset order."""
        if key not in self._index:
            raise KeyNotFoundError(key, available=self.keys())
        return self._index[key]

    # ------------------------------------------------------------------
    # Positional access
    # ------------------------------------------------------------------

    def field_at(self, position: int) -> Field:
        return self._at(position).copy()

    def value_at(self, position: int) -> str:
        return self._at(position).value

    def set_at(self, position: int, value: str) -> None:
        self._at(position).set(value)

    def key_value_at(self, position: int) -> tuple[str, str]:
        field = self._at(position)
        return field.key, field.value

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:
        return [f.key for f in self._fields]

    def values(self) -> list[str]:
        return [f.value for f in self._fields]

    def key_values(self) -> dict[str, str]:
        return {f.key: f.value for f in self._fields}

    def formats(self) -> list[FieldFormat]:
        return [f.format for f in self._fields]

    def fields(self) -> list[Field]:
        return [f.copy() for f in self._fields]

    def to_records(self) -> list[dict[str, str]]:
        return [f.to_record() for f in self._fields]

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Render the line at fixed width, in bytes.

        Fields are placed in offset order; gaps and the tail up to ``width``
        are filled with spaces. When formats overlap, the later field wins.
        """
        buffer = bytearray(PAD_CHAR.encode(self.encoding) * self.width)
        for field in self._fields:
            buffer[field.offset:field.format.end] = field.to_bytes()
        return bytes(buffer)

    def encode(self) -> str:
        """Render the line at fixed width as text."""
        return self.to_bytes().decode(self.encoding, errors="replace")

    def copy(self, encoding: str | None = None) -> "Line":
        """Deep copy: new fields and index, shared formats."""
        encoding = encoding or self.encoding
        return Line((f.copy(encoding) for f in self._fields), width=self.width, encoding=encoding)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __str__(self) -> str:
        return self.encode()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.width == other.width and self._fields == other._fields

    def __repr__(self) -> str:
        return f"Line(width={self.width}, fields={self.key_values()!r})"
