"""A field format paired with its current value."""

from flatfile.core.models.field_format import FieldFormat

PAD_CHAR = " "
DEFAULT_ENCODING = "utf-8"


def fit(value: str, length: int, encoding: str = DEFAULT_ENCODING) -> str:
    """Cut ``value`` so its encoded form takes at most ``length`` bytes.

    A multibyte character that would straddle the limit is dropped whole.
    """
    data = value.encode(encoding)
    if len(data) <= length:
        return value
    return data[:length].decode(encoding, errors="ignore")


class Field:
    """A named slot of a line and the text it currently holds.

    Offsets and lengths count encoded bytes. The value never takes more than
    ``format.length`` bytes; anything longer is cut on every write. Overflow
    is treated as data, not as an error.
    """

    __slots__ = ("format", "encoding", "_value")

    def __init__(self, format: FieldFormat, value: str = "", encoding: str = DEFAULT_ENCODING):
        self.format = format
        self.encoding = encoding
        self._value = fit(value, format.length, encoding)

    @classmethod
    def new(
        cls,
        key: str,
        value: str,
        offset: int,
        length: int,
        encoding: str = DEFAULT_ENCODING,
    ) -> "Field":
        """Build a field and its format in one call."""
        return cls(FieldFormat(key, offset, length), value, encoding)

    @property
    def key(self) -> str:
        return self.format.key

    @property
    def offset(self) -> int:
        return self.format.offset

    @property
    def length(self) -> int:
        return self.format.length

    @property
    def value(self) -> str:
        return self._value

    def size(self) -> int:
        """Encoded size of the current value, in bytes."""
        return len(self._value.encode(self.encoding))

    def set(self, value: str) -> None:
        """Overwrite the value, truncating it to the format length."""
        self._value = fit(value, self.format.length, self.encoding)

    def encode(self) -> str:
        """Render the value left-justified and space-padded to the format length in bytes."""
        return self._value + PAD_CHAR * (self.format.length - self.size())

    def to_bytes(self) -> bytes:
        """Fixed-width rendering as exactly ``format.length`` bytes."""
        return self.encode().encode(self.encoding)

    def copy(self, encoding: str | None = None) -> "Field":
        return Field(self.format, self._value, encoding or self.encoding)

    def compare(self, other: "Field") -> int:
        """Order by format, then by value."""
        result = self.format.compare(other.format)
        if result:
            return result
        if self._value < other._value:
            return -1
        if other._value < self._value:
            return 1
        return 0

    def to_record(self) -> dict[str, str]:
        """Project the field to its exported ``{key, value, offset, length}`` form."""
        return {
            "key": self.key,
            "value": self._value,
            "offset": str(self.offset),
            "length": str(self.length),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.format == other.format and self._value == other._value

    def __repr__(self) -> str:
        return (
            f"Field(key={self.key!r}, value={self._value!r}, "
            f"offset={self.offset}, length={self.length})"
        )
