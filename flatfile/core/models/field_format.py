"""Field layout descriptor."""

from dataclasses import dataclass

from flatfile.core.exceptions import InvalidFormatError


@dataclass(frozen=True)
class FieldFormat:
    """Where a named field lives inside a fixed-width line.

    Formats are immutable and meant to be shared by every line that uses
    the same layout.

    Attributes:
        key: Field name, unique within a line
        offset: Zero-based position of the first byte
        length: Number of bytes reserved for the field
    """
    key: str
    offset: int
    length: int

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidFormatError(self.key, self.offset, self.length, reason="key must not be empty")
        if self.offset < 0:
            raise InvalidFormatError(self.key, self.offset, self.length, reason="offset must not be negative")
        if self.length <= 0:
            raise InvalidFormatError(self.key, self.offset, self.length)

    @property
    def end(self) -> int:
        """Position just past the last byte of the field."""
        return self.offset + self.length

    def compare(self, other: "FieldFormat") -> int:
        """Order by offset, then by length. Returns -1, 0 or 1."""
        mine = (self.offset, self.length)
        theirs = (other.offset, other.length)
        if mine < theirs:
            return -1
        if theirs < mine:
            return 1
        return 0

    def __lt__(self, other: "FieldFormat") -> bool:
        if not isinstance(other, FieldFormat):
            return NotImplemented
        return self.compare(other) < 0
