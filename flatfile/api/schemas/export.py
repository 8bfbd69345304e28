"""Structured export schemas for flat files.

The export is a one-way projection: file -> lines -> fields, with every
field attribute rendered as text.
"""

from pydantic import BaseModel, ConfigDict, Field, RootModel


class FieldRecord(BaseModel):
    """Exported form of a single field."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Field name")
    value: str = Field(..., description="Current value, without padding")
    offset: str = Field(..., description="Zero-based offset of the field in its line")
    length: str = Field(..., description="Width reserved for the field")


class LineRecord(RootModel[list[FieldRecord]]):
    """Exported form of a line: its fields in offset order."""


class FlatFileRecord(RootModel[list[LineRecord]]):
    """Exported form of a whole flat file."""
