"""Schemas for the structured flat file export."""

from flatfile.api.schemas.export import FieldRecord, FlatFileRecord, LineRecord

__all__ = ["FieldRecord", "FlatFileRecord", "LineRecord"]
