"""Field, format and line models."""

from flatfile.core.models.field import Field
from flatfile.core.models.field_format import FieldFormat
from flatfile.core.models.line import Line

__all__ = ["Field", "FieldFormat", "Line"]
