"""Line classifiers: choose the field layout for a raw line.

A classifier is any callable taking the raw line as encoded bytes (without
terminator) and returning the formats to parse it with, or ``None`` when the line matches no
known record type.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from loguru import logger

from flatfile.core.exceptions import InvalidFormatError
from flatfile.core.models import FieldFormat

LineClassifier = Callable[[bytes], Optional[Sequence[FieldFormat]]]


def static_classifier(formats: Sequence[FieldFormat]) -> LineClassifier:
    """Classifier applying the same layout to every line."""
    layout = list(formats)

    def classify(raw: bytes) -> Optional[Sequence[FieldFormat]]:
        return layout

    return classify


def length_classifier(layouts: Mapping[int, Sequence[FieldFormat]]) -> LineClassifier:
    """Classifier selecting a layout by raw line length in bytes.

    Args:
        layouts: Mapping of line length to the formats used for lines of that length

    Returns:
        Classifier that rejects any line whose length is not in ``layouts``
    """
    registry: Dict[int, List[FieldFormat]] = {
        length: list(formats) for length, formats in layouts.items()
    }

    def classify(raw: bytes) -> Optional[Sequence[FieldFormat]]:
        formats = registry.get(len(raw))
        if formats is None:
            logger.debug(
                f"No layout registered for line length {len(raw)}, "
                f"known lengths: {sorted(registry)}"
            )
        return formats

    return classify


def as_classifier(
    source: Union[LineClassifier, Sequence[FieldFormat]],
) -> LineClassifier:
    """Normalize a classifier or a fixed list of formats into a classifier."""
    if callable(source):
        return source
    return static_classifier(source)


def layout_to_formats(layout: List[Dict[str, Any]]) -> List[FieldFormat]:
    """Convert a record layout into field formats.

    Each entry uses 1-based positions as found in copybook-derived layouts::

        {"fieldName": "CUST-ID", "startPosition": 1, "length": 8}

    Raises:
        InvalidFormatError: If an entry has a bad position or length
    """
    formats = []
    for idx, entry in enumerate(layout):
        start_pos = entry.get("startPosition", 1)
        length = entry.get("length", 1)
        name = entry.get("fieldName", f"FIELD_{start_pos}")

        if start_pos < 1:
            raise InvalidFormatError(
                name, start_pos - 1, length,
                reason=f"invalid start position {start_pos} for layout entry {idx}",
            )

        formats.append(FieldFormat(name, start_pos - 1, length))

    logger.debug(f"Converted layout with {len(formats)} field(s)")
    return formats
