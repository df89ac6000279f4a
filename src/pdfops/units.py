"""Dimension and page-size parsing for pdfops."""

import re

from reportlab.lib import pagesizes

from pdfops.constants import UNIT_TO_POINTS
from pdfops.exceptions import ConfigError


def parse_dimension(value: str) -> float:
    """
    Parse a dimension string to points.

    Supports: "100mm", "4in", "288pt", "10cm"

    Args:
        value: Dimension string with unit

    Returns:
        Value in points
    """
    if not value:
        raise ConfigError("Empty dimension value")

    value = value.strip().lower()
    match = re.match(r"^(\d+(?:\.\d+)?|\.\d+)\s*(mm|in|pt|cm)$", value)
    if not match:
        raise ConfigError(
            f"Invalid dimension format: {value}. Use format like '100mm', '4in', '288pt'"
        )

    number = float(match.group(1))
    unit = match.group(2)
    return number * UNIT_TO_POINTS[unit]


def parse_coordinate(value: float | str) -> float:
    """Parse a coordinate value (float in points, or string with units) to points."""
    if isinstance(value, (int, float)):
        return float(value)
    return parse_dimension(value)


def parse_page_size(value: str | list | tuple) -> tuple[float, float]:
    """
    Resolve a page size to (width, height) in points.

    Accepts a reportlab page-size name ("A4", "letter", "legal", ...) or a
    (width, height) pair of coordinates, e.g. ("8.5in", "11in").
    """
    if isinstance(value, str):
        size = getattr(pagesizes, value.strip().upper(), None)
        if size is None:
            size = getattr(pagesizes, value.strip().lower(), None)
        if not isinstance(size, tuple):
            raise ConfigError(
                f"Unknown page size: {value}. Use a name like 'A4' or 'letter', "
                f"or a [width, height] pair"
            )
        return float(size[0]), float(size[1])

    if isinstance(value, (list, tuple)) and len(value) == 2:
        width = parse_coordinate(value[0])
        height = parse_coordinate(value[1])
        if width <= 0 or height <= 0:
            raise ConfigError(f"Page size must be positive, got {value}")
        return width, height

    raise ConfigError(f"Invalid page size: {value!r}")
