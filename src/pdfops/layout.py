"""Page-number overlay layout: position tokens, text templates, anchors."""

from dataclasses import dataclass
from enum import Enum

from pdfops.constants import (
    BOTTOM_OFFSET,
    DEFAULT_HORIZONTAL,
    DEFAULT_VERTICAL,
    HORIZONTAL_POSITIONS,
    SIDE_OFFSET,
    TOP_OFFSET,
    VERTICAL_POSITIONS,
)


class TextAlignment(str, Enum):
    """Horizontal alignment of overlay text relative to its anchor."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class PageNumberPosition:
    """Where page numbers go: vertical edge and horizontal placement."""

    vertical: str = DEFAULT_VERTICAL
    horizontal: str = DEFAULT_HORIZONTAL

    @property
    def is_top(self) -> bool:
        return self.vertical == "top"

    @property
    def is_left(self) -> bool:
        return self.horizontal == "left"

    @property
    def is_right(self) -> bool:
        return self.horizontal == "right"


@dataclass(frozen=True)
class Anchor:
    """Text anchor point in document space."""

    x: float
    y: float
    alignment: TextAlignment


def parse_position(token: str | None) -> PageNumberPosition:
    """
    Parse a hyphenated position token such as "top-left" or "bottom-center".

    The first segment is the vertical edge, the second the horizontal
    placement. Missing or unrecognized segments fall back to bottom / center
    without raising.
    """
    parts = (token or "").strip().lower().split("-")
    vertical = parts[0] if parts[0] else DEFAULT_VERTICAL
    horizontal = parts[1] if len(parts) > 1 else DEFAULT_HORIZONTAL

    if vertical not in VERTICAL_POSITIONS:
        vertical = DEFAULT_VERTICAL
    if horizontal not in HORIZONTAL_POSITIONS:
        horizontal = DEFAULT_HORIZONTAL
    return PageNumberPosition(vertical, horizontal)


def is_recognized_position(token: str) -> bool:
    """Check whether every segment of a position token is understood."""
    parts = token.strip().lower().split("-")
    if len(parts) > 2:
        return False
    if parts[0] and parts[0] not in VERTICAL_POSITIONS:
        return False
    return len(parts) == 1 or parts[1] in HORIZONTAL_POSITIONS


def format_page_number_text(template: str, current: int, total: int) -> str:
    """
    Fill a page-number template.

    Placeholders:
      - {current}: Current page number (1-indexed)
      - {total}: Total page count of the document
      - {page}: Same as {current}
    """
    return (
        template.replace("{current}", str(current))
        .replace("{total}", str(total))
        .replace("{page}", str(current))
    )


def compute_anchor(
    page_width: float,
    page_height: float,
    position: PageNumberPosition,
    left: float = 0.0,
    bottom: float = 0.0,
) -> Anchor:
    """
    Calculate where page-number text is anchored on a page.

    Args:
        page_width: Page width in points
        page_height: Page height in points
        position: Parsed position
        left: X of the page box's lower-left corner
        bottom: Y of the page box's lower-left corner

    Returns:
        Anchor with coordinates and text alignment
    """
    right = left + page_width
    top = bottom + page_height

    y = top - TOP_OFFSET if position.is_top else bottom + BOTTOM_OFFSET

    if position.is_left:
        return Anchor(left + SIDE_OFFSET, y, TextAlignment.LEFT)
    if position.is_right:
        return Anchor(right - SIDE_OFFSET, y, TextAlignment.RIGHT)
    return Anchor((left + right) / 2, y, TextAlignment.CENTER)
