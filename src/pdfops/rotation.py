"""Rotation angle validation and normalization."""

from pdfops.constants import FULL_TURN, RIGHT_ANGLE
from pdfops.exceptions import InvalidRotationError


def validate_rotation(angle: int | None) -> None:
    """Raise InvalidRotationError unless angle is a multiple of 90 degrees."""
    if angle is None:
        raise InvalidRotationError("Rotation angle is required")
    if isinstance(angle, bool) or not isinstance(angle, int):
        raise InvalidRotationError(
            f"Rotation angle must be an integer, got {angle!r}",
            context={"rotation": angle},
        )
    if angle % RIGHT_ANGLE != 0:
        raise InvalidRotationError(
            "Rotation must be a multiple of 90 degrees",
            context={"rotation": angle},
        )


def normalize_rotation(angle: int) -> int:
    """Reduce an angle to [0, 360), e.g. -90 -> 270 and 450 -> 90."""
    return ((angle % FULL_TURN) + FULL_TURN) % FULL_TURN


def compose_rotation(current: int, delta: int) -> int:
    """Add a normalized delta to a page's existing rotation."""
    return (current + delta) % FULL_TURN
