"""Page-number validation and index arithmetic for pdfops.

User-facing page numbers are 1-based; the document model indexes pages from 0.
"""

import re
from collections.abc import Iterable, Iterator, Sequence

from pdfops.exceptions import (
    InvalidPageNumberError,
    InvalidParameterError,
    InvalidRangeError,
    PageOutOfBoundsError,
)


def validate_page_in_range(page: int | None, page_count: int) -> None:
    """Raise InvalidPageNumberError unless 1 <= page <= page_count."""
    if page is None or page < 1:
        raise InvalidPageNumberError(
            "Page numbers must be at least 1", context={"page": page}
        )
    if page > page_count:
        raise InvalidPageNumberError(
            f"Page number {page} exceeds document page count ({page_count})",
            context={"page": page, "page_count": page_count},
        )


def validate_page_set(pages: Iterable[int | None], page_count: int) -> None:
    """
    Validate every page of a set before anything is mutated.

    The first offending page (in input order) is reported.
    """
    for page in pages:
        validate_page_in_range(page, page_count)


def validate_page_range(start: int | None, end: int | None, page_count: int) -> None:
    """
    Validate an inclusive 1-based range against a document.

    Raises:
        InvalidParameterError: If either bound is missing
        InvalidPageNumberError: If either bound is below 1
        InvalidRangeError: If start is after end
        PageOutOfBoundsError: If end is beyond the last page
    """
    check_range_bounds(start, end)
    if end > page_count:
        raise PageOutOfBoundsError(
            f"endPage ({end}) exceeds document page count ({page_count})",
            context={"end_page": end, "page_count": page_count},
        )


def check_range_bounds(start: int | None, end: int | None) -> None:
    """Validate the parts of a range that do not depend on the document."""
    if start is None or end is None:
        raise InvalidParameterError("startPage and endPage are required")
    if start < 1 or end < 1:
        raise InvalidPageNumberError(
            "Page numbers must be at least 1",
            context={"start_page": start, "end_page": end},
        )
    if start > end:
        raise InvalidRangeError(
            "startPage must be less than or equal to endPage",
            context={"start_page": start, "end_page": end},
        )


def compute_shifted_removal_index(original_page: int, removals_so_far: int) -> int:
    """
    Return the current 1-based position of a page after earlier removals.

    Removing a page renumbers everything after it, so each prior removal of a
    lower page shifts the target down by one.
    """
    return original_page - removals_so_far


def removal_sequence(pages: Iterable[int]) -> Iterator[int]:
    """
    Yield the 0-based index to delete for each page, in ascending page order.

    Repeated page numbers are removed once.
    """
    removed = 0
    for page in sorted(set(pages)):
        yield compute_shifted_removal_index(page, removed) - 1
        removed += 1


def unique_pages(pages: Sequence[int]) -> list[int]:
    """Drop repeated page numbers, keeping first-seen order."""
    return list(dict.fromkeys(pages))


def parse_page_list(value: str) -> list[int]:
    """
    Parse a textual page list into 1-based page numbers.

    Supports comma-separated numbers and inclusive ranges:
    "2" -> [2], "1,3" -> [1, 3], "1,3,5-7" -> [1, 3, 5, 6, 7]

    Order is preserved; bounds against a document are checked later.

    Raises:
        InvalidParameterError: If the page list is malformed
    """
    if value is None or not value.strip():
        raise InvalidParameterError("Page list cannot be empty")

    pages: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            raise InvalidParameterError(f"Empty entry in page list: '{value}'")

        match = re.match(r"^(\d+)\s*-\s*(\d+)$", part)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                raise InvalidParameterError(
                    f"Start page {start} is after end page {end} in '{value}'"
                )
            pages.extend(range(start, end + 1))
        elif part.isdigit():
            pages.append(int(part))
        else:
            raise InvalidParameterError(
                f"Invalid page list: '{value}'. "
                f"Use page numbers and ranges like '1,3,5-7'"
            )
    return pages
