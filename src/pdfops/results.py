"""Output envelopes for pdfops operations."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class OperationResult:
    """A single output document held in memory.

    Attributes:
        content: Serialized PDF bytes
        filename: Suggested filename (operation tag + timestamp)
        page_count: Number of pages in the output document
        size: Byte length of content
    """

    content: bytes = field(repr=False)
    filename: str
    page_count: int
    size: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "size", len(self.content))

    def write_to(self, output_dir: Path) -> Path:
        """Persist the content under its suggested filename."""
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / self.filename
        with open(output_path, "wb") as f:
            f.write(self.content)
        return output_path


def timestamp(now: datetime | None = None) -> str:
    """Format a filename timestamp with millisecond precision (YYYYmmddHHMMSSmmm)."""
    now = now or datetime.now()
    return now.strftime("%Y%m%d%H%M%S%f")[:-3]


def suggested_filename(tag: str, stamp: str | None = None, index: int | None = None) -> str:
    """
    Build an output filename such as "merged_20240101120000123.pdf".

    Args:
        tag: Operation tag or image base name
        stamp: Timestamp to use (defaults to now)
        index: Optional 1-based part number for batch outputs

    Returns:
        Filename ending in .pdf
    """
    stamp = stamp or timestamp()
    if index is None:
        return f"{tag}_{stamp}.pdf"
    return f"{tag}_{stamp}_{index}.pdf"


def image_basename(filename: str | None, fallback: str) -> str:
    """Return the part of a filename before its last '.', or fallback."""
    if filename and "." in filename:
        base = filename[: filename.rfind(".")]
        if base:
            return base
    return fallback


def build_result(content: bytes, tag: str, page_count: int) -> OperationResult:
    """Wrap a single output document."""
    return OperationResult(content=content, filename=suggested_filename(tag), page_count=page_count)


def build_batch(parts: list[tuple[bytes, int]], tag: str) -> list[OperationResult]:
    """
    Wrap an ordered batch of output documents sharing one timestamp.

    Args:
        parts: (content, page_count) for each output, in output order
        tag: Operation tag

    Returns:
        One result per part, numbered from 1 in input order
    """
    stamp = timestamp()
    return [
        OperationResult(
            content=content,
            filename=suggested_filename(tag, stamp, index),
            page_count=page_count,
        )
        for index, (content, page_count) in enumerate(parts, start=1)
    ]
