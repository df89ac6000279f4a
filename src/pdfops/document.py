"""Document handle wrapping the pypdf object model.

Every operation talks to PDFs through :class:`Document`, which owns one
in-memory ``PdfWriter`` cloned from the caller's bytes. Page indexes here are
0-based; translating from user-facing page numbers is the caller's job.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from pdfops.constants import DEFAULT_FONT_COLOR, DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE
from pdfops.exceptions import DocumentLoadError, DocumentProcessingError
from pdfops.layout import TextAlignment
from pdfops.logging_config import get_logger

logger = get_logger(__name__)


def parse_color(color_str: str) -> colors.Color:
    """Parse a color string into a reportlab color object.

    Supports color names (e.g., "black", "red") and hex codes (e.g., "#FF0000").
    """
    if color_str.startswith("#"):
        hex_str = color_str[1:]
        if len(hex_str) == 6:
            try:
                r = int(hex_str[0:2], 16) / 255
                g = int(hex_str[2:4], 16) / 255
                b = int(hex_str[4:6], 16) / 255
            except ValueError:
                raise ValueError(f"Invalid hex color: {color_str}") from None
            return colors.Color(r, g, b)
        raise ValueError(f"Invalid hex color: {color_str}")

    color = getattr(colors, color_str, None)
    if isinstance(color, colors.Color):
        return color

    raise ValueError(
        f"Unknown color: {color_str}. Use a color name (e.g., 'black', 'red') "
        f"or hex code (e.g., '#FF0000')"
    )


def create_text_overlay(
    text: str,
    width: float,
    height: float,
    x: float,
    y: float,
    alignment: TextAlignment,
    font_name: str,
    font_size: int,
    font_color: str = DEFAULT_FONT_COLOR,
) -> bytes:
    """
    Create a one-page PDF holding a single line of text.

    Args:
        text: Text to render
        width: Overlay page width in points
        height: Overlay page height in points
        x: Anchor X in points
        y: Baseline Y in points
        alignment: How the text sits relative to x
        font_name: Font name (PDF standard fonts)
        font_size: Font size in points
        font_color: Font color (name or hex code)

    Returns:
        PDF bytes containing the text overlay
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    c.setFont(font_name, font_size)
    c.setFillColor(parse_color(font_color))

    if alignment == TextAlignment.LEFT:
        c.drawString(x, y, text)
    elif alignment == TextAlignment.RIGHT:
        c.drawRightString(x, y, text)
    else:
        c.drawCentredString(x, y, text)

    c.save()
    return buffer.getvalue()


class Document:
    """A loaded, mutable PDF document.

    Use as a context manager so the handle is released on every exit path:

        with Document.load(data) as doc:
            doc.set_rotation(0, 90)
            output = doc.serialize()
    """

    def __init__(self, writer: PdfWriter, pdf_version: str = "1.3"):
        self._writer: PdfWriter | None = writer
        self._pdf_version = pdf_version

    @classmethod
    def load(cls, data: bytes) -> "Document":
        """Open a document from raw bytes.

        Raises:
            DocumentLoadError: If the bytes are not a loadable PDF
        """
        if not data:
            raise DocumentLoadError("Document is empty")

        try:
            reader = PdfReader(io.BytesIO(data))
            writer = PdfWriter(clone_from=reader)
            version = reader.pdf_header.removeprefix("%PDF-")
        except Exception as e:
            raise DocumentLoadError(f"Could not load PDF document: {e}") from e

        logger.debug("Loaded document: %d pages, version %s", len(writer.pages), version)
        return cls(writer, version)

    @classmethod
    def new(cls) -> "Document":
        """Create an empty document."""
        return cls(PdfWriter())

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._writer is None

    @property
    def writer(self) -> PdfWriter:
        if self._writer is None:
            raise DocumentProcessingError("Document is closed")
        return self._writer

    def close(self) -> None:
        """Release the underlying document. Safe to call more than once."""
        self._writer = None

    # --- structure -------------------------------------------------------

    @property
    def page_count(self) -> int:
        return len(self.writer.pages)

    @property
    def pdf_version(self) -> str:
        return self._pdf_version

    def page(self, index: int) -> PageObject:
        return self.writer.pages[index]

    def page_box(self, index: int) -> tuple[float, float, float, float]:
        """Return the page's media box as (left, bottom, right, top) in points."""
        mediabox = self.page(index).mediabox
        return (
            float(mediabox.left),
            float(mediabox.bottom),
            float(mediabox.right),
            float(mediabox.top),
        )

    def page_size(self, index: int) -> tuple[float, float]:
        """Get page width and height in points."""
        mediabox = self.page(index).mediabox
        return float(mediabox.width), float(mediabox.height)

    def get_rotation(self, index: int) -> int:
        return int(self.page(index).rotation)

    def set_rotation(self, index: int, degrees: int) -> None:
        self.page(index).rotation = degrees

    def append_pages(self, source: "Document", start: int = 0, stop: int | None = None) -> None:
        """Append source pages [start, stop) to the end of this document."""
        stop = source.page_count if stop is None else stop
        for index in range(start, stop):
            self.writer.add_page(source.page(index))

    def remove_page(self, index: int) -> None:
        del self.writer.pages[index]

    # --- overlays --------------------------------------------------------

    def draw_text(
        self,
        index: int,
        text: str,
        x: float,
        y: float,
        alignment: TextAlignment,
        font_size: int = DEFAULT_FONT_SIZE,
        font_name: str = DEFAULT_FONT_NAME,
        font_color: str = DEFAULT_FONT_COLOR,
    ) -> None:
        """Draw one line of text onto a page without touching its other content."""
        page = self.page(index)
        _, _, right, top = self.page_box(index)

        # Overlay shares the page's user space, so it must reach the box corner
        overlay_bytes = create_text_overlay(
            text,
            right,
            top,
            x,
            y,
            alignment,
            font_name,
            font_size,
            font_color,
        )
        overlay_page = PdfReader(io.BytesIO(overlay_bytes)).pages[0]
        page.merge_page(overlay_page)

    # --- metadata --------------------------------------------------------

    def get_metadata_field(self, key: str) -> str | None:
        """Read a document info entry such as "/Title"; None when absent."""
        info = self.writer.metadata
        if info is None or key not in info:
            return None
        value = info[key]
        return None if value is None else str(value)

    def set_metadata_field(self, key: str, value: str) -> None:
        self.writer.add_metadata({key: value})

    # --- output ----------------------------------------------------------

    def serialize(self, sink: BinaryIO | None = None) -> bytes:
        """Write the document out and return its bytes.

        Args:
            sink: Optional writable binary buffer to serialize into; a fresh
                BytesIO is used when omitted

        Returns:
            The serialized PDF bytes
        """
        buffer = sink if sink is not None else io.BytesIO()
        self.writer.write(buffer)
        if isinstance(buffer, io.BytesIO):
            return buffer.getvalue()
        buffer.seek(0)
        return buffer.read()
