"""PDF transformation operations.

Each operation takes document bytes plus parameters and returns in-memory
results. Parameters are validated before any page is touched, every opened
document is closed on every exit path, and failures inside the document model
surface as DocumentProcessingError with the original cause chained.
"""

import io
from collections.abc import Callable, Iterator, Sequence
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from pdfops.config import PageNumberStyle
from pdfops.constants import (
    DEFAULT_IMAGE_BASENAME,
    DEFAULT_IMAGE_PAGE_SIZE,
    DEFAULT_PAGE_NUMBER_FORMAT,
    DEFAULT_POSITION,
    DIMENSION_TOLERANCE,
    DIMENSION_UNIT,
    IMAGE_HORIZONTAL_MARGIN,
    IMAGE_TOP_MARGIN,
    METADATA_KEYS,
    TAG_EXTRACTED,
    TAG_MERGED,
    TAG_METADATA,
    TAG_NUMBERED,
    TAG_REMOVED,
    TAG_ROTATED,
    TAG_SPLIT,
)
from pdfops.document import Document
from pdfops.exceptions import (
    DocumentLoadError,
    DocumentProcessingError,
    EmptyPageSetError,
    InsufficientInputsError,
    InvalidParameterError,
    InvalidRangeError,
    NullMetadataPatchError,
    PdfOpsError,
)
from pdfops.layout import compute_anchor, format_page_number_text, parse_position
from pdfops.logging_config import get_logger
from pdfops.pages import (
    check_range_bounds,
    removal_sequence,
    unique_pages,
    validate_page_range,
    validate_page_set,
)
from pdfops.results import (
    OperationResult,
    build_batch,
    build_result,
    image_basename,
    suggested_filename,
)
from pdfops.rotation import compose_rotation, normalize_rotation, validate_rotation
from pdfops.units import parse_page_size

logger = get_logger(__name__)

SinkFactory = Callable[[], BinaryIO]


@dataclass
class MetadataPatch:
    """Partial metadata update: only fields that are not None are written."""
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None
    creator: str | None = None

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (info key, value) for each field that is set."""
        for name in ("title", "author", "subject", "keywords", "creator"):
            value = getattr(self, name)
            if value is not None:
                yield METADATA_KEYS[name], value


@dataclass(frozen=True)
class PageDimensions:
    width: float
    height: float
    unit: str = DIMENSION_UNIT


@dataclass(frozen=True)
class DocumentInfo:
    """Structural summary of a document."""
    page_count: int
    file_size: int
    pdf_version: str
    first_page: PageDimensions | None
    all_pages_same_dimension: bool


@dataclass(frozen=True)
class DocumentMetadata:
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None
    creator: str | None = None
    producer: str | None = None
    creation_date: str | None = None
    modification_date: str | None = None


@dataclass(frozen=True)
class ImageSource:
    """An image to convert: original filename (may be None) and raw bytes."""
    name: str | None
    content: bytes


@contextmanager
def _processing(action: str) -> Iterator[None]:
    """Wrap foreign failures from the document model as DocumentProcessingError."""
    try:
        yield
    except PdfOpsError:
        raise
    except Exception as e:
        logger.error("Failed to %s: %s", action, e)
        raise DocumentProcessingError(f"Failed to {action}: {e}", context={"action": action}) from e


def merge(documents: Sequence[bytes]) -> OperationResult:
    """
    Append the pages of documents 2..N onto document 1, in input order.

    Args:
        documents: Raw PDF bytes, at least two

    Returns:
        The merged document
    """
    if documents is None or len(documents) < 2:
        count = 0 if documents is None else len(documents)
        logger.error("Merge needs at least 2 documents, got %d", count)
        raise InsufficientInputsError(
            "Merge needs at least 2 documents", context={"documents": count}
        )

    with ExitStack() as stack, _processing("merge PDF files"):
        target = stack.enter_context(Document.load(documents[0]))
        for data in documents[1:]:
            source = stack.enter_context(Document.load(data))
            target.append_pages(source)

        page_count = target.page_count
        result = build_result(target.serialize(), TAG_MERGED, page_count)

    logger.info(
        "Merged %d files into %s (%d pages, %d bytes)",
        len(documents), result.filename, result.page_count, result.size,
    )
    return result


def split(
    data: bytes,
    max_page_count: int | None,
    sink_factory: SinkFactory = io.BytesIO,
) -> list[OperationResult]:
    """
    Partition a document into consecutive chunks of at most max_page_count pages.

    Args:
        data: Raw PDF bytes
        max_page_count: Maximum pages per output (>= 1)
        sink_factory: Called once per chunk for a fresh writable buffer

    Returns:
        One result per chunk, in page order
    """
    if max_page_count is None or max_page_count < 1:
        raise InvalidParameterError(
            "maxPageCount must be at least 1", context={"max_page_count": max_page_count}
        )

    parts: list[tuple[bytes, int]] = []
    with Document.load(data) as source, _processing("split PDF file"):
        total = source.page_count
        for start in range(0, total, max_page_count):
            stop = min(start + max_page_count, total)
            with Document.new() as chunk:
                chunk.append_pages(source, start, stop)
                parts.append((chunk.serialize(sink_factory()), chunk.page_count))

    results = build_batch(parts, TAG_SPLIT)
    logger.info("Split PDF into %d parts", len(results))
    return results


def extract(data: bytes, start_page: int | None, end_page: int | None) -> OperationResult:
    """
    Produce a document holding pages [start_page, end_page], inclusive, 1-based.
    """
    check_range_bounds(start_page, end_page)

    with Document.load(data) as source, _processing("extract pages from PDF"):
        validate_page_range(start_page, end_page, source.page_count)
        with Document.new() as extracted:
            extracted.append_pages(source, start_page - 1, end_page)
            result = build_result(extracted.serialize(), TAG_EXTRACTED, extracted.page_count)

    logger.info(
        "Extracted pages %d-%d (%d pages, %d bytes)",
        start_page, end_page, result.page_count, result.size,
    )
    return result


def remove_pages(data: bytes, pages: Sequence[int] | None) -> OperationResult:
    """
    Remove the named 1-based pages; remaining pages are renumbered contiguously.

    All pages are validated before any is removed.
    """
    if not pages:
        raise EmptyPageSetError("At least one page number must be specified for removal")

    with Document.load(data) as doc, _processing("remove pages from PDF"):
        validate_page_set(pages, doc.page_count)

        removed = 0
        for index in removal_sequence(pages):
            doc.remove_page(index)
            removed += 1

        result = build_result(doc.serialize(), TAG_REMOVED, doc.page_count)

    logger.info(
        "Removed %d pages (%d pages remaining, %d bytes)",
        removed, result.page_count, result.size,
    )
    return result


def rotate(data: bytes, rotation: int | None, pages: Sequence[int] | None = None) -> OperationResult:
    """
    Rotate pages by a multiple of 90 degrees, on top of their current rotation.

    Args:
        data: Raw PDF bytes
        rotation: Degrees, any multiple of 90 (negative allowed)
        pages: 1-based pages to rotate; all pages when None or empty
    """
    validate_rotation(rotation)
    delta = normalize_rotation(rotation)

    with Document.load(data) as doc, _processing("rotate PDF"):
        if pages:
            validate_page_set(pages, doc.page_count)
            targets = unique_pages(pages)
            logger.debug("Rotating %d specific pages by %d degrees", len(targets), rotation)
        else:
            targets = list(range(1, doc.page_count + 1))
            logger.debug("Rotating all %d pages by %d degrees", len(targets), rotation)

        for page in targets:
            index = page - 1
            doc.set_rotation(index, compose_rotation(doc.get_rotation(index), delta))

        result = build_result(doc.serialize(), TAG_ROTATED, doc.page_count)

    logger.info("Rotated PDF (%d pages, %d bytes)", result.page_count, result.size)
    return result


def update_metadata(data: bytes, patch: MetadataPatch | None) -> OperationResult:
    """Apply a partial metadata update; fields left as None keep their values."""
    if patch is None:
        raise NullMetadataPatchError("Metadata request cannot be null")

    with Document.load(data) as doc, _processing("update PDF metadata"):
        for key, value in patch.items():
            doc.set_metadata_field(key, value)
        result = build_result(doc.serialize(), TAG_METADATA, doc.page_count)

    logger.info("Updated PDF metadata (%d pages, %d bytes)", result.page_count, result.size)
    return result


def resolve_page_number_range(
    start_page: int | None, end_page: int | None, page_count: int
) -> tuple[int, int]:
    """
    Fill in the page range for page numbering.

    A missing or sub-1 start becomes 1; a missing end, or one past the last
    page, becomes the page count.

    Raises:
        InvalidRangeError: If the resolved start is after the resolved end
    """
    start = start_page if start_page is not None and start_page >= 1 else 1
    end = end_page if end_page is not None and end_page <= page_count else page_count
    if start > end:
        raise InvalidRangeError(
            "startPage must be less than or equal to endPage",
            context={"start_page": start, "end_page": end},
        )
    return start, end


def add_page_numbers(
    data: bytes,
    position: str | None = None,
    fmt: str | None = None,
    start_page: int | None = None,
    end_page: int | None = None,
    style: PageNumberStyle | None = None,
) -> OperationResult:
    """
    Stamp page numbers onto pages [start_page, end_page].

    Args:
        data: Raw PDF bytes
        position: Token like "bottom-center" or "top-right"
        fmt: Template using {current}, {total} and {page}
        start_page: First page to number (1-based)
        end_page: Last page to number (1-based)
        style: Font settings; also supplies position/format defaults

    Returns:
        The numbered document
    """
    style = style or PageNumberStyle()
    position = position if position and position.strip() else (style.position or DEFAULT_POSITION)
    fmt = fmt if fmt and fmt.strip() else (style.format or DEFAULT_PAGE_NUMBER_FORMAT)
    parsed = parse_position(position)

    with Document.load(data) as doc, _processing("add page numbers"):
        total = doc.page_count
        start, end = resolve_page_number_range(start_page, end_page, total)

        for page in range(start, end + 1):
            index = page - 1
            left, bottom, right, top = doc.page_box(index)
            anchor = compute_anchor(right - left, top - bottom, parsed, left, bottom)
            doc.draw_text(
                index,
                format_page_number_text(fmt, page, total),
                anchor.x,
                anchor.y,
                anchor.alignment,
                font_size=style.font_size,
                font_name=style.font_name,
                font_color=style.font_color,
            )

        result = build_result(doc.serialize(), TAG_NUMBERED, doc.page_count)

    logger.info(
        "Added page numbers to %d pages (%d bytes)", end - start + 1, result.size
    )
    return result


def get_info(data: bytes) -> DocumentInfo:
    """Report page count, byte size, version and page dimensions."""
    with Document.load(data) as doc, _processing("get PDF info"):
        page_count = doc.page_count
        first_page = None
        same_dimensions = True

        if page_count:
            width, height = doc.page_size(0)
            first_page = PageDimensions(width, height)
            for index in range(1, page_count):
                other_width, other_height = doc.page_size(index)
                if (
                    abs(other_width - width) > DIMENSION_TOLERANCE
                    or abs(other_height - height) > DIMENSION_TOLERANCE
                ):
                    same_dimensions = False
                    break

        info = DocumentInfo(
            page_count=page_count,
            file_size=len(data),
            pdf_version=doc.pdf_version,
            first_page=first_page,
            all_pages_same_dimension=same_dimensions,
        )

    logger.info(
        "Retrieved PDF info: %d pages, %d bytes, version %s",
        info.page_count, info.file_size, info.pdf_version,
    )
    return info


def get_metadata(data: bytes) -> DocumentMetadata:
    """Report every document info field; absent fields are None."""
    with Document.load(data) as doc, _processing("get PDF metadata"):
        metadata = DocumentMetadata(
            **{name: doc.get_metadata_field(key) for name, key in METADATA_KEYS.items()}
        )

    logger.info("Retrieved PDF metadata")
    return metadata


def _render_image_page(image: Image.Image, page_width: float, page_height: float) -> bytes:
    """Draw an image on a fresh page, scaled to the page width minus margins."""
    draw_width = page_width - IMAGE_HORIZONTAL_MARGIN
    draw_height = draw_width * image.height / image.width
    x = (page_width - draw_width) / 2
    y = page_height - IMAGE_TOP_MARGIN - draw_height

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(page_width, page_height))
    c.drawImage(ImageReader(image), x, y, width=draw_width, height=draw_height)
    c.showPage()
    c.save()
    return buffer.getvalue()


def convert_images(
    images: Sequence[ImageSource],
    page_size: str | tuple = DEFAULT_IMAGE_PAGE_SIZE,
) -> list[OperationResult]:
    """
    Convert each image into its own single-page PDF.

    Args:
        images: Images in output order
        page_size: Page size name or (width, height) with units

    Returns:
        One result per image, named after the image file
    """
    if not images:
        raise InvalidParameterError("At least one image file must be provided")

    page_width, page_height = parse_page_size(page_size)
    results = []
    for source in images:
        try:
            image = Image.open(io.BytesIO(source.content))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise DocumentLoadError(
                f"Could not load image: {e}", context={"image": source.name}
            ) from e

        with _processing("convert image to PDF"):
            content = _render_image_page(image, page_width, page_height)
            # Round-trip through the document model to confirm a readable page
            with Document.load(content) as doc:
                page_count = doc.page_count

        base = image_basename(source.name, DEFAULT_IMAGE_BASENAME)
        result = OperationResult(
            content=content, filename=suggested_filename(base), page_count=page_count
        )
        logger.info("Converted image '%s' to PDF (%d bytes)", source.name, result.size)
        results.append(result)

    logger.info("Converted %d images to PDF", len(results))
    return results
