"""Shared fixtures for pdfops tests."""

import io
import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml


def make_blank_pdf(sizes: list[tuple[float, float]]) -> bytes:
    """Build a PDF with one blank page per (width, height)."""
    from pypdf import PdfWriter

    writer = PdfWriter()
    for width, height in sizes:
        writer.add_blank_page(width=width, height=height)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def make_text_pdf(labels: list[str], pagesize: tuple[float, float] = (612, 792)) -> bytes:
    """Build a PDF whose pages each carry one line of text, for order checks."""
    from reportlab.pdfgen import canvas

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=pagesize)
    for label in labels:
        c.setFont("Helvetica", 14)
        c.drawString(72, 700, label)
        c.showPage()
    c.save()
    return buffer.getvalue()


def page_texts(data: bytes) -> list[str]:
    """Extract text from every page of a PDF."""
    from pypdf import PdfReader

    return [page.extract_text() for page in PdfReader(io.BytesIO(data)).pages]


def page_count(data: bytes) -> int:
    from pypdf import PdfReader

    return len(PdfReader(io.BytesIO(data)).pages)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    logger = logging.getLogger("pdfops")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


# === Helper Fixtures ===

@pytest.fixture
def blank_pdf_factory():
    return make_blank_pdf


@pytest.fixture
def text_pdf_factory():
    return make_text_pdf


@pytest.fixture
def read_texts():
    return page_texts


@pytest.fixture
def count_pages():
    return page_count


# === Path/Directory Fixtures ===

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


# === PDF Fixtures ===

@pytest.fixture
def single_page_pdf():
    """One blank Letter page."""
    return make_blank_pdf([(612, 792)])


@pytest.fixture
def two_page_pdf():
    """Two blank Letter pages."""
    return make_blank_pdf([(612, 792)] * 2)


@pytest.fixture
def multi_page_pdf():
    """Six blank Letter pages."""
    return make_blank_pdf([(612, 792)] * 6)


@pytest.fixture
def mixed_size_pdf():
    """A portrait Letter page followed by a landscape one."""
    return make_blank_pdf([(612, 792), (792, 612)])


@pytest.fixture
def labelled_pdf():
    """Five pages labelled 'Marker 1' .. 'Marker 5'."""
    return make_text_pdf([f"Marker {i}" for i in range(1, 6)])


@pytest.fixture
def png_bytes():
    """A 200x100 red PNG image."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), color="red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def temp_pdf(temp_dir, multi_page_pdf):
    """A six-page PDF written to disk."""
    pdf_path = temp_dir / "multi_page.pdf"
    pdf_path.write_bytes(multi_page_pdf)
    return pdf_path


@pytest.fixture
def temp_labelled_pdf(temp_dir, labelled_pdf):
    pdf_path = temp_dir / "labelled.pdf"
    pdf_path.write_bytes(labelled_pdf)
    return pdf_path


@pytest.fixture
def temp_png(temp_dir, png_bytes):
    image_path = temp_dir / "photo.png"
    image_path.write_bytes(png_bytes)
    return image_path


# === Mock pypdf PageObject Fixtures ===

@pytest.fixture
def mock_page():
    """Create a mock pypdf PageObject (portrait letter size)."""
    page = MagicMock()
    mediabox = MagicMock()
    mediabox.width = 612.0
    mediabox.height = 792.0
    mediabox.left = 0.0
    mediabox.bottom = 0.0
    mediabox.right = 612.0
    mediabox.top = 792.0
    page.mediabox = mediabox
    return page


# === Config Fixtures ===

@pytest.fixture
def minimal_config_dict():
    """Minimal valid configuration dictionary."""
    return {"version": 1}


@pytest.fixture
def full_config_dict(temp_dir):
    """Configuration dictionary with every section set."""
    return {
        "version": 1,
        "page_numbers": {
            "position": "top-right",
            "format": "{page}/{total}",
            "font_name": "Courier",
            "font_size": 12,
            "font_color": "#336699",
        },
        "images": {
            "page_size": "letter",
        },
        "input": {
            "max_file_size": 2048,
        },
        "output": {
            "output_dir": str(temp_dir / "out"),
        },
    }


@pytest.fixture
def temp_config_file(temp_dir, minimal_config_dict):
    """Create a temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(minimal_config_dict, f)
    return config_path


@pytest.fixture
def full_config_file(temp_dir, full_config_dict):
    """Create a temporary full config file."""
    config_path = temp_dir / "full_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(full_config_dict, f)
    return config_path
