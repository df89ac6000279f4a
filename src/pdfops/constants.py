"""Centralized constants for pdfops."""

# Page-number overlay placement, in document-space points
TOP_OFFSET = 30
BOTTOM_OFFSET = 20
SIDE_OFFSET = 50

VERTICAL_POSITIONS = ("top", "bottom")
HORIZONTAL_POSITIONS = ("left", "center", "right")

DEFAULT_VERTICAL = "bottom"
DEFAULT_HORIZONTAL = "center"
DEFAULT_POSITION = "bottom-center"
DEFAULT_PAGE_NUMBER_FORMAT = "Page {current} of {total}"
DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 10
DEFAULT_FONT_COLOR = "black"

# Rotation
RIGHT_ANGLE = 90
FULL_TURN = 360

# Two pages share dimensions when both sides differ by at most this much
DIMENSION_TOLERANCE = 0.1
DIMENSION_UNIT = "points"

# Image conversion: image width is page width minus this margin
IMAGE_HORIZONTAL_MARGIN = 100
IMAGE_TOP_MARGIN = 50
DEFAULT_IMAGE_PAGE_SIZE = "A4"
DEFAULT_IMAGE_BASENAME = "image"
IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff")

# Input validation
PDF_SIGNATURE = b"%PDF"
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100MB

# Suggested filename tags
TAG_MERGED = "merged"
TAG_SPLIT = "splitDocument"
TAG_EXTRACTED = "extractedPages"
TAG_REMOVED = "removedPages"
TAG_ROTATED = "rotated"
TAG_METADATA = "metadata_updated"
TAG_NUMBERED = "numbered"

# Metadata fields exposed by get-metadata, mapped to document info keys
METADATA_KEYS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "keywords": "/Keywords",
    "creator": "/Creator",
    "producer": "/Producer",
    "creation_date": "/CreationDate",
    "modification_date": "/ModDate",
}

# Unit conversion factors to PDF points (72 points per inch)
UNIT_TO_POINTS = {
    "pt": 1.0,
    "in": 72.0,
    "mm": 72.0 / 25.4,
    "cm": 72.0 / 2.54,
}
