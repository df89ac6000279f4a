"""Settings and input-file validation for pdfops.

Catches problems at the boundary, before any document is opened: bad config
values, missing or oversized files, and files that are not PDFs or images.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from reportlab.pdfbase.pdfmetrics import standardFonts

from pdfops.constants import IMAGE_SUFFIXES, MAX_FILE_SIZE, PDF_SIGNATURE
from pdfops.document import parse_color
from pdfops.exceptions import ConfigError, ValidationError
from pdfops.layout import is_recognized_position

if TYPE_CHECKING:
    from pdfops.config import Settings


@dataclass
class ValidationResult:
    """Result of settings validation.

    Attributes:
        valid: True if no errors were found
        errors: List of error messages (fatal issues)
        warnings: List of warning messages (non-fatal issues)
    """

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark result as invalid."""
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (does not affect validity)."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another validation result into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.valid:
            self.valid = False


class SettingsValidator:
    """Semantic validation of loaded settings.

    Structural problems (wrong types, unparseable sizes) are already rejected
    by the loader; this checks values that parse but would misbehave.

    Example:
        result = SettingsValidator().validate(settings)
        if not result.valid:
            for error in result.errors:
                print(f"Error: {error}")
    """

    def validate(self, settings: "Settings") -> ValidationResult:
        result = ValidationResult()
        result.merge(self._validate_page_numbers(settings))
        result.merge(self._validate_output(settings))
        return result

    def validate_or_raise(self, settings: "Settings") -> None:
        """Validate settings and raise ConfigError if invalid."""
        result = self.validate(settings)
        if not result.valid:
            error_text = "; ".join(result.errors)
            raise ConfigError(f"Configuration validation failed: {error_text}")

    def _validate_page_numbers(self, settings: "Settings") -> ValidationResult:
        result = ValidationResult()
        style = settings.page_numbers

        if style.font_name not in standardFonts:
            result.add_error(
                f"page_numbers.font_name: unknown font '{style.font_name}'. "
                f"Standard fonts: {', '.join(standardFonts)}"
            )

        try:
            parse_color(style.font_color)
        except ValueError as e:
            result.add_error(f"page_numbers.font_color: {e}")

        # Unknown tokens silently fall back at runtime, so surface them here
        if not is_recognized_position(style.position):
            result.add_warning(
                f"page_numbers.position '{style.position}' is not recognized "
                f"and will be treated as bottom-center"
            )

        placeholders = ("{current}", "{total}", "{page}")
        if not any(p in style.format for p in placeholders):
            result.add_warning(
                f"page_numbers.format '{style.format}' has no placeholders; "
                f"every page will show the same text"
            )

        return result

    def _validate_output(self, settings: "Settings") -> ValidationResult:
        result = ValidationResult()
        output_dir = settings.output.output_dir
        if output_dir.exists() and not output_dir.is_dir():
            result.add_error(
                f"output.output_dir exists but is not a directory: {output_dir}"
            )
        return result


def validate_settings(settings: "Settings") -> ValidationResult:
    """Convenience wrapper around SettingsValidator."""
    return SettingsValidator().validate(settings)


def _read_checked(path: Path, max_file_size: int) -> bytes:
    if not path.is_file():
        raise ValidationError(f"File not found: {path}", context={"file": path.name})

    size = path.stat().st_size
    if size == 0:
        raise ValidationError("File cannot be empty", context={"file": path.name})
    if size > max_file_size:
        raise ValidationError(
            f"File size ({size} bytes) exceeds maximum allowed size ({max_file_size} bytes)",
            context={"file": path.name},
        )
    return path.read_bytes()


def validate_pdf_file(path: Path, max_file_size: int = MAX_FILE_SIZE) -> bytes:
    """
    Check a PDF input file and return its bytes.

    Raises:
        ValidationError: If the file is missing, empty, too large, or does not
            start with the PDF signature
    """
    data = _read_checked(path, max_file_size)
    if not data.startswith(PDF_SIGNATURE):
        raise ValidationError(
            "File does not appear to be a valid PDF (invalid file signature)",
            context={"file": path.name},
        )
    return data


def validate_image_file(path: Path, max_file_size: int = MAX_FILE_SIZE) -> bytes:
    """
    Check an image input file and return its bytes.

    Raises:
        ValidationError: If the file is missing, empty, too large, or has an
            unsupported suffix
    """
    if path.suffix.lower() not in IMAGE_SUFFIXES:
        raise ValidationError(
            f"Only image files ({', '.join(IMAGE_SUFFIXES)}) are allowed. Received: {path.suffix or 'no suffix'}",
            context={"file": path.name},
        )
    return _read_checked(path, max_file_size)
