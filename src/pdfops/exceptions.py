"""Unified exception hierarchy for pdfops.

All pdfops exceptions inherit from PdfOpsError, enabling:
- Catching all pdfops errors with `except PdfOpsError`
- Error context preservation via the `context` attribute
- Causality chains via `raise ... from e` patterns
"""

from typing import Any


class PdfOpsError(Exception):
    """Base exception for all pdfops errors.

    Args:
        message: Human-readable error description
        context: Optional dict of contextual information (page, operation, etc.)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} [{details}]"
        return base


class ConfigError(PdfOpsError):
    """Raised when configuration is invalid or cannot be loaded."""


class ValidationError(PdfOpsError):
    """Raised when operation parameters are missing or invalid."""


class InvalidPageNumberError(ValidationError):
    """Raised when a page number is below 1 or beyond the page count."""


class InvalidRangeError(ValidationError):
    """Raised when a page range starts after it ends."""


class PageOutOfBoundsError(ValidationError):
    """Raised when a page range extends past the end of the document."""


class EmptyPageSetError(ValidationError):
    """Raised when an operation needs at least one page number and got none."""


class InsufficientInputsError(ValidationError):
    """Raised when an operation receives too few input documents."""


class InvalidParameterError(ValidationError):
    """Raised when a scalar parameter is missing or out of its domain."""


class InvalidRotationError(ValidationError):
    """Raised when a rotation angle is missing or not a multiple of 90."""


class NullMetadataPatchError(ValidationError):
    """Raised when a metadata update is requested without a patch."""


class DocumentLoadError(PdfOpsError):
    """Raised when input bytes cannot be loaded as a document."""


class DocumentProcessingError(PdfOpsError):
    """Raised when the document model fails during mutation or serialization."""
