"""Custom exceptions for DICOM metadata projection.

This module defines the exception hierarchy for the projector,
providing detailed error information and categorization.
"""

from typing import Any

UNDEFINED_TEXT = "undefined"


class ProjectionError(Exception):
    """Base exception for projection operations.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for categorization
        context: Additional context information

    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class StructuralError(ProjectionError):
    """Raised when the metadata tree does not have the expected shape."""

    pass


class RecursionDepthError(StructuralError):
    """Raised when sequence nesting exceeds the configured maximum depth."""

    pass


class TagFormatError(ProjectionError, ValueError):
    """Raised when a tag identifier cannot be parsed."""

    pass


class DecodingError(ProjectionError):
    """Raised when a DICOM file cannot be decoded into a metadata tree."""

    pass


class SerializationError(ProjectionError):
    """Raised when an assembled document cannot be rendered as text.

    Attributes:
        placeholder: Sentinel text handed back instead of a partial document

    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)
        self.placeholder = UNDEFINED_TEXT
