"""
Исключения генерации UPC-A.

Иерархия:
    UPCAGenError (базовое)
    ├── InvalidChecksumError
    ├── InvalidLengthError
    ├── InvalidTargetError
    ├── BlobEncodingError
    └── InvalidOptionError (также ValueError)

Example:
    >>> from upca_renderer.barcodegen.errors import UPCAGenError
    >>> try:
    ...     normalize_input("012345678900", "validate")
    ... except UPCAGenError as e:
    ...     logger.error("UPC-A failed: %s", e)
"""

from __future__ import annotations

from typing import Any, Optional

__all__: list[str] = [
    "UPCAGenError",
    "InvalidChecksumError",
    "InvalidLengthError",
    "InvalidTargetError",
    "BlobEncodingError",
    "InvalidOptionError",
]


class UPCAGenError(Exception):
    """UPC-A generation/validation error."""


class InvalidChecksumError(UPCAGenError):
    """The supplied check digit disagrees with the computed one.

    Attributes:
        expected: Check digit computed from the first 11 digits.
        provided: Check digit found in the input.
    """

    def __init__(self, expected: int, provided: int) -> None:
        self.expected = expected
        self.provided = provided
        super().__init__(
            f"Invalid UPC-A checksum: expected {expected}, got {provided}"
        )


class InvalidLengthError(UPCAGenError):
    """Sanitized input has no digits or more than 12."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"UPC-A requires 11 or 12 digits (got {length})")


class InvalidTargetError(UPCAGenError):
    """Render target is not a drawable surface or SVG element."""

    def __init__(self, target: Any, expected: str) -> None:
        self.target = target
        super().__init__(f"Invalid {expected}: {type(target).__name__}")


class BlobEncodingError(UPCAGenError):
    """Pillow could not encode the rendered surface."""

    def __init__(self, message: str = "Failed to create blob", image_format: Optional[str] = None) -> None:
        self.image_format = image_format
        super().__init__(message if image_format is None else f"{message} ({image_format})")


class InvalidOptionError(UPCAGenError, ValueError):
    """Unknown render option name or out-of-range value."""
