"""Validation error taxonomy."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a dataset does not satisfy the GeoMap data contract."""


class MissingColumnError(ValidationError):
    """A required or explicitly named role column is absent."""


class TypeMismatchError(ValidationError):
    """A role column fails its type check."""


class CoordinateParseError(ValidationError):
    """A coordinate-pair value does not hold two numbers."""
