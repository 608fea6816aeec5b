"""Custom exceptions for core logic.

Validation outcomes are never raised; these cover authoring and configuration
mistakes only.
"""

from __future__ import annotations

from pathlib import Path


class UnknownFieldTypeError(ValueError):
    """Raised when a field type name or expression is not supported."""

    def __init__(self, message: str, *, expression: str | None = None) -> None:
        super().__init__(message)
        self.expression = expression


class FieldTypeConfigError(ValueError):
    """Raised when a parameterized field type receives illegal parameters."""


class FormDefinitionError(ValueError):
    """Raised when a form definition cannot be loaded or validated."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
