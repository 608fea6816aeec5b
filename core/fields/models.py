"""Result types shared by field type implementations."""

from __future__ import annotations

from dataclasses import dataclass

INTERNAL_ERROR_MESSAGE = "Internal validation error"


@dataclass(frozen=True)
class Validation:
    """Outcome of a live or result validation.

    ``ok`` is the sole authority on validity; ``error`` is a user-facing
    message that is only meaningful when ``ok`` is false.
    """

    ok: bool
    error: str = ""

    @classmethod
    def valid(cls) -> Validation:
        return _VALID

    @classmethod
    def invalid(cls, error: str) -> Validation:
        return cls(ok=False, error=error)

    @classmethod
    def check(cls, condition: bool, error: str) -> Validation:
        """Return valid when ``condition`` holds, otherwise invalid with ``error``."""

        return _VALID if condition else cls(ok=False, error=error)

    def __bool__(self) -> bool:
        return self.ok


_VALID = Validation(ok=True)


@dataclass(frozen=True)
class FinalFormat:
    """Normalized text and the template that matches it after focus loss."""

    text: str
    template: str
