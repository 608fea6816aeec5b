"""Age field with prefix range overlap checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.fields.base import BaseFieldType
from core.fields.helpers import digits_only
from core.fields.models import INTERNAL_ERROR_MESSAGE, Validation
from core.utils.errors import FieldTypeConfigError

logger = logging.getLogger("maskfield.fields")


def completion_ranges(prefix: str, max_digits: int) -> list[tuple[int, int]]:
    """Return the inclusive value ranges reachable by extending ``prefix``.

    ``"2"`` with three digits allowed reaches 2, 20-29 and 200-299.
    """

    value = int(prefix)
    ranges: list[tuple[int, int]] = []
    for total in range(len(prefix), max_digits + 1):
        scale = 10 ** (total - len(prefix))
        ranges.append((value * scale, value * scale + scale - 1))
    return ranges


@dataclass(frozen=True, eq=True)
class AgeField(BaseFieldType):
    """Two or three digit age within ``[minimum, maximum]``.

    The mask has three digits once ``maximum`` reaches 100.
    """

    minimum: int
    maximum: int

    kind = "age"

    def __post_init__(self) -> None:
        if self.minimum < 0 or self.maximum > 999 or self.minimum > self.maximum:
            raise FieldTypeConfigError(
                f"age range must satisfy 0 <= min <= max <= 999, got {self.minimum}-{self.maximum}"
            )

    @property
    def digit_count(self) -> int:
        return 3 if self.maximum >= 100 else 2

    @property
    def description(self) -> str:
        return f"Age({self.minimum}-{self.maximum})"

    @property
    def template(self) -> str:
        return "0" * self.digit_count

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.digit_count)

    def validate_live(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        if not text.isdigit():
            logger.error("age digits failed to parse: %r", text)
            return Validation.invalid(INTERNAL_ERROR_MESSAGE)
        if len(text) > self.digit_count:
            return Validation.invalid(f"Age cannot exceed {self.maximum}")

        ranges = completion_ranges(text, self.digit_count)
        if any(low <= self.maximum and self.minimum <= high for low, high in ranges):
            return Validation.valid()
        if max(high for _, high in ranges) < self.minimum:
            return Validation.invalid(f"Age must be at least {self.minimum}")
        # Every completion is above the range, or the range falls in a gap between them.
        return Validation.invalid(f"Age cannot exceed {self.maximum}")

    def validate_result(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        if not text.isdigit():
            logger.error("age value failed to parse: %r", text)
            return Validation.invalid(INTERNAL_ERROR_MESSAGE)
        value = int(text)
        if value < self.minimum:
            return Validation.invalid(f"Value is smaller than {self.minimum}")
        if value > self.maximum:
            return Validation.invalid(f"Value is larger than {self.maximum}")
        return Validation.valid()
