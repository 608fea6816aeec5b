"""Month/year and calendar date field kinds."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from core.fields.base import BaseFieldType
from core.fields.helpers import current_year, digits_only, year_in_window, year_prefix_in_window
from core.fields.models import INTERNAL_ERROR_MESSAGE, Validation

logger = logging.getLogger("maskfield.fields")

DEFAULT_YEAR_WINDOW = 12
_DATE_FORMAT = "%m/%d/%Y"
_DATE_SHAPE_RE = re.compile(r"\d{2}/\d{2}/\d{4}")


def _month_check(digits: str) -> Validation | None:
    """Validate the month part of a digit string; ``None`` means it passed."""

    if len(digits) == 1:
        return Validation.check(digits in {"0", "1"}, "Invalid Month")
    if not digits[:2].isdigit():
        logger.error("month digits failed to parse: %r", digits)
        return Validation.invalid(INTERNAL_ERROR_MESSAGE)
    month = int(digits[:2])
    if not 1 <= month <= 12:
        return Validation.invalid("Invalid Month")
    return None


@dataclass(frozen=True, eq=True)
class ExpirationDateField(BaseFieldType):
    """``MM/YY`` card expiration with a ± ``year_window`` year range.

    ``this_year`` pins the reference year; ``None`` reads the system clock.
    """

    year_window: int = DEFAULT_YEAR_WINDOW
    this_year: int | None = None

    kind = "expDate"

    def _reference_year(self) -> int:
        return self.this_year if self.this_year is not None else current_year()

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_data_length)

    def validate_live(self, text: str) -> Validation:
        digits = digits_only(text, self.max_data_length)
        if not digits:
            return Validation.valid()

        month_error = _month_check(digits)
        if month_error is not None:
            return month_error

        year_digits = digits[2:]
        if not year_digits:
            return Validation.valid()
        reference = self._reference_year()
        if len(year_digits) == 1:
            in_range = year_prefix_in_window(
                int(year_digits), this_year=reference, window=self.year_window
            )
        else:
            in_range = year_in_window(int(year_digits), this_year=reference, window=self.year_window)
        return Validation.check(in_range, "Year out of range")

    def validate_result(self, text: str) -> Validation:
        if len(text) != self.template_length:
            return Validation.invalid("Incomplete Date")
        digits = text.replace("/", "")
        if len(digits) != self.max_data_length or not digits.isdigit():
            logger.error("expiration date digits failed to parse: %r", text)
            return Validation.invalid(INTERNAL_ERROR_MESSAGE)

        month = int(digits[:2])
        if not 1 <= month <= 12:
            return Validation.invalid("Invalid Month")
        in_range = year_in_window(
            int(digits[2:]), this_year=self._reference_year(), window=self.year_window
        )
        return Validation.check(in_range, "Year out of range")


class DateField(BaseFieldType):
    """``MM/DD/YYYY`` calendar date; any four digit year is accepted."""

    kind = "date"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_data_length)

    def validate_live(self, text: str) -> Validation:
        digits = digits_only(text, self.max_data_length)
        if not digits:
            return Validation.valid()

        month_error = _month_check(digits)
        if month_error is not None:
            return month_error

        day_digits = digits[2:4]
        if not day_digits:
            return Validation.valid()
        if len(day_digits) == 1:
            return Validation.check(day_digits in {"0", "1", "2", "3"}, "Invalid Day")
        return Validation.check(1 <= int(day_digits) <= 31, "Invalid Day")

    def validate_result(self, text: str) -> Validation:
        if not _DATE_SHAPE_RE.fullmatch(text):
            return Validation.invalid("Invalid Date")
        try:
            parsed = datetime.strptime(text, _DATE_FORMAT)
        except ValueError:
            return Validation.invalid("Invalid Date")
        return Validation.check(parsed.strftime(_DATE_FORMAT) == text, "Invalid Date")
