"""Variable width currency and percent kinds.

Both kinds keep a leading-zero template that grows with the number of whole
digits typed (``$0.00`` -> ``$000.00``). The filtered data is digits only; the
template decides where the decimal point lands.
"""

from __future__ import annotations

import logging
import re

from core.fields.base import BaseFieldType
from core.fields.helpers import digits_only
from core.fields.models import FinalFormat, Validation

logger = logging.getLogger("maskfield.fields")

MAX_AMOUNT_DIGITS = 15
DECIMAL_PLACES = 2

# Focus loss stops at the first unfilled decimal placeholder, before the sign.
_PARTIAL_PERCENT_RE = re.compile(r"\d+\.\d*")


def _whole_placeholders(whole_digit_count: int) -> str:
    return "0" * max(whole_digit_count, 1)


def currency_template(whole_digit_count: int) -> str:
    return f"${_whole_placeholders(whole_digit_count)}.00"


def percent_template(whole_digit_count: int, decimal_digit_count: int = DECIMAL_PLACES) -> str:
    decimals = "0" * max(decimal_digit_count, DECIMAL_PLACES)
    return f"{_whole_placeholders(whole_digit_count)}.{decimals}%"


def _split_amount(raw: str) -> tuple[str, str, bool]:
    whole, separator, decimal = raw.partition(".")
    return digits_only(whole), digits_only(decimal), bool(separator)


def _normalize(numeric: str) -> tuple[str, str]:
    """Strip superfluous leading zeros and force exactly two decimal digits."""

    whole, decimal, _ = _split_amount(numeric)
    whole = whole.lstrip("0") or "0"
    decimal = (decimal + "0" * DECIMAL_PLACES)[:DECIMAL_PLACES]
    return whole, decimal


class _AmountField(BaseFieldType):
    max_decimal_digits: int | None = DECIMAL_PLACES

    @property
    def has_dynamic_template(self) -> bool:
        return True

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        whole, decimal, has_decimal = _split_amount(raw)
        if not has_decimal:
            return whole[:MAX_AMOUNT_DIGITS]
        if self.max_decimal_digits is not None:
            decimal = decimal[: self.max_decimal_digits]
        return (whole + decimal)[:MAX_AMOUNT_DIGITS]

    def keeps_trailing_literals(self, raw: str) -> bool:
        # A typed "." with no cents yet stays visible so the next digit lands after it.
        whole, decimal, has_decimal = _split_amount(raw)
        return has_decimal and bool(whole) and not decimal


class CurrencyField(_AmountField):
    """Dollar amount rendered as ``$<whole>.<cents>``."""

    kind = "currency"

    def dynamic_template(self, raw: str, current_template: str) -> str | None:
        whole, _, has_decimal = _split_amount(raw)
        if has_decimal:
            return currency_template(len(whole))
        return currency_template(len(digits_only(raw)))

    def validate_result(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        whole, decimal, _ = _split_amount(text)
        well_formed = text.startswith("$") and bool(whole) and len(decimal) <= DECIMAL_PLACES
        return Validation.check(well_formed, "Invalid Amount")

    def final_format(self, text: str, current_template: str) -> FinalFormat:
        if not text:
            return FinalFormat(text="", template=current_template)
        if not text.startswith("$"):
            logger.warning("Currency value missing '$' sign, repairing: %r", text)
            text = "$" + text
        whole, decimal = _normalize(text[1:])
        return FinalFormat(text=f"${whole}.{decimal}", template=currency_template(len(whole)))


class PercentField(_AmountField):
    """Percentage rendered as ``<whole>.<decimals>%``; decimals may exceed two while typing."""

    kind = "percent"
    max_decimal_digits = None

    def dynamic_template(self, raw: str, current_template: str) -> str | None:
        whole, decimal, has_decimal = _split_amount(raw)
        if has_decimal:
            return percent_template(len(whole), len(decimal))
        return percent_template(len(digits_only(raw)))

    def validate_result(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        whole, _, _ = _split_amount(text.rstrip("%"))
        return Validation.check(bool(whole), "Invalid Percent")

    def final_format(self, text: str, current_template: str) -> FinalFormat:
        if not text:
            return FinalFormat(text="", template=current_template)
        if _PARTIAL_PERCENT_RE.fullmatch(text):
            text = text + "%"
        elif not text.endswith("%"):
            logger.warning("Percent value missing '%%' sign, repairing: %r", text)
            text = text + "%"
        whole, decimal = _normalize(text[:-1])
        return FinalFormat(text=f"{whole}.{decimal}%", template=percent_template(len(whole)))
