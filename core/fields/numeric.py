"""Digit-only field kinds with fixed masks."""

from __future__ import annotations

from core.fields.base import BaseFieldType
from core.fields.helpers import digits_only
from core.fields.models import Validation

_CARD_TYPE_DIGITS = frozenset("3456")


def card_brand(number: str) -> str | None:
    """Guess the card network from the leading digits."""

    digits = digits_only(number)
    if not digits:
        return None
    first = digits[0]
    if first == "4":
        return "Visa"
    if first == "5":
        return "Mastercard"
    if first == "3":
        return "American Express" if digits[:2] in {"34", "37"} else None
    if first == "6":
        return "Discover"
    return None


class _CompleteMaskField(BaseFieldType):
    """Digits only; the result must fill the whole mask."""

    incomplete_message = ""

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_data_length)

    def validate_result(self, text: str) -> Validation:
        return Validation.check(len(text) == self.template_length, self.incomplete_message)


class PhoneField(_CompleteMaskField):
    kind = "phone"
    incomplete_message = "Incomplete Phone #"


class SsnField(_CompleteMaskField):
    kind = "ssn"
    incomplete_message = "Incomplete SSN"


class ZipField(_CompleteMaskField):
    kind = "zip"
    incomplete_message = "Incomplete Zip Code"


class CreditCardField(BaseFieldType):
    """16 digit card number grouped in fours.

    Only the card network digit is checked live; no length or checksum rules
    per network are applied.
    """

    kind = "credit"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_data_length)

    def validate_live(self, text: str) -> Validation:
        digits = digits_only(text)
        if len(digits) == 1 and digits not in _CARD_TYPE_DIGITS:
            return Validation.invalid("Invalid credit type")
        return Validation.valid()

    def validate_result(self, text: str) -> Validation:
        # Formatted and unformatted text are both accepted.
        return Validation.check(
            len(digits_only(text)) >= self.max_data_length, "Card Number Incomplete"
        )


class CvvField(BaseFieldType):
    kind = "cvv"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_data_length)

    def validate_result(self, text: str) -> Validation:
        return Validation.check(len(text) >= self.template_length, "CVV Incomplete")


class StreetNumberField(BaseFieldType):
    kind = "streetnumber"
    max_digits = 6

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return digits_only(raw, self.max_digits)

    def validate_result(self, text: str) -> Validation:
        return Validation.check(text != "0", "Street Number cannot be zero")
