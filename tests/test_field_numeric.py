from __future__ import annotations

import pytest

from core.fields.numeric import (
    CreditCardField,
    CvvField,
    PhoneField,
    SsnField,
    StreetNumberField,
    ZipField,
    card_brand,
)
from core.templates.engine import reconstruct


def test_phone_scenario() -> None:
    phone = PhoneField()

    filtered = phone.filter("(555) 123-4567")
    assert filtered == "5551234567"
    assert reconstruct(filtered, phone.template, phone.placeholders) == "(555) 123-4567"
    assert phone.validate_result("(555) 123-4567").ok is True

    result = phone.validate_result("555-123-456")
    assert result.ok is False
    assert result.error == "Incomplete Phone #"


def test_phone_live_validation_always_passes() -> None:
    assert PhoneField().validate_live("(55").ok is True


def test_ssn_and_zip_require_complete_masks() -> None:
    ssn = SsnField()
    assert ssn.filter("123-45-6789x") == "123456789"
    assert reconstruct("123456789", ssn.template, ssn.placeholders) == "123-45-6789"
    assert ssn.validate_result("123-45-6789").ok is True
    assert ssn.validate_result("123-45").error == "Incomplete SSN"

    zip_code = ZipField()
    assert zip_code.filter("12345-6789") == "12345"
    assert zip_code.validate_result("12345").ok is True
    assert zip_code.validate_result("1234").error == "Incomplete Zip Code"


def test_credit_card_filter_caps_at_sixteen_digits() -> None:
    assert CreditCardField().filter("4111 1111 1111 1111 99") == "4111111111111111"


@pytest.mark.parametrize("digit", ["0", "1", "2", "7", "8", "9"])
def test_credit_card_rejects_unknown_network_digit(digit: str) -> None:
    result = CreditCardField().validate_live(digit)

    assert result.ok is False
    assert result.error == "Invalid credit type"


@pytest.mark.parametrize("text", ["", "3", "4", "5", "6", "41", "7111"])
def test_credit_card_live_accepts_other_input(text: str) -> None:
    assert CreditCardField().validate_live(text).ok is True


def test_credit_card_result_requires_sixteen_digits() -> None:
    card = CreditCardField()

    assert card.validate_result("4111 1111 1111 1111").ok is True
    result = card.validate_result("4111 1111")
    assert result.ok is False
    assert result.error == "Card Number Incomplete"


@pytest.mark.parametrize(
    ("number", "brand"),
    [
        ("4111 1111 1111 1111", "Visa"),
        ("5500", "Mastercard"),
        ("3714", "American Express"),
        ("3400", "American Express"),
        ("3000", None),
        ("6011", "Discover"),
        ("", None),
        ("9999", None),
    ],
)
def test_card_brand(number: str, brand: str | None) -> None:
    assert card_brand(number) == brand


def test_cvv_requires_three_digits() -> None:
    cvv = CvvField()

    assert cvv.filter("12a34") == "123"
    assert cvv.validate_live("1").ok is True
    assert cvv.validate_result("123").ok is True
    assert cvv.validate_result("12").error == "CVV Incomplete"


def test_street_number_zero_rule() -> None:
    street_number = StreetNumberField()

    assert street_number.filter("12a3456789") == "123456"
    result = street_number.validate_result("0")
    assert result.ok is False
    assert result.error == "Street Number cannot be zero"
    assert street_number.validate_result("").ok is True
    assert street_number.validate_result("221").ok is True
