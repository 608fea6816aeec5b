from __future__ import annotations

import logging

import pytest

from core.fields.dates import DateField, ExpirationDateField
from core.fields.models import INTERNAL_ERROR_MESSAGE

THIS_YEAR = 2026


@pytest.fixture()
def exp_date() -> ExpirationDateField:
    return ExpirationDateField(this_year=THIS_YEAR)


def test_expiration_date_scenario(exp_date: ExpirationDateField) -> None:
    result = exp_date.validate_live("13")
    assert result.ok is False
    assert result.error == "Invalid Month"
    assert exp_date.validate_live("").ok is True
    assert exp_date.validate_result("12/25").ok is True


def test_expiration_date_filter_keeps_four_digits(exp_date: ExpirationDateField) -> None:
    assert exp_date.filter("12/2345") == "1223"


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("0", None),
        ("1", None),
        ("2", "Invalid Month"),
        ("00", "Invalid Month"),
        ("12", None),
        ("12/3", None),
        ("12/5", "Year out of range"),
        ("12/14", None),
        ("12/13", "Year out of range"),
        ("12/38", None),
        ("12/39", "Year out of range"),
    ],
)
def test_expiration_date_live(exp_date: ExpirationDateField, text: str, error: str | None) -> None:
    result = exp_date.validate_live(text)

    assert result.ok is (error is None)
    if error is not None:
        assert result.error == error


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("12/2", "Incomplete Date"),
        ("13/25", "Invalid Month"),
        ("00/25", "Invalid Month"),
        ("12/45", "Year out of range"),
    ],
)
def test_expiration_date_result_errors(
    exp_date: ExpirationDateField, text: str, error: str
) -> None:
    result = exp_date.validate_result(text)

    assert result.ok is False
    assert result.error == error


def test_expiration_date_window_crosses_century() -> None:
    late_century = ExpirationDateField(this_year=2095)

    assert late_century.validate_result("01/05").ok is True
    assert late_century.validate_result("01/83").ok is True
    assert late_century.validate_result("01/82").ok is False


def test_expiration_date_window_is_configurable() -> None:
    narrow = ExpirationDateField(year_window=1, this_year=THIS_YEAR)

    assert narrow.validate_result("06/27").ok is True
    assert narrow.validate_result("06/28").error == "Year out of range"


def test_expiration_date_malformed_result_is_internal_error(
    exp_date: ExpirationDateField, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.ERROR, logger="maskfield.fields")

    result = exp_date.validate_result("ab/cd")

    assert result.ok is False
    assert result.error == INTERNAL_ERROR_MESSAGE
    assert any(record.name == "maskfield.fields" for record in caplog.records)


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("1", None),
        ("2", "Invalid Month"),
        ("12/3", None),
        ("12/4", "Invalid Day"),
        ("12/31", None),
        ("12/32", "Invalid Day"),
        ("12/00", "Invalid Day"),
        ("02/30/20", None),
    ],
)
def test_date_live(text: str, error: str | None) -> None:
    result = DateField().validate_live(text)

    assert result.ok is (error is None)
    if error is not None:
        assert result.error == error


@pytest.mark.parametrize("text", ["02/29/2024", "12/31/1999", "07/04/1776"])
def test_date_result_accepts_real_dates(text: str) -> None:
    assert DateField().validate_result(text).ok is True


@pytest.mark.parametrize("text", ["02/29/2023", "02/30/2024", "2/3/2024", "13/01/2024", "12/25/"])
def test_date_result_rejects_invalid_dates(text: str) -> None:
    result = DateField().validate_result(text)

    assert result.ok is False
    assert result.error == "Invalid Date"


def test_date_filter_keeps_eight_digits() -> None:
    assert DateField().filter("12/25/2024 extra 99") == "12252024"
