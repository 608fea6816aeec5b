from __future__ import annotations

import pytest

from core.fields.helpers import capitalize_words, keep_allowed
from core.fields.text import (
    CityField,
    DataField,
    DataLengthField,
    InternationalCityField,
    NameField,
    PhraseField,
    StreetField,
)
from core.utils.errors import FieldTypeConfigError


def test_data_strips_all_whitespace() -> None:
    data = DataField()

    assert data.filter(" ab c\td\n") == "abcd"
    assert data.validate_live("abcd").ok is True
    result = data.validate_live("ab cd")
    assert result.ok is False
    assert result.error == "Spaces not allowed"


def test_data_length_truncates_and_requires_full_length() -> None:
    field = DataLengthField(5)

    assert field.filter("abc def gh") == "abcde"
    assert field.template == "XXXXX"
    assert field.description == "Data(5 characters)"
    assert field.validate_result("abcde").ok is True
    result = field.validate_result("abc")
    assert result.ok is False
    assert result.error == "Not Long Enough"


def test_data_length_rejects_non_positive_length() -> None:
    with pytest.raises(FieldTypeConfigError):
        DataLengthField(0)


def test_data_length_equality_follows_length() -> None:
    assert DataLengthField(5) == DataLengthField(5)
    assert DataLengthField(5) != DataLengthField(6)


def test_phrase_is_identity() -> None:
    raw = "  anything GOES 123 !?  "

    assert PhraseField().filter(raw) == raw
    assert PhraseField().validate_result(raw).ok is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("o'connor", "O'Connor"),
        ("  mary-jane smith", "Mary-Jane Smith"),
        ("d'angelo", "D'Angelo"),
        ("j0hn", "Jhn"),
        ("JOHN Q. PUBLIC", "John Q. Public"),
    ],
)
def test_name_filter(raw: str, expected: str) -> None:
    assert NameField().filter(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("123 main st.", "123 Main St."),
        ("  4th ave #5", "4th Ave #5"),
        ("elm & oak, apt 2/b", "Elm & Oak, Apt 2/B"),
    ],
)
def test_street_filter(raw: str, expected: str) -> None:
    assert StreetField().filter(raw) == expected


def test_city_filters() -> None:
    assert CityField().filter("new york1") == "New York"
    assert CityField().filter("st. louis") == "St. Louis"
    assert CityField().filter("winston-salem") == "Winston-Salem"
    assert InternationalCityField().filter("rio de janeiro/rj") == "Rio De Janeiro/Rj"
    assert InternationalCityField().filter("kuala lumpur (kl)") == "Kuala Lumpur (Kl)"


def test_free_text_results_are_always_valid() -> None:
    for field in (NameField(), StreetField(), CityField(), InternationalCityField()):
        assert field.validate_result("anything").ok is True


def test_keep_allowed_strips_spaces_left_by_removed_characters() -> None:
    assert keep_allowed("1 main", "-. ") == "main"
    assert keep_allowed(" \t john", "'-. ") == "john"


def test_capitalize_words_boundaries() -> None:
    assert capitalize_words("123 main st") == "123 Main St"
    assert capitalize_words("mary-jane") == "Mary-Jane"
    assert capitalize_words("o'connor") == "O'connor"
