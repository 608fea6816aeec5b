"""Free-text field kinds: data, names, streets and cities."""

from __future__ import annotations

from dataclasses import dataclass

from core.fields.base import BaseFieldType
from core.fields.helpers import capitalize_words, keep_allowed, strip_whitespace
from core.fields.models import Validation
from core.utils.errors import FieldTypeConfigError

NAME_PUNCTUATION = "'-. "
STREET_PUNCTUATION = "0123456789'-.#/&, "
CITY_PUNCTUATION = "-. "
INTERNATIONAL_CITY_PUNCTUATION = "-. '/()&"


class DataField(BaseFieldType):
    """Single token: whitespace is removed, no length cap."""

    kind = "data"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return strip_whitespace(raw)

    def validate_live(self, text: str) -> Validation:
        return Validation.check(" " not in text, "Spaces not allowed")


@dataclass(frozen=True, eq=True)
class DataLengthField(DataField):
    """Single token of exactly ``length`` characters."""

    length: int

    kind = "dataLength"

    def __post_init__(self) -> None:
        if self.length < 1:
            raise FieldTypeConfigError(f"dataLength requires a positive length, got {self.length}")

    @property
    def description(self) -> str:
        return f"Data({self.length} characters)"

    @property
    def template(self) -> str:
        return "X" * self.length

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return strip_whitespace(raw)[: self.length]

    def validate_result(self, text: str) -> Validation:
        return Validation.check(len(text) >= self.length, "Not Long Enough")


class PhraseField(BaseFieldType):
    """Anything goes; no filtering at all."""

    kind = "phrase"


class NameField(BaseFieldType):
    kind = "name"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        result = capitalize_words(keep_allowed(raw, NAME_PUNCTUATION))
        if "'" in result:
            # O'Connor, D'Angelo: every apostrophe starts a new capitalized part.
            result = "'".join(capitalize_words(part) for part in result.split("'"))
        return result


class StreetField(BaseFieldType):
    kind = "street"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return capitalize_words(keep_allowed(raw, STREET_PUNCTUATION))


class CityField(BaseFieldType):
    """US city name."""

    kind = "city"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return capitalize_words(keep_allowed(raw, CITY_PUNCTUATION))


class InternationalCityField(BaseFieldType):
    kind = "intcity"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return capitalize_words(keep_allowed(raw, INTERNATIONAL_CITY_PUNCTUATION))
