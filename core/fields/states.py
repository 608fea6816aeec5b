"""State name and two letter state code field kinds."""

from __future__ import annotations

from core.fields.base import BaseFieldType
from core.fields.helpers import capitalize_words, collapse_whitespace, keep_allowed, letters_only
from core.fields.models import Validation
from core.geo.state_data import (
    FULL_STATE_NAMES,
    OLD_STYLE_ABBREVIATION_SET,
    OLD_STYLE_DIRECTIONAL_SET,
    expand_directional,
    is_state_code,
    state_code_prefix_exists,
)

STATE_NAME_PUNCTUATION = ". "


def is_known_state_name(text: str) -> bool:
    """Accept postal codes, legacy abbreviations, full names and directional variants."""

    clean = collapse_whitespace(text)
    if len(clean) < 2:
        return False

    upper = clean.upper()
    if len(clean) == 2 and clean.isalpha():
        return is_state_code(upper)

    without_periods = upper.replace(".", "")
    if len(without_periods) <= 5 and without_periods in OLD_STYLE_ABBREVIATION_SET:
        return True
    if upper in FULL_STATE_NAMES:
        return True
    if expand_directional(upper) is not None:
        return True
    return upper in OLD_STYLE_DIRECTIONAL_SET


class StateNameField(BaseFieldType):
    """State in any common written form; validated only at focus loss."""

    kind = "state"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        kept = keep_allowed(raw, STATE_NAME_PUNCTUATION)
        if len(kept) == 2 and kept.isalpha() and is_state_code(kept):
            return kept.upper()
        return capitalize_words(kept)

    def validate_result(self, text: str) -> Validation:
        return Validation.check(is_known_state_name(text), "Invalid State Name")


class StateCodeField(BaseFieldType):
    """Two letter postal code."""

    kind = "st"

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return letters_only(raw)[: self.max_data_length].upper()

    def validate_live(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        if len(text) == 1:
            return Validation.check(state_code_prefix_exists(text), "Invalid State")
        return Validation.check(len(text) == 2 and is_state_code(text), "Invalid State")

    def validate_result(self, text: str) -> Validation:
        if not text:
            return Validation.valid()
        return Validation.check(is_state_code(text), "Invalid State")
