"""Shared helpers for field filters and validators."""

from __future__ import annotations

import re
from datetime import date

_WHITESPACE_RE = re.compile(r"\s+")
# A word starts at a letter that follows neither a word character nor an apostrophe.
_WORD_START_RE = re.compile(r"(?<![\w'])([^\W\d_])")


def digits_only(text: str, limit: int | None = None) -> str:
    """Keep ASCII digits only, optionally truncated to ``limit`` characters."""

    digits = "".join(char for char in text if "0" <= char <= "9")
    return digits if limit is None else digits[:limit]


def letters_only(text: str) -> str:
    return "".join(char for char in text if char.isalpha())


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip())


def keep_allowed(text: str, extra: str) -> str:
    """Keep letters plus the characters in ``extra``, without leading spaces."""

    kept = "".join(char for char in text if char.isalpha() or char in extra)
    return kept.lstrip(" ")


def capitalize_words(text: str) -> str:
    """Lowercase ``text`` and uppercase the first letter of each word.

    Word boundaries are whitespace and punctuation except the apostrophe, and a
    letter directly after a digit is not a word start: ``"123 main st"`` becomes
    ``"123 Main St"``, ``"mary-jane"`` becomes ``"Mary-Jane"`` and
    ``"o'connor"`` becomes ``"O'connor"``.
    """

    return _WORD_START_RE.sub(lambda match: match.group(1).upper(), text.lower())


def current_year() -> int:
    return date.today().year


def year_in_window(two_digit_year: int, *, this_year: int, window: int) -> bool:
    """Return whether a two-digit year maps into ``this_year ± window``.

    The two digits may land in the previous, current or next century so that
    windows spanning a century boundary behave.
    """

    century = this_year // 100 * 100
    low, high = this_year - window, this_year + window
    return any(low <= base + two_digit_year <= high for base in (century - 100, century, century + 100))


def year_prefix_in_window(tens_digit: int, *, this_year: int, window: int) -> bool:
    """Return whether any two-digit year starting with ``tens_digit`` is in the window."""

    return any(
        year_in_window(tens_digit * 10 + units, this_year=this_year, window=window)
        for units in range(10)
    )
