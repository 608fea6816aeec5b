"""US state and territory reference tables.

All tables are uppercase and immutable. Full names allow letters, spaces and
periods only.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

STATE_NAMES_BY_CODE: Mapping[str, str] = MappingProxyType(
    {
        "AL": "ALABAMA",
        "AK": "ALASKA",
        "AZ": "ARIZONA",
        "AR": "ARKANSAS",
        "CA": "CALIFORNIA",
        "CO": "COLORADO",
        "CT": "CONNECTICUT",
        "DE": "DELAWARE",
        "FL": "FLORIDA",
        "GA": "GEORGIA",
        "HI": "HAWAII",
        "ID": "IDAHO",
        "IL": "ILLINOIS",
        "IN": "INDIANA",
        "IA": "IOWA",
        "KS": "KANSAS",
        "KY": "KENTUCKY",
        "LA": "LOUISIANA",
        "ME": "MAINE",
        "MD": "MARYLAND",
        "MA": "MASSACHUSETTS",
        "MI": "MICHIGAN",
        "MN": "MINNESOTA",
        "MS": "MISSISSIPPI",
        "MO": "MISSOURI",
        "MT": "MONTANA",
        "NE": "NEBRASKA",
        "NV": "NEVADA",
        "NH": "NEW HAMPSHIRE",
        "NJ": "NEW JERSEY",
        "NM": "NEW MEXICO",
        "NY": "NEW YORK",
        "NC": "NORTH CAROLINA",
        "ND": "NORTH DAKOTA",
        "OH": "OHIO",
        "OK": "OKLAHOMA",
        "OR": "OREGON",
        "PA": "PENNSYLVANIA",
        "RI": "RHODE ISLAND",
        "SC": "SOUTH CAROLINA",
        "SD": "SOUTH DAKOTA",
        "TN": "TENNESSEE",
        "TX": "TEXAS",
        "UT": "UTAH",
        "VT": "VERMONT",
        "VA": "VIRGINIA",
        "WA": "WASHINGTON",
        "WV": "WEST VIRGINIA",
        "WI": "WISCONSIN",
        "WY": "WYOMING",
        "DC": "DISTRICT OF COLUMBIA",
        "AS": "AMERICAN SAMOA",
        "GU": "GUAM",
        "MP": "NORTHERN MARIANA ISLANDS",
        "PR": "PUERTO RICO",
        "VI": "US VIRGIN ISLANDS",
    }
)

STATE_CODES: tuple[str, ...] = tuple(STATE_NAMES_BY_CODE)

_NAME_VARIANTS: tuple[str, ...] = (
    "WASHINGTON DC",
    "WASHINGTON D.C.",
    "VIRGIN ISLANDS",
    "U.S. VIRGIN ISLANDS",
    "MARIANA ISLANDS",
)

FULL_STATE_NAMES: frozenset[str] = frozenset(STATE_NAMES_BY_CODE.values()) | frozenset(
    _NAME_VARIANTS
)

# Government Printing Office style abbreviations, stored without periods.
OLD_STYLE_ABBREVIATIONS: tuple[str, ...] = (
    "ALA",
    "ARIZ",
    "ARK",
    "CALIF",
    "CAL",
    "COLO",
    "CONN",
    "DEL",
    "FLA",
    "ILL",
    "IND",
    "KANS",
    "KAN",
    "MASS",
    "MICH",
    "MINN",
    "MISS",
    "MONT",
    "NEBR",
    "NEB",
    "NEV",
    "NMEX",
    "OKLA",
    "OREG",
    "ORE",
    "PENN",
    "PENNA",
    "TENN",
    "TEX",
    "WASH",
    "WVA",
    "WIS",
    "WISC",
    "WYO",
)

DIRECTIONAL_VARIATIONS: Mapping[str, str] = MappingProxyType(
    {
        "N CAROLINA": "NORTH CAROLINA",
        "N. CAROLINA": "NORTH CAROLINA",
        "S CAROLINA": "SOUTH CAROLINA",
        "S. CAROLINA": "SOUTH CAROLINA",
        "N DAKOTA": "NORTH DAKOTA",
        "N. DAKOTA": "NORTH DAKOTA",
        "S DAKOTA": "SOUTH DAKOTA",
        "S. DAKOTA": "SOUTH DAKOTA",
        "W VIRGINIA": "WEST VIRGINIA",
        "W. VIRGINIA": "WEST VIRGINIA",
    }
)

OLD_STYLE_DIRECTIONAL: tuple[str, ...] = (
    "N.C.",
    "S.C.",
    "N.D.",
    "S.D.",
    "W.VA.",
    "N.H.",
    "N.J.",
    "N.M.",
    "N.Y.",
    "R.I.",
    "D.C.",
)

STATE_CODE_SET: frozenset[str] = frozenset(STATE_CODES)
OLD_STYLE_ABBREVIATION_SET: frozenset[str] = frozenset(OLD_STYLE_ABBREVIATIONS)
OLD_STYLE_DIRECTIONAL_SET: frozenset[str] = frozenset(OLD_STYLE_DIRECTIONAL)


def is_state_code(code: str) -> bool:
    return code.upper() in STATE_CODE_SET


def state_code_prefix_exists(prefix: str) -> bool:
    """Return whether any postal code starts with ``prefix``."""

    upper = prefix.upper()
    return any(code.startswith(upper) for code in STATE_CODES)


def expand_directional(name: str) -> str | None:
    """Map a directional variant such as ``N CAROLINA`` to its full name."""

    return DIRECTIONAL_VARIATIONS.get(name.upper())
