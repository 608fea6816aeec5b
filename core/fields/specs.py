"""Static display contracts for the built-in field kinds."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class FieldSpec:
    """Description, mask and layout priority for one field kind.

    Parameterized kinds (``dataLength``, ``age``) derive their final template
    and description from their parameters; the values here are the defaults.
    """

    description: str
    template: str
    placeholders: str
    field_priority: float


FIELD_SPECS: Mapping[str, FieldSpec] = MappingProxyType(
    {
        "data": FieldSpec("Data", "", "", 1.0),
        "dataLength": FieldSpec("Data", "", "X", 1.1),
        "name": FieldSpec("Name", "", "", 1.5),
        "phrase": FieldSpec("Enter Info", "", "", 1.7),
        "credit": FieldSpec("Credit Card Number", "0000 0000 0000 0000", "0", 1.5),
        "expDate": FieldSpec("Expiration Date", "MM/YY", "MY", 0.5),
        "cvv": FieldSpec("CVV", "000", "0", 0.5),
        "age": FieldSpec("Age", "00", "0", 0.5),
        "date": FieldSpec("Date", "MM/DD/YYYY", "MDY", 1.0),
        "streetnumber": FieldSpec("Street #", "", "", 0.6),
        "street": FieldSpec("Street Name", "", "", 1.5),
        "zip": FieldSpec("Zip Code", "00000", "0", 0.6),
        "phone": FieldSpec("Phone Number", "(000) 000-0000", "0", 0.7),
        "ssn": FieldSpec("Social Security #", "000-00-0000", "0", 0.7),
        "city": FieldSpec("City", "", "", 2.5),
        "intcity": FieldSpec("City", "", "", 1.5),
        "state": FieldSpec("State", "", "", 1.0),
        "st": FieldSpec("State", "XX", "X", 0.2),
        "currency": FieldSpec("Amount", "$0.00", "0", 1.0),
        "percent": FieldSpec("Percent", "0.00%", "0", 0.8),
    }
)
