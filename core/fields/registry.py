"""Field type registry for CLI/API/form type resolution."""

from __future__ import annotations

import re
from collections.abc import Callable
from types import MappingProxyType

from core.config.settings import EngineSettings
from core.fields.age import AgeField
from core.fields.base import FieldType
from core.fields.dates import DateField, ExpirationDateField
from core.fields.money import CurrencyField, PercentField
from core.fields.numeric import (
    CreditCardField,
    CvvField,
    PhoneField,
    SsnField,
    StreetNumberField,
    ZipField,
)
from core.fields.specs import FIELD_SPECS
from core.fields.states import StateCodeField, StateNameField
from core.fields.text import (
    CityField,
    DataField,
    DataLengthField,
    InternationalCityField,
    NameField,
    PhraseField,
    StreetField,
)
from core.utils.errors import FieldTypeConfigError, UnknownFieldTypeError

FieldTypeFactory = Callable[..., FieldType]

_TYPE_EXPRESSION_RE = re.compile(r"^\s*([A-Za-z]+)\s*(?:\(([^()]*)\))?\s*$")


def _expiration_date(settings: EngineSettings | None = None) -> FieldType:
    if settings is None:
        return ExpirationDateField()
    return ExpirationDateField(year_window=settings.year_window)


_SUPPORTED_FIELD_TYPES: dict[str, FieldTypeFactory] = {
    "data": lambda settings=None: DataField(),
    "dataLength": lambda length, settings=None: DataLengthField(length),
    "name": lambda settings=None: NameField(),
    "phrase": lambda settings=None: PhraseField(),
    "credit": lambda settings=None: CreditCardField(),
    "expDate": _expiration_date,
    "cvv": lambda settings=None: CvvField(),
    "age": lambda minimum, maximum, settings=None: AgeField(minimum, maximum),
    "date": lambda settings=None: DateField(),
    "streetnumber": lambda settings=None: StreetNumberField(),
    "street": lambda settings=None: StreetField(),
    "zip": lambda settings=None: ZipField(),
    "phone": lambda settings=None: PhoneField(),
    "ssn": lambda settings=None: SsnField(),
    "city": lambda settings=None: CityField(),
    "intcity": lambda settings=None: InternationalCityField(),
    "state": lambda settings=None: StateNameField(),
    "st": lambda settings=None: StateCodeField(),
    "currency": lambda settings=None: CurrencyField(),
    "percent": lambda settings=None: PercentField(),
}

# Positional integer parameters taken by parameterized kinds.
FIELD_TYPE_PARAMETERS = MappingProxyType(
    {
        "dataLength": ("length",),
        "age": ("minimum", "maximum"),
    }
)


def create_field_type(
    name: str, *params: int, settings: EngineSettings | None = None
) -> FieldType:
    """Instantiate a supported field type by name."""

    try:
        factory = _SUPPORTED_FIELD_TYPES[name]
    except KeyError as exc:
        raise UnknownFieldTypeError(f"Unsupported field type: {name}", expression=name) from exc

    expected = FIELD_TYPE_PARAMETERS.get(name, ())
    if len(params) != len(expected):
        if expected:
            signature = f"{name}({', '.join(expected)})"
            raise FieldTypeConfigError(f"{signature} expects {len(expected)} parameter(s), got {len(params)}")
        raise FieldTypeConfigError(f"{name} does not take parameters")
    return factory(*params, settings=settings)


def parse_field_type(expression: str, *, settings: EngineSettings | None = None) -> FieldType:
    """Resolve a type expression such as ``phone``, ``dataLength(5)`` or ``age(18,65)``."""

    match = _TYPE_EXPRESSION_RE.match(expression)
    if match is None:
        raise UnknownFieldTypeError(
            f"Invalid field type expression: {expression!r}", expression=expression
        )
    name, raw_params = match.group(1), match.group(2)

    params: list[int] = []
    if raw_params is not None and raw_params.strip():
        for item in raw_params.split(","):
            try:
                params.append(int(item.strip()))
            except ValueError as exc:
                raise UnknownFieldTypeError(
                    f"Field type parameters must be integers: {expression!r}",
                    expression=expression,
                ) from exc
    return create_field_type(name, *params, settings=settings)


def format_field_type(field_type: FieldType) -> str:
    """Render the expression that ``parse_field_type`` maps back to ``field_type``."""

    names = FIELD_TYPE_PARAMETERS.get(field_type.kind, ())
    if not names:
        return field_type.kind
    values = ",".join(str(getattr(field_type, param)) for param in names)
    return f"{field_type.kind}({values})"


def list_supported_field_types() -> list[str]:
    """Return supported field type names in stable order."""

    return sorted(_SUPPORTED_FIELD_TYPES)


def _assert_registry_alignment() -> None:
    """Fail fast when FIELD_SPECS and the factory table disagree."""

    type_names = set(_SUPPORTED_FIELD_TYPES)
    spec_names = set(FIELD_SPECS)
    parameterized = set(FIELD_TYPE_PARAMETERS)
    if type_names != spec_names or not parameterized <= type_names:
        raise RuntimeError(
            "Field type registry and FIELD_SPECS keys must match: "
            f"types={sorted(type_names)}, specs={sorted(spec_names)}, "
            f"parameterized={sorted(parameterized)}"
        )


_assert_registry_alignment()
