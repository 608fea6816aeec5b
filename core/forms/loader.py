"""Form definition loading utilities."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from core.config.models import EngineSettings
from core.fields.registry import parse_field_type
from core.forms.models import FormSpec
from core.utils.errors import FieldTypeConfigError, FormDefinitionError, UnknownFieldTypeError


def load_form(path: Path, *, settings: EngineSettings | None = None) -> FormSpec:
    """Load a form definition from YAML and resolve every field type."""

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise FormDefinitionError(f"Form file not found: {path}", path=path) from exc
    except yaml.YAMLError as exc:
        raise FormDefinitionError(f"Invalid YAML in form file: {path}", path=path) from exc

    if not isinstance(raw, dict):
        raise FormDefinitionError(f"Form file must contain a mapping: {path}", path=path)
    return parse_form(raw, path=path, settings=settings)


def parse_form(
    raw: Mapping[str, Any], *, path: Path | None = None, settings: EngineSettings | None = None
) -> FormSpec:
    """Validate an already decoded form mapping."""

    source = str(path) if path is not None else "<inline>"
    try:
        form = FormSpec.model_validate(dict(raw))
    except ValidationError as exc:
        raise FormDefinitionError(f"Invalid form schema: {source}: {_first_error(exc)}", path=path) from exc

    for field in form.fields:
        try:
            parse_field_type(field.type, settings=settings)
        except (UnknownFieldTypeError, FieldTypeConfigError) as exc:
            raise FormDefinitionError(
                f"Invalid type for field '{field.name}' in {source}: {exc}", path=path
            ) from exc
    return form


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
