"""Field type interface definitions."""

from __future__ import annotations

from typing import Protocol

from core.fields.models import FinalFormat, Validation
from core.fields.specs import FIELD_SPECS, FieldSpec
from core.templates import engine
from core.templates.models import TemplateCheck


class FieldType(Protocol):
    """Protocol every field kind implements in full.

    ``filter`` reduces raw keystrokes to bounded, unformatted data and must be
    idempotent. ``validate_live`` runs on every keystroke and accepts partial
    input; ``validate_result`` runs on focus loss. ``dynamic_template`` may
    return a replacement template (``None`` keeps the current one) and
    ``final_format`` normalizes text once at focus loss. ``keeps_trailing_literals`` lets a
    literal the user just typed survive live reconstruction.
    """

    kind: str

    @property
    def description(self) -> str: ...

    @property
    def template(self) -> str: ...

    @property
    def placeholders(self) -> str: ...

    @property
    def field_priority(self) -> float: ...

    @property
    def has_dynamic_template(self) -> bool: ...

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str: ...

    def validate_live(self, text: str) -> Validation: ...

    def validate_result(self, text: str) -> Validation: ...

    def dynamic_template(self, raw: str, current_template: str) -> str | None: ...

    def final_format(self, text: str, current_template: str) -> FinalFormat: ...

    def keeps_trailing_literals(self, raw: str) -> bool: ...


class BaseFieldType:
    """Shared defaults: identity filter, always-valid checks, static template."""

    kind: str = ""

    @property
    def spec(self) -> FieldSpec:
        return FIELD_SPECS[self.kind]

    @property
    def description(self) -> str:
        return self.spec.description

    @property
    def template(self) -> str:
        return self.spec.template

    @property
    def placeholders(self) -> str:
        return self.spec.placeholders

    @property
    def field_priority(self) -> float:
        return self.spec.field_priority

    @property
    def has_dynamic_template(self) -> bool:
        return False

    def filter(self, raw: str, expansion_hint: bool | None = None) -> str:
        return raw

    def validate_live(self, text: str) -> Validation:
        return Validation.valid()

    def validate_result(self, text: str) -> Validation:
        return Validation.valid()

    def dynamic_template(self, raw: str, current_template: str) -> str | None:
        return None

    def final_format(self, text: str, current_template: str) -> FinalFormat:
        return FinalFormat(text=text, template=current_template)

    def keeps_trailing_literals(self, raw: str) -> bool:
        return False

    @property
    def has_template(self) -> bool:
        return engine.has_template(self.template)

    @property
    def has_placeholders(self) -> bool:
        return engine.has_placeholders(self.placeholders)

    @property
    def template_length(self) -> int:
        return engine.template_length(self.template)

    @property
    def max_data_length(self) -> int:
        return engine.max_data_length(self.template, self.placeholders)

    def template_check(self) -> TemplateCheck:
        return engine.validate_template_configuration(self.template, self.placeholders)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))
