"""Form definition and report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.orchestrator.models import StateLabel


class FormFieldSpec(BaseModel):
    """One field of a form: type expression plus wiring."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    required: bool = False
    group: str | None = None
    value: str = ""


class FormSpec(BaseModel):
    """Named list of fields, optionally partitioned into validity groups."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    groups: list[str] = Field(default_factory=list)
    fields: list[FormFieldSpec] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_references(self) -> FormSpec:
        names = [field.name for field in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate field names: {duplicates}")
        if self.groups:
            undeclared = sorted(
                {field.group for field in self.fields if field.group and field.group not in self.groups}
            )
            if undeclared:
                raise ValueError(f"fields reference undeclared groups: {undeclared}")
        return self

    def group_names(self) -> list[str]:
        if self.groups:
            return list(self.groups)
        return sorted({field.group for field in self.fields if field.group})


class FieldReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    text: str
    template: str
    state: StateLabel
    message: str = ""
    required: bool
    group: str | None = None
    finalized: bool
    submission_valid: bool


class FormReport(BaseModel):
    """Outcome of running every field of a form through its session."""

    model_config = ConfigDict(extra="forbid")

    form: str
    fields: list[FieldReport]
    groups: dict[str, bool] = Field(default_factory=dict)
    submittable: bool

    @property
    def invalid_fields(self) -> list[FieldReport]:
        return [field for field in self.fields if not field.submission_valid]
