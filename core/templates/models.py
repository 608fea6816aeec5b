"""Data models for template configuration checks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateCheck:
    """Outcome of a template/placeholder configuration check."""

    is_valid: bool
    error: str | None = None


@dataclass(frozen=True)
class TemplateDraft:
    """Template/placeholder pair produced by ``TemplateBuilder``."""

    template: str
    placeholders: str
    check: TemplateCheck

    @property
    def is_valid(self) -> bool:
        return self.check.is_valid

    @property
    def error(self) -> str | None:
        return self.check.error
