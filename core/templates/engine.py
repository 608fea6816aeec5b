"""Placeholder template engine.

A template is a display mask such as ``(000) 000-0000``. Characters that appear
in the placeholder alphabet mark data positions; every other character is a
literal that is only emitted once data exists on both sides of it.
"""

from __future__ import annotations

from core.templates.models import TemplateCheck, TemplateDraft

RESERVED_FORMATTING_CHARS = "()-./ "


def reconstruct(data: str, template: str, placeholders: str) -> str:
    """Rebuild display text from unformatted data during live editing.

    Rules:
    - Without a template or placeholder alphabet the data is returned unchanged.
    - Literal characters are buffered and only flushed in front of the next
      data character, so the result never ends on a literal.
    - Processing stops at the first placeholder that has no data left.
    """

    return _walk(data, template, placeholders, flush_trailing=False)


def final_reconstruct(data: str, template: str, placeholders: str) -> str:
    """Rebuild display text at focus loss.

    Same walk as ``reconstruct`` except that literals buffered after the last
    consumed data character are emitted instead of dropped. ``"1225"`` against
    ``MM/DD/YYYY`` yields ``"12/25/"`` and ``"125"`` against ``$000.00`` yields
    ``"$125."``.
    """

    return _walk(data, template, placeholders, flush_trailing=True)


def _walk(data: str, template: str, placeholders: str, *, flush_trailing: bool) -> str:
    if not template or not placeholders:
        return data
    if not data:
        return ""

    chunks: list[str] = []
    pending: list[str] = []
    cursor = 0

    for char in template:
        if char not in placeholders:
            pending.append(char)
            continue
        if cursor >= len(data):
            break
        chunks.extend(pending)
        pending.clear()
        chunks.append(data[cursor])
        cursor += 1

    if flush_trailing:
        chunks.extend(pending)
    return "".join(chunks)


def has_template(template: str) -> bool:
    return bool(template)


def has_placeholders(placeholders: str) -> bool:
    return bool(placeholders)


def template_length(template: str) -> int:
    return len(template)


def count_placeholders(template: str, placeholders: str) -> int:
    """Count template positions occupied by placeholder characters."""

    if not placeholders:
        return 0
    return sum(1 for char in template if char in placeholders)


def max_data_length(template: str, placeholders: str) -> int:
    """Return how many data characters fit in the template (0 without one)."""

    if not template or not placeholders:
        return 0
    return count_placeholders(template, placeholders)


def validate_template_configuration(template: str, placeholders: str) -> TemplateCheck:
    """Check the structural rules of a template/placeholder pair.

    An empty template with an empty alphabet is valid (free-form field). This
    check is diagnostic only; the engine never enforces it.
    """

    if not template:
        if placeholders:
            return TemplateCheck(False, "Placeholders defined but no template provided")
        return TemplateCheck(True)

    if not placeholders:
        return TemplateCheck(False, "Template provided but no placeholders defined")

    if count_placeholders(template, placeholders) == 0:
        return TemplateCheck(False, "Template does not contain any placeholder characters")

    for placeholder in placeholders:
        if placeholder in RESERVED_FORMATTING_CHARS:
            return TemplateCheck(
                False,
                f"Placeholder '{placeholder}' conflicts with common formatting characters",
            )

    return TemplateCheck(True)


class TemplateBuilder:
    """Fluent helper for authoring custom template/placeholder pairs."""

    def __init__(self) -> None:
        self._template = ""
        self._placeholders = ""

    def set_template(self, template: str) -> TemplateBuilder:
        self._template = template
        return self

    def set_placeholders(self, placeholders: str) -> TemplateBuilder:
        self._placeholders = placeholders
        return self

    def build(self) -> TemplateDraft:
        return TemplateDraft(
            template=self._template,
            placeholders=self._placeholders,
            check=validate_template_configuration(self._template, self._placeholders),
        )
