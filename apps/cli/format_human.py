"""Human-readable rendering of snapshots and form reports for CLI output."""

from __future__ import annotations

from core.fields.base import FieldType
from core.forms.models import FormReport
from core.orchestrator.models import FieldSnapshot


def render_snapshot(snapshot: FieldSnapshot) -> str:
    """Render one field snapshot as ``key=value`` lines."""

    lines = [
        f"text={snapshot.text}",
        f"template={snapshot.template}",
        f"state={snapshot.state}",
    ]
    if snapshot.message:
        lines.append(f"message={snapshot.message}")
    lines.append(f"finalized={str(snapshot.finalized).lower()}")
    lines.append(f"submission_valid={str(snapshot.submission_valid).lower()}")
    return "\n".join(lines)


def render_field_types(field_types: list[tuple[str, FieldType]]) -> str:
    """Render one aligned row per field type: name, template, placeholders, description."""

    width = max((len(name) for name, _ in field_types), default=0)
    rows: list[str] = []
    for name, field_type in field_types:
        template = field_type.template or "-"
        placeholders = field_type.placeholders or "-"
        rows.append(f"{name.ljust(width)}  {template:<20} {placeholders:<4} {field_type.description}")
    return "\n".join(rows)


def render_form_report(report: FormReport) -> str:
    """Render a one-screen form summary."""

    lines: list[str] = [f"form: {report.form}"]
    lines.append(f"result={'SUBMITTABLE' if report.submittable else 'BLOCKED'}")

    for field in report.fields:
        status = "ok" if field.submission_valid else "INVALID"
        line = f"  {field.name} ({field.type}): {status} text={field.text!r} state={field.state}"
        if field.message:
            line += f" message={field.message!r}"
        lines.append(line)

    if report.groups:
        groups_text = ", ".join(
            f"{group}={'valid' if valid else 'invalid'}" for group, valid in report.groups.items()
        )
        lines.append(f"groups: {groups_text}")
    else:
        lines.append("groups: none")
    return "\n".join(lines)
