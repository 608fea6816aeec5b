"""Run a form's fields through the focus/text state machine."""

from __future__ import annotations

from collections.abc import Mapping

from core.config.models import EngineSettings
from core.fields.registry import parse_field_type
from core.forms.models import FieldReport, FormReport, FormSpec
from core.groups.aggregator import GroupValidityAggregator
from core.orchestrator.session import FieldSession
from core.utils.errors import FormDefinitionError


def run_form(
    form: FormSpec,
    values: Mapping[str, str] | None = None,
    settings: EngineSettings | None = None,
) -> FormReport:
    """Simulate focus gain, text entry and focus loss for every field.

    ``values`` overrides the default ``value`` of the named fields.
    """

    settings = settings or EngineSettings()
    values = values or {}
    unknown = sorted(set(values) - {field.name for field in form.fields})
    if unknown:
        raise FormDefinitionError(f"Values given for unknown fields: {unknown}")

    aggregator = GroupValidityAggregator.from_settings(settings)
    sessions: list[FieldSession] = []
    try:
        reports: list[FieldReport] = []
        for field in form.fields:
            session = FieldSession(
                parse_field_type(field.type, settings=settings),
                required=field.required,
                group=field.group,
                field_id=field.name,
                aggregator=aggregator,
                settings=settings,
            )
            sessions.append(session)

            session.set_focus(True)
            session.set_text(values.get(field.name, field.value))
            session.set_focus(False)

            reports.append(
                FieldReport(
                    name=field.name,
                    type=field.type,
                    text=session.text,
                    template=session.template,
                    state=session.state.label,
                    message=session.state.message,
                    required=field.required,
                    group=field.group,
                    finalized=session.finalized,
                    submission_valid=session.is_submission_valid,
                )
            )

        groups = {group: aggregator.verify_group(group) for group in form.group_names()}
    finally:
        for session in sessions:
            session.close()
        aggregator.close()

    return FormReport(
        form=form.name,
        fields=reports,
        groups=groups,
        submittable=all(report.submission_valid for report in reports),
    )
