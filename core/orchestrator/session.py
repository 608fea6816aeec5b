"""Focus and text state machine for a single field instance."""

from __future__ import annotations

import logging
import uuid

from core.config.settings import EngineSettings
from core.fields.base import FieldType
from core.fields.models import Validation
from core.groups.aggregator import GroupAggregator
from core.orchestrator.models import FieldSnapshot, FocusLossResult, FocusTransition, InputState
from core.templates import engine

logger = logging.getLogger("maskfield.session")


def analyze_transition(previous_focused: bool, current_focused: bool) -> FocusTransition:
    if current_focused:
        return "keeps_focus" if previous_focused else "gaining_focus"
    return "losing_focus" if previous_focused else "stays_inactive"


def determine_expansion(old_text: str, new_text: str) -> bool | None:
    """Return ``True`` when text grew, ``False`` when it shrank, ``None`` on replacement."""

    if len(new_text) == len(old_text):
        return None
    return len(new_text) > len(old_text)


def should_update_processed_text(old_text: str, new_text: str, field_type: FieldType) -> bool:
    """Return whether a text change alters the filtered data of a templated field."""

    if old_text == new_text:
        return False
    if not engine.has_template(field_type.template):
        return True
    expanding = len(new_text) > len(old_text)
    return field_type.filter(old_text, not expanding) != field_type.filter(new_text, expanding)


def process_display_text(text: str, field_type: FieldType) -> str:
    """Read-only rendering: filter, then reconstruct against the static template."""

    filtered = field_type.filter(text, None)
    if not engine.has_template(field_type.template) or not filtered:
        return filtered
    return engine.reconstruct(filtered, field_type.template, field_type.placeholders)


class FieldSession:
    """Owns the mutable ``(text, template, state, finalized)`` of one field.

    Every text or focus change recomputes the state and pushes the resulting
    submission validity to the group aggregator, when one is configured.
    """

    def __init__(
        self,
        field_type: FieldType,
        text: str = "",
        *,
        required: bool = False,
        group: str | None = None,
        field_id: str | None = None,
        aggregator: GroupAggregator | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.field_type = field_type
        self.required = required
        self.group = group
        self.field_id = field_id or uuid.uuid4().hex
        self._aggregator = aggregator
        self._required_message = (settings or EngineSettings()).required_message

        self._template = field_type.template
        self._text = ""
        self._focused = False
        self._finalized = False
        self._closed = False
        self._state = InputState.idle()
        self.last_focus_loss: FocusLossResult | None = None

        if text:
            self._apply_dynamic_template(text)
            self._text = self._live_reconstruct(text, None)
        self._push_validity()

    @property
    def text(self) -> str:
        return self._text

    @property
    def template(self) -> str:
        return self._template

    @property
    def state(self) -> InputState:
        return self._state

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def label(self) -> str:
        return f"{self.field_type.description}[{self.field_id}]"

    @property
    def is_submission_valid(self) -> bool:
        state = self._state
        if state.phase == "idle":
            return not self.required
        if not state.valid:
            return False
        if state.phase == "inactive":
            return True
        if self.required and not self._text:
            return False
        return self.field_type.validate_result(self._text).ok

    def set_text(self, raw: str) -> InputState:
        """Apply a text change (keystroke, paste or programmatic assignment)."""

        expansion_hint = determine_expansion(self._text, raw)
        self._text = raw
        self._update_state(expansion_hint)
        return self._state

    def set_focus(self, focused: bool) -> FocusTransition:
        """Apply an observed focus change and run the matching transition."""

        transition = analyze_transition(self._focused, focused)
        self._focused = focused

        if transition == "gaining_focus":
            self._finalized = False
        elif transition == "losing_focus":
            result = self._process_focus_loss()
            self.last_focus_loss = result
            if not result.finalized:
                self._set_state(InputState.inactive(result.validation))
                self._push_validity()
                return transition

        self._update_state(None)
        return transition

    def close(self) -> None:
        """Tear down the field; removes it from its group."""

        if self._closed:
            return
        self._closed = True
        if self._aggregator is not None and self.group:
            self._aggregator.remove(self.group, self.field_id)

    def snapshot(self) -> FieldSnapshot:
        return FieldSnapshot(
            field_id=self.field_id,
            kind=self.field_type.kind,
            description=self.field_type.description,
            text=self._text,
            template=self._template,
            placeholders=self.field_type.placeholders,
            state=self._state.label,
            message=self._state.message,
            focused=self._focused,
            finalized=self._finalized,
            required=self.required,
            group=self.group,
            submission_valid=self.is_submission_valid,
            field_priority=self.field_type.field_priority,
        )

    def _update_state(self, expansion_hint: bool | None) -> None:
        field_type = self.field_type
        if self._focused:
            self._apply_dynamic_template(self._text)
            self._text = self._live_reconstruct(self._text, expansion_hint)
            new_state = InputState.focused(field_type.validate_live(self._text))
        elif not self._text:
            if self.required:
                new_state = InputState.inactive(Validation.invalid(self._required_message))
            else:
                new_state = InputState.idle()
        else:
            new_state = InputState.inactive(field_type.validate_result(self._text))

        self._set_state(new_state)
        self._push_validity()

    def _live_reconstruct(self, raw: str, expansion_hint: bool | None) -> str:
        field_type = self.field_type
        filtered = field_type.filter(raw, expansion_hint)
        if field_type.keeps_trailing_literals(raw):
            return engine.final_reconstruct(filtered, self._template, field_type.placeholders)
        return engine.reconstruct(filtered, self._template, field_type.placeholders)

    def _process_focus_loss(self) -> FocusLossResult:
        field_type = self.field_type
        filtered = field_type.filter(self._text, None)
        reconstructed = engine.final_reconstruct(filtered, self._template, field_type.placeholders)

        live = field_type.validate_live(reconstructed)
        if not live.ok:
            return FocusLossResult(
                finalized=False, text=self._text, template=self._template, validation=live
            )

        final = field_type.final_format(reconstructed, self._template)
        self._text = final.text
        self._template = final.template
        self._finalized = True
        return FocusLossResult(
            finalized=True, text=final.text, template=final.template, validation=Validation.valid()
        )

    def _apply_dynamic_template(self, raw: str) -> None:
        field_type = self.field_type
        if not field_type.has_dynamic_template:
            return
        candidate = field_type.dynamic_template(raw, self._template)
        if candidate is None:
            return
        if field_type.placeholders and engine.count_placeholders(candidate, field_type.placeholders) == 0:
            logger.warning(
                "%s: rejected dynamic template %r, keeping %r", self.label, candidate, self._template
            )
            return
        self._template = candidate

    def _set_state(self, new_state: InputState) -> None:
        if new_state != self._state:
            logger.debug("%s: %s -> %s", self.label, self._state, new_state)
        self._state = new_state

    def _push_validity(self) -> None:
        if self._closed or self._aggregator is None or not self.group:
            return
        self._aggregator.update(self.group, self.field_id, self.is_submission_valid)
