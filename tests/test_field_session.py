from __future__ import annotations

import logging

import pytest

from core.config.models import EngineSettings
from core.fields.dates import ExpirationDateField
from core.fields.money import CurrencyField, PercentField
from core.fields.numeric import PhoneField
from core.fields.text import DataField, NameField
from core.orchestrator.models import InputState
from core.orchestrator.session import (
    FieldSession,
    analyze_transition,
    determine_expansion,
    process_display_text,
    should_update_processed_text,
)


class _RecordingAggregator:
    def __init__(self) -> None:
        self.updates: list[tuple[str, str, bool]] = []
        self.removals: list[tuple[str, str]] = []

    def update(self, group: str, field_id: str, is_valid: bool) -> None:
        self.updates.append((group, field_id, is_valid))

    def remove(self, group: str, field_id: str) -> None:
        self.removals.append((group, field_id))


class _NoPlaceholderTemplateField(CurrencyField):
    def dynamic_template(self, raw: str, current_template: str) -> str | None:
        return "$$.$$"


@pytest.mark.parametrize(
    ("previous", "current", "transition"),
    [
        (False, True, "gaining_focus"),
        (True, False, "losing_focus"),
        (True, True, "keeps_focus"),
        (False, False, "stays_inactive"),
    ],
)
def test_analyze_transition(previous: bool, current: bool, transition: str) -> None:
    assert analyze_transition(previous, current) == transition


def test_determine_expansion() -> None:
    assert determine_expansion("55", "555") is True
    assert determine_expansion("555", "55") is False
    assert determine_expansion("555", "556") is None


def test_should_update_processed_text() -> None:
    phone = PhoneField()

    assert should_update_processed_text("(555", "(555", phone) is False
    assert should_update_processed_text("(555", "(555)", phone) is False
    assert should_update_processed_text("(555", "(5556", phone) is True
    assert should_update_processed_text("abc", "abcd", DataField()) is True


def test_process_display_text() -> None:
    assert process_display_text("5551234567", PhoneField()) == "(555) 123-4567"
    assert process_display_text("", PhoneField()) == ""
    assert process_display_text("john smith", NameField()) == "John Smith"


def test_new_session_is_idle() -> None:
    session = FieldSession(PhoneField())

    assert session.state == InputState.idle()
    assert session.text == ""
    assert session.template == "(000) 000-0000"
    assert session.finalized is False
    assert session.is_submission_valid is True
    assert FieldSession(PhoneField(), required=True).is_submission_valid is False


def test_mount_formats_initial_text_without_leaving_idle() -> None:
    session = FieldSession(PhoneField(), "5551234567")

    assert session.text == "(555) 123-4567"
    assert session.state.phase == "idle"


def test_typing_formats_and_validates_live() -> None:
    session = FieldSession(PhoneField())
    session.set_focus(True)

    state = session.set_text("555")

    assert session.text == "(555"
    assert state.label == "focused_valid"
    assert session.is_submission_valid is False

    session.set_text("(555) 1234567")
    assert session.text == "(555) 123-4567"
    assert session.is_submission_valid is True


def test_focus_loss_finalizes_complete_value() -> None:
    session = FieldSession(PhoneField())
    session.set_focus(True)
    session.set_text("5551234567")

    transition = session.set_focus(False)

    assert transition == "losing_focus"
    assert session.finalized is True
    assert session.text == "(555) 123-4567"
    assert session.state.label == "inactive_valid"
    assert session.last_focus_loss is not None
    assert session.last_focus_loss.finalized is True


def test_focus_loss_adds_trailing_literals_then_validates_result() -> None:
    session = FieldSession(PhoneField())
    session.set_focus(True)
    session.set_text("555")

    session.set_focus(False)

    assert session.text == "(555) "
    assert session.state == InputState(phase="inactive", valid=False, message="Incomplete Phone #")
    assert session.is_submission_valid is False


def test_focus_loss_aborts_when_live_validation_fails() -> None:
    session = FieldSession(ExpirationDateField(this_year=2026))
    session.set_focus(True)
    session.set_text("13")
    assert session.state.label == "focused_invalid"

    session.set_focus(False)

    assert session.finalized is False
    assert session.text == "13"
    assert session.state.label == "inactive_invalid"
    assert session.state.message == "Invalid Month"
    assert session.last_focus_loss is not None
    assert session.last_focus_loss.finalized is False


def test_required_empty_field_reports_required_entry() -> None:
    session = FieldSession(PhoneField(), required=True)
    session.set_focus(True)
    session.set_focus(False)

    assert session.state.label == "inactive_invalid"
    assert session.state.message == "Required Entry"
    assert session.is_submission_valid is False


def test_required_message_comes_from_settings() -> None:
    settings = EngineSettings(required_message="Please fill in")
    session = FieldSession(PhoneField(), required=True, settings=settings)
    session.set_focus(True)
    session.set_focus(False)

    assert session.state.message == "Please fill in"


def test_optional_empty_field_returns_to_idle() -> None:
    session = FieldSession(PhoneField())
    session.set_focus(True)
    session.set_focus(False)

    assert session.state == InputState.idle()
    assert session.is_submission_valid is True


def test_finalized_text_is_not_reformatted_until_refocus() -> None:
    session = FieldSession(PhoneField())
    session.set_focus(True)
    session.set_text("5551234567")
    session.set_focus(False)

    session.set_text("5551239999")

    assert session.text == "5551239999"
    assert session.state.message == "Incomplete Phone #"

    session.set_focus(True)
    assert session.finalized is False
    assert session.text == "(555) 123-9999"
    assert session.state.label == "focused_valid"


def test_currency_session_grows_template_and_finalizes() -> None:
    session = FieldSession(CurrencyField())
    session.set_focus(True)

    session.set_text("1")
    assert session.text == "$1"
    session.set_text("$12")
    assert session.template == "$00.00"
    session.set_text("$125")
    assert session.text == "$125"
    assert session.template == "$000.00"

    session.set_focus(False)

    assert session.text == "$125.00"
    assert session.template == "$000.00"
    assert session.state.label == "inactive_valid"


def test_currency_session_formats_initial_amount() -> None:
    session = FieldSession(CurrencyField(), "$1,250.00")

    assert session.text == "$1250.00"
    assert session.template == "$0000.00"


def test_percent_session_adds_sign_on_focus_loss(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="maskfield.fields")
    session = FieldSession(PercentField())
    session.set_focus(True)
    session.set_text("50")
    assert session.text == "50"

    session.set_focus(False)

    assert session.text == "50.00%"
    assert session.template == "00.00%"
    assert not any(record.name == "maskfield.fields" for record in caplog.records)


def test_currency_session_keeps_typed_decimal_point() -> None:
    session = FieldSession(CurrencyField())
    session.set_focus(True)

    for key in "12.50":
        session.set_text(session.text + key)

    assert session.text == "$12.50"
    assert session.template == "$00.00"

    session.set_focus(False)

    assert session.text == "$12.50"
    assert session.state.label == "inactive_valid"


@pytest.mark.parametrize(
    ("keys", "expected"),
    [
        ("1", "$1"),
        ("1.", "$1."),
        ("1.5", "$1.5"),
        ("1.50", "$1.50"),
    ],
)
def test_currency_session_text_per_keystroke(keys: str, expected: str) -> None:
    session = FieldSession(CurrencyField())
    session.set_focus(True)
    for key in keys:
        session.set_text(session.text + key)

    assert session.text == expected


def test_currency_session_backspace_over_cents() -> None:
    session = FieldSession(CurrencyField())
    session.set_focus(True)
    session.set_text("$1.5")

    session.set_text("$1.")
    assert session.text == "$1."
    session.set_text("$1")
    assert session.text == "$1"
    session.set_text("$12")
    assert session.template == "$00.00"


def test_percent_session_keeps_typed_decimal_point(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="maskfield.fields")
    session = FieldSession(PercentField())
    session.set_focus(True)
    for key in "7.5":
        session.set_text(session.text + key)
    assert session.text == "7.5"

    session.set_focus(False)

    assert session.text == "7.50%"
    assert session.template == "0.00%"
    assert not any(record.name == "maskfield.fields" for record in caplog.records)


def test_dynamic_template_without_placeholders_is_rejected(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="maskfield.session")
    session = FieldSession(_NoPlaceholderTemplateField())
    session.set_focus(True)

    session.set_text("12")

    assert session.template == "$0.00"
    assert session.text == "$1.2"
    assert any("rejected dynamic template" in record.getMessage() for record in caplog.records)


def test_state_changes_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="maskfield.session")
    session = FieldSession(PhoneField(), field_id="phone")

    session.set_focus(True)

    messages = [record.getMessage() for record in caplog.records if record.name == "maskfield.session"]
    assert any("[phone]: idle -> focused_valid" in message for message in messages)


def test_session_pushes_validity_to_aggregator() -> None:
    aggregator = _RecordingAggregator()
    session = FieldSession(
        PhoneField(), group="contact", field_id="phone", aggregator=aggregator
    )
    assert aggregator.updates == [("contact", "phone", True)]

    session.set_focus(True)
    session.set_text("555")
    assert aggregator.updates[-1] == ("contact", "phone", False)

    session.close()
    session.close()
    assert aggregator.removals == [("contact", "phone")]

    session.set_text("5551234567")
    assert aggregator.updates[-1] == ("contact", "phone", False)


def test_session_without_group_never_touches_aggregator() -> None:
    aggregator = _RecordingAggregator()
    session = FieldSession(PhoneField(), aggregator=aggregator)
    session.set_focus(True)
    session.set_text("555")
    session.close()

    assert aggregator.updates == []
    assert aggregator.removals == []


def test_snapshot_exposes_render_state() -> None:
    session = FieldSession(PhoneField(), required=True, group="contact", field_id="phone")
    session.set_focus(True)
    session.set_text("5551234567")

    snapshot = session.snapshot()

    assert snapshot.field_id == "phone"
    assert snapshot.kind == "phone"
    assert snapshot.description == "Phone Number"
    assert snapshot.text == "(555) 123-4567"
    assert snapshot.template == "(000) 000-0000"
    assert snapshot.state == "focused_valid"
    assert snapshot.focused is True
    assert snapshot.finalized is False
    assert snapshot.submission_valid is True
    assert snapshot.field_priority == 0.7
