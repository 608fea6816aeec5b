"""State and snapshot models for field sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

from core.fields.models import Validation

InputPhase = Literal["idle", "focused", "inactive"]
FocusTransition = Literal["gaining_focus", "losing_focus", "keeps_focus", "stays_inactive"]
StateLabel = Literal[
    "idle", "focused_valid", "focused_invalid", "inactive_valid", "inactive_invalid"
]


@dataclass(frozen=True)
class InputState:
    """``Idle``, ``Focused(valid|invalid)`` or ``Inactive(valid|invalid)``.

    ``valid`` and ``message`` are meaningless for the idle phase.
    """

    phase: InputPhase
    valid: bool = True
    message: str = ""

    @classmethod
    def idle(cls) -> InputState:
        return cls(phase="idle")

    @classmethod
    def focused(cls, validation: Validation) -> InputState:
        return cls(phase="focused", valid=validation.ok, message="" if validation.ok else validation.error)

    @classmethod
    def inactive(cls, validation: Validation) -> InputState:
        return cls(phase="inactive", valid=validation.ok, message="" if validation.ok else validation.error)

    @property
    def is_invalid(self) -> bool:
        return self.phase != "idle" and not self.valid

    @property
    def label(self) -> StateLabel:
        if self.phase == "idle":
            return "idle"
        if self.phase == "focused":
            return "focused_valid" if self.valid else "focused_invalid"
        return "inactive_valid" if self.valid else "inactive_invalid"

    def __str__(self) -> str:
        if self.is_invalid:
            return f"{self.label}({self.message})"
        return self.label


@dataclass(frozen=True)
class FocusLossResult:
    """Outcome of the focus-loss sequence.

    ``finalized`` is false when live validation of the final reconstruction
    failed; ``text`` and ``template`` are then the unchanged session values.
    """

    finalized: bool
    text: str
    template: str
    validation: Validation


class FieldSnapshot(BaseModel):
    """Everything a rendering shell needs to draw one field."""

    model_config = ConfigDict(extra="forbid")

    field_id: str
    kind: str
    description: str
    text: str
    template: str
    placeholders: str
    state: StateLabel
    message: str = ""
    focused: bool
    finalized: bool
    required: bool
    group: str | None = None
    submission_valid: bool
    field_priority: float
