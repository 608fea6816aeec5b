"""Engine settings model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Tunables loaded from YAML."""

    model_config = ConfigDict(extra="forbid")

    year_window: int = Field(default=12, ge=0)
    required_message: str = Field(default="Required Entry", min_length=1)
    group_batch_delay_seconds: float = Field(default=0.1, ge=0)
    group_stale_after_seconds: float = Field(default=300.0, gt=0)
    group_cleanup_interval_seconds: float = Field(default=30.0, gt=0)
