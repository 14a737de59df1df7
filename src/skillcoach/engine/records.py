"""Telemetry records emitted by the engine.

Records are immutable. Once handed to the reporter nothing local keeps
them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from skillcoach.engine.classifier import ErrorCategory


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InputRecord(BaseModel):
    """How a step was resolved: the satisfying hold, or the first
    disqualifying wrong input."""

    kind: Literal["input"] = "input"
    attempt_id: str
    step_number: int
    expected_action: str
    actual_action: str
    success: bool
    hold_seconds: float = 0.0
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = ConfigDict(frozen=True)


class ErrorRecord(BaseModel):
    """Classified wrong input."""

    kind: Literal["error"] = "error"
    attempt_id: str
    step_number: int
    category: ErrorCategory
    expected_action: str
    actual_action: str
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = ConfigDict(frozen=True)


class CompletionRecord(BaseModel):
    """Terminal record; exactly one per attempt."""

    kind: Literal["completion"] = "completion"
    attempt_id: str
    success: bool
    completion_seconds: float = 0.0
    steps_completed: int = 0
    errors_count: int = 0
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = ConfigDict(frozen=True)


Record = InputRecord | ErrorRecord | CompletionRecord
