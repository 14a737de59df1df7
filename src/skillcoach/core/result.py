"""Value objects for session outcomes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class SequenceOutcome(str, Enum):
    """Where a step sequence stands after a tick."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_WRONG_INPUT = "failed_wrong_input"
    FAILED_TIMEOUT = "failed_timeout"
    ABANDONED = "abandoned"

    @property
    def finished(self) -> bool:
        return self is not SequenceOutcome.RUNNING

    @property
    def success(self) -> bool:
        return self is SequenceOutcome.SUCCEEDED


class AttemptSummary(BaseModel):
    """Result of one practice attempt."""

    attempt_id: str
    skill_id: str
    outcome: SequenceOutcome
    steps_completed: int
    total_steps: int
    errors_count: int
    elapsed_seconds: float
    telemetry_failures: int = 0

    @property
    def success(self) -> bool:
        """Return True if every step was completed."""
        return self.outcome.success
