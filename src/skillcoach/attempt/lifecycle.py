"""Attempt identity and lifecycle.

Created -> Running -> Succeeded | Failed | Abandoned. Terminal states
are final. Every attempt gets exactly one completion record, whichever
way the session ends.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from skillcoach.core.errors import AttemptStateError, BackendUnavailable
from skillcoach.core.log import logger
from skillcoach.engine.records import CompletionRecord
from skillcoach.telemetry.reporter import SendReceipt, TelemetryReporter
from skillcoach.telemetry.service import RemoteAttemptService


class AttemptState(str, Enum):
    CREATED = "created"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABANDONED = "abandoned"

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset({AttemptState.SUCCEEDED, AttemptState.FAILED, AttemptState.ABANDONED})

_ALLOWED = {
    AttemptState.CREATED: {AttemptState.RUNNING, AttemptState.FAILED, AttemptState.ABANDONED},
    AttemptState.RUNNING: {AttemptState.SUCCEEDED, AttemptState.FAILED, AttemptState.ABANDONED},
}


class AttemptHandle(BaseModel):
    """What callers hold on to for an attempt."""

    attempt_id: str
    subject_id: str
    skill_id: str

    model_config = ConfigDict(frozen=True)


class Attempt(BaseModel):
    """One end-to-end run through a skill's steps."""

    handle: AttemptHandle
    state: AttemptState = AttemptState.CREATED
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def attempt_id(self) -> str:
        return self.handle.attempt_id


class AttemptLifecycleManager:
    """Owns attempts for one coaching session.

    At most one attempt is active (Created or Running) at a time.
    """

    def __init__(self, service: RemoteAttemptService, reporter: TelemetryReporter):
        self.service = service
        self.reporter = reporter
        self._attempts: dict[str, Attempt] = {}
        self._active: Attempt | None = None

    @property
    def active(self) -> Attempt | None:
        return self._active

    @property
    def attempts(self) -> list[Attempt]:
        """Every attempt started by this manager, oldest first."""
        return list(self._attempts.values())

    def get(self, handle: AttemptHandle) -> Attempt:
        return self._attempts[handle.attempt_id]

    async def start(self, subject_id: str, skill_id: str) -> AttemptHandle:
        """Create an attempt on the remote service.

        Raises:
            AttemptStateError: If another attempt is still active
            BackendUnavailable: If no usable attempt id comes back
        """
        if self._active is not None:
            raise AttemptStateError(
                f"Attempt {self._active.attempt_id} is still "
                f"{self._active.state.value}; finish it first"
            )

        try:
            attempt_id = await self.service.start_attempt(subject_id, skill_id)
        except Exception as e:
            logger.error(
                "Failed to start attempt",
                subject=subject_id,
                skill=skill_id,
                reason=str(e),
            )
            raise BackendUnavailable(subject_id, skill_id, str(e)) from e

        if not attempt_id:
            logger.error("Backend returned no attempt id", subject=subject_id, skill=skill_id)
            raise BackendUnavailable(subject_id, skill_id, "no attempt id in response")

        if attempt_id in self._attempts:
            raise BackendUnavailable(
                subject_id, skill_id, f"attempt id '{attempt_id}' was already used"
            )

        handle = AttemptHandle(attempt_id=attempt_id, subject_id=subject_id, skill_id=skill_id)
        attempt = Attempt(handle=handle)
        self._attempts[attempt_id] = attempt
        self._active = attempt
        logger.info("Attempt started", attempt=attempt_id, subject=subject_id, skill=skill_id)
        return handle

    def begin(self, handle: AttemptHandle) -> None:
        """Mark the attempt Running once sequencing starts."""
        self._transition(self.get(handle), AttemptState.RUNNING)

    def finish(
        self,
        handle: AttemptHandle,
        success: bool,
        *,
        abandoned: bool = False,
        completion_seconds: float = 0.0,
        steps_completed: int = 0,
        errors_count: int = 0,
    ) -> SendReceipt | None:
        """Move the attempt to its terminal state and send the one
        completion record.

        A second call for the same attempt is logged and ignored.
        """
        attempt = self.get(handle)
        if attempt.state.terminal:
            logger.warn(
                "Attempt already finished, ignoring",
                attempt=attempt.attempt_id,
                state=attempt.state.value,
            )
            return None

        if success:
            new_state = AttemptState.SUCCEEDED
        elif abandoned:
            new_state = AttemptState.ABANDONED
        else:
            new_state = AttemptState.FAILED
        self._transition(attempt, new_state)
        attempt.finished_at = datetime.now(UTC)
        if self._active is attempt:
            self._active = None

        logger.info(
            "Attempt finished",
            attempt=attempt.attempt_id,
            state=new_state.value,
            steps_completed=steps_completed,
            errors=errors_count,
        )
        return self.reporter.send(CompletionRecord(
            attempt_id=attempt.attempt_id,
            success=success,
            completion_seconds=completion_seconds,
            steps_completed=steps_completed,
            errors_count=errors_count,
        ))

    def abandon_active(self, **stats) -> SendReceipt | None:
        """Teardown guard: abandon whatever attempt is still active."""
        if self._active is None:
            return None
        logger.warn("Abandoning active attempt on teardown", attempt=self._active.attempt_id)
        return self.finish(self._active.handle, False, abandoned=True, **stats)

    def _transition(self, attempt: Attempt, new_state: AttemptState) -> None:
        if new_state not in _ALLOWED.get(attempt.state, ()):
            raise AttemptStateError(
                f"Attempt {attempt.attempt_id} cannot go from "
                f"{attempt.state.value} to {new_state.value}"
            )
        attempt.state = new_state
