"""Remote progress service interface and an in-memory implementation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from skillcoach.core.errors import NetworkError


@runtime_checkable
class RemoteAttemptService(Protocol):
    """Transport-agnostic view of the progress backend.

    Every method raises on failure; callers decide whether that is
    fatal (start_attempt) or advisory (everything else).
    """

    async def start_attempt(self, subject_id: str, skill_id: str) -> str:
        """Create an attempt and return its id."""
        ...

    async def record_input(
        self,
        attempt_id: str,
        step_number: int,
        expected_action: str,
        actual_action: str,
    ) -> None:
        ...

    async def record_error(
        self,
        attempt_id: str,
        step_number: int,
        error_category: str,
        expected_action: str,
        actual_action: str,
    ) -> None:
        ...

    async def complete_attempt(
        self,
        attempt_id: str,
        success: bool,
        *,
        completion_seconds: float = 0.0,
        steps_completed: int = 0,
        errors_count: int = 0,
    ) -> None:
        ...

    async def close(self) -> None:
        ...


@dataclass
class StoredAttempt:
    """Everything the in-memory backend knows about one attempt."""

    attempt_id: str
    subject_id: str
    skill_id: str
    inputs: list[dict[str, Any]] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)
    completions: list[dict[str, Any]] = field(default_factory=list)


class InMemoryAttemptService:
    """Progress backend that keeps records in process.

    Used for offline practice and tests. `fail_operations` names
    operations (start_attempt, record_input, record_error,
    complete_attempt) that raise NetworkError instead of storing.
    """

    def __init__(self, fail_operations: set[str] | None = None):
        self.fail_operations = set(fail_operations or ())
        self.attempts: dict[str, StoredAttempt] = {}
        self.calls: list[tuple[str, str | None]] = []

    def _check(self, operation: str, attempt_id: str | None = None) -> None:
        self.calls.append((operation, attempt_id))
        if operation in self.fail_operations:
            raise NetworkError(operation, "injected failure", attempt_id)

    def _attempt(self, attempt_id: str) -> StoredAttempt:
        try:
            return self.attempts[attempt_id]
        except KeyError:
            raise NetworkError("lookup", f"unknown attempt '{attempt_id}'", attempt_id) from None

    async def start_attempt(self, subject_id: str, skill_id: str) -> str:
        self._check("start_attempt")
        attempt_id = uuid.uuid4().hex
        self.attempts[attempt_id] = StoredAttempt(attempt_id, subject_id, skill_id)
        return attempt_id

    async def record_input(self, attempt_id, step_number, expected_action, actual_action) -> None:
        self._check("record_input", attempt_id)
        self._attempt(attempt_id).inputs.append({
            "step_number": step_number,
            "expected_input": expected_action,
            "actual_input": actual_action,
        })

    async def record_error(
        self, attempt_id, step_number, error_category, expected_action, actual_action
    ) -> None:
        self._check("record_error", attempt_id)
        self._attempt(attempt_id).errors.append({
            "step_number": step_number,
            "error_type": error_category,
            "expected_action": expected_action,
            "actual_action": actual_action,
        })

    async def complete_attempt(
        self,
        attempt_id,
        success,
        *,
        completion_seconds=0.0,
        steps_completed=0,
        errors_count=0,
    ) -> None:
        self._check("complete_attempt", attempt_id)
        self._attempt(attempt_id).completions.append({
            "success": success,
            "completion_time": completion_seconds,
            "steps_completed": steps_completed,
            "errors_count": errors_count,
        })

    async def close(self) -> None:
        pass
