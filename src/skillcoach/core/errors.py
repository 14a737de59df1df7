"""Exception taxonomy for the coaching engine.

Wrong input and timeout are step outcomes, not exceptions: they are
reported through SequenceOutcome. Only conditions that stop a caller
from proceeding, or that a caller must be told about, are raised.
"""

from __future__ import annotations


class CoachError(Exception):
    """Base class for all skillcoach errors."""


class BackendUnavailable(CoachError):
    """The remote service did not hand out a usable attempt id.

    Fatal to the session: no step sequencing begins without an id to
    label records with.
    """

    def __init__(self, subject_id: str, skill_id: str, reason: str):
        self.subject_id = subject_id
        self.skill_id = skill_id
        self.reason = reason
        super().__init__(
            f"Cannot start attempt for subject '{subject_id}' on skill "
            f"'{skill_id}': {reason}"
        )


class NetworkError(CoachError):
    """A telemetry record could not be delivered.

    Advisory only. The local state machine never rolls back because
    of one of these.
    """

    def __init__(self, operation: str, reason: str, attempt_id: str | None = None):
        self.operation = operation
        self.reason = reason
        self.attempt_id = attempt_id
        super().__init__(f"{operation} failed: {reason}")


class AttemptStateError(CoachError):
    """An attempt lifecycle transition that is not allowed."""


class StepPlanError(CoachError):
    """A step plan or input script could not be loaded."""


__all__ = [
    "CoachError",
    "BackendUnavailable",
    "NetworkError",
    "AttemptStateError",
    "StepPlanError",
]
