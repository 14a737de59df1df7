"""Attempt identity and lifecycle."""

from skillcoach.attempt.lifecycle import (
    Attempt,
    AttemptHandle,
    AttemptLifecycleManager,
    AttemptState,
)

__all__ = ["Attempt", "AttemptHandle", "AttemptLifecycleManager", "AttemptState"]
