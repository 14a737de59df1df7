"""Semantic categories for wrong inputs."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    WRONG_DIRECTION = "wrong_direction"
    WRONG_TURN_DIRECTION = "wrong_turn_direction"
    STOPPED_INSTEAD_OF_MOVING = "stopped_instead_of_moving"
    MOVED_INSTEAD_OF_STOPPING = "moved_instead_of_stopping"
    MISSED_POP_CASTERS = "missed_pop_casters"
    WRONG_INPUT = "wrong_input"

    @property
    def label(self) -> str:
        """Human-readable form, e.g. 'wrong turn direction'."""
        return self.value.replace("_", " ")


_MOVES = frozenset({"move_forward", "move_backward", "turn_left", "turn_right"})

# (matches(expected, actual), category); first match wins
_RULES = (
    (lambda e, a: (e, a) in {("move_forward", "move_backward"),
                             ("move_backward", "move_forward")},
     ErrorCategory.WRONG_DIRECTION),
    (lambda e, a: (e, a) in {("turn_left", "turn_right"),
                             ("turn_right", "turn_left")},
     ErrorCategory.WRONG_TURN_DIRECTION),
    (lambda e, a: e in _MOVES and a == "brake",
     ErrorCategory.STOPPED_INSTEAD_OF_MOVING),
    (lambda e, a: e == "brake" and a in _MOVES,
     ErrorCategory.MOVED_INSTEAD_OF_STOPPING),
    (lambda e, a: e == "pop_casters" and a != "pop_casters",
     ErrorCategory.MISSED_POP_CASTERS),
)


def classify_error(expected: str, actual: str) -> ErrorCategory:
    """Map an (expected, actual) action pair to an error category.

    Comparison is case-insensitive. Pairs no rule covers are plain
    WRONG_INPUT.
    """
    expected = (expected or "").lower()
    actual = (actual or "").lower()
    for matches, category in _RULES:
        if matches(expected, actual):
            return category
    return ErrorCategory.WRONG_INPUT
