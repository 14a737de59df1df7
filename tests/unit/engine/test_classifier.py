"""Tests for wrong-input classification."""

import pytest

from skillcoach.engine.classifier import ErrorCategory, classify_error


@pytest.mark.parametrize(
    "expected,actual,category",
    [
        ("move_forward", "move_backward", ErrorCategory.WRONG_DIRECTION),
        ("move_backward", "move_forward", ErrorCategory.WRONG_DIRECTION),
        ("turn_left", "turn_right", ErrorCategory.WRONG_TURN_DIRECTION),
        ("turn_right", "turn_left", ErrorCategory.WRONG_TURN_DIRECTION),
        ("move_forward", "brake", ErrorCategory.STOPPED_INSTEAD_OF_MOVING),
        ("turn_left", "brake", ErrorCategory.STOPPED_INSTEAD_OF_MOVING),
        ("brake", "move_backward", ErrorCategory.MOVED_INSTEAD_OF_STOPPING),
        ("brake", "turn_right", ErrorCategory.MOVED_INSTEAD_OF_STOPPING),
        ("pop_casters", "move_forward", ErrorCategory.MISSED_POP_CASTERS),
        ("pop_casters", "brake", ErrorCategory.MISSED_POP_CASTERS),
        ("move_forward", "turn_left", ErrorCategory.WRONG_INPUT),
        ("brake", "pop_casters", ErrorCategory.WRONG_INPUT),
        ("unknown", "brake", ErrorCategory.WRONG_INPUT),
    ],
)
def test_classification_table(expected, actual, category):
    assert classify_error(expected, actual) is category


def test_comparison_ignores_case():
    assert classify_error("Move_Forward", "MOVE_BACKWARD") is ErrorCategory.WRONG_DIRECTION


def test_label_is_readable():
    assert ErrorCategory.WRONG_TURN_DIRECTION.label == "wrong turn direction"
