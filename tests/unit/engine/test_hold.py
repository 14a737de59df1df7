"""Tests for continuous-hold tracking."""

from skillcoach.engine.hold import HoldTracker


def test_idle_until_expected_action_is_active():
    tracker = HoldTracker(["move_forward"])

    assert tracker.update([], 0.0) == 0.0
    assert not tracker.holding
    assert tracker.update(["brake"], 0.5) == 0.0
    assert not tracker.holding


def test_hold_accumulates_while_action_stays_active():
    tracker = HoldTracker(["move_forward"])

    tracker.update(["move_forward"], 1.0)
    assert tracker.action == "move_forward"
    assert tracker.update(["move_forward"], 1.5) == 0.5
    assert tracker.update(["move_forward"], 2.0) == 1.0
    assert tracker.reached(1.0, 2.0)
    assert not tracker.reached(1.25, 2.0)


def test_release_resets_progress():
    tracker = HoldTracker(["move_forward"])

    tracker.update(["move_forward"], 0.0)
    tracker.update(["move_forward"], 0.75)
    assert tracker.update([], 1.0) == 0.0
    assert not tracker.holding

    tracker.update(["move_forward"], 1.25)
    assert tracker.update(["move_forward"], 1.5) == 0.25


def test_switch_restarts_from_zero():
    tracker = HoldTracker(["move_forward", "move_backward"])

    tracker.update(["move_forward"], 0.0)
    tracker.update(["move_forward"], 0.5)
    assert tracker.update(["move_backward"], 0.75) == 0.0
    assert tracker.action == "move_backward"
    assert tracker.update(["move_backward"], 1.0) == 0.25


def test_held_action_wins_over_newly_pressed_alternative():
    tracker = HoldTracker(["move_forward", "move_backward"])

    tracker.update(["move_forward"], 0.0)
    assert tracker.update(["move_backward", "move_forward"], 0.5) == 0.5
    assert tracker.action == "move_forward"


def test_reset_discards_hold():
    tracker = HoldTracker(["brake"])
    tracker.update(["brake"], 0.0)

    tracker.reset()

    assert tracker.elapsed(10.0) == 0.0
    assert not tracker.reached(0.0, 10.0)
