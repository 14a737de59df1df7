"""Tests for scripted input replay."""

import pytest
from pydantic import ValidationError

from skillcoach.core.errors import StepPlanError
from skillcoach.engine.clock import SimulatedClock
from skillcoach.replay.script import InputScript, InputWindow, ScriptedActionSource, load_script


def test_window_is_half_open():
    window = InputWindow(action="Brake", start=1.0, end=2.0)

    assert window.action == "brake"
    assert window.covers(1.0)
    assert window.covers(1.999)
    assert not window.covers(2.0)


def test_window_must_end_after_start():
    with pytest.raises(ValidationError):
        InputWindow(action="brake", start=2.0, end=2.0)


def test_source_follows_clock():
    clock = SimulatedClock(start=100.0)
    script = InputScript(windows=[
        InputWindow(action="move_forward", start=0.5, end=1.5),
        InputWindow(action="brake", start=1.0, end=2.0),
    ])
    source = ScriptedActionSource(script, clock)

    assert not source.is_active("move_forward")
    clock.advance(0.5)
    assert source.is_active("MOVE_FORWARD")
    clock.advance(0.5)
    assert source.is_active("move_forward") and source.is_active("brake")
    clock.advance(0.5)
    assert not source.is_active("move_forward")
    assert script.duration == 2.0


def test_load_script(tmp_path):
    path = tmp_path / "script.yaml"
    path.write_text("""
windows:
  - {action: turn_left, start: 0.25, end: 1.5}
""")

    script = load_script(path)

    assert script.active_at(0.25) == {"turn_left"}


def test_load_script_invalid(tmp_path):
    path = tmp_path / "script.yaml"
    path.write_text("windows:\n  - {action: brake, start: 3, end: 1}\n")

    with pytest.raises(StepPlanError, match="Invalid input script"):
        load_script(path)
