"""Tests for loaded configuration and runtime state."""

import pytest
from pydantic import ValidationError

from skillcoach.core.config import ActionBinding, Config, EngineConfig


def test_package_defaults(test_config):
    engine = test_config.engine
    assert engine.base_hold_seconds == 1.0
    assert engine.cumulative_hold is True
    assert engine.cumulative_hold_multiplier == 2.0
    assert engine.step_timeout_seconds == 15.0
    assert engine.release_settle_seconds == 0.1
    assert engine.record_errors is True
    assert engine.wrong_input_policy == "fail"
    assert test_config.backend.base_url == "http://localhost:8000"


def test_default_key_names(test_config):
    assert test_config.key_names() == {
        "move_forward": "W",
        "move_backward": "S",
        "turn_left": "A",
        "turn_right": "D",
        "pop_casters": "X",
        "brake": "SPACE",
    }


def test_default_action_hints(test_config):
    hints = test_config.action_hints()
    assert hints["move_forward"] == "Press W"
    assert hints["brake"] == "Press SPACE"


def test_actions_without_hint_are_left_out(tmp_path):
    config = Config(
        log_root=tmp_path,
        actions={"brake": ActionBinding(key="SPACE"), "turn_left": ActionBinding(key="A", hint="Press A")},
    )
    assert config.action_hints() == {"turn_left": "Press A"}


def test_runtime_starts_pending(test_state):
    assert test_state.runtime.practice.status == "pending"
    assert test_state.runtime.practice.attempt_id is None


def test_action_names_are_lowercased(tmp_path):
    config = Config(
        log_root=tmp_path,
        actions={"Brake": ActionBinding(key="SPACE")},
    )
    assert config.key_names() == {"brake": "SPACE"}


def test_unknown_wrong_input_policy_rejected():
    with pytest.raises(ValidationError):
        EngineConfig(wrong_input_policy="ignore")


def test_negative_hold_rejected():
    with pytest.raises(ValidationError):
        EngineConfig(base_hold_seconds=-1.0)
