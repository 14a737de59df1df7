"""Pytest configuration and fixtures for skillcoach tests."""

import sys
import tempfile
from pathlib import Path

import pytest

from skillcoach.core.log import ConsoleSink, setup_logger
from skillcoach.engine.actions import ActionMonitor, HeldKeys

WHEELCHAIR_ACTIONS = (
    "move_forward",
    "move_backward",
    "turn_left",
    "turn_right",
    "pop_casters",
    "brake",
)


def use_test_logger():
    """Console-only logging at debug level.

    Debug output shows up in failing test reports without sending
    anything to logfire.dev.
    """
    test_log_root = Path(tempfile.gettempdir()) / "skillcoach-tests"
    setup_logger(
        log_root=test_log_root,
        session_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    use_test_logger()


@pytest.fixture
def keys():
    """Held keys with nothing pressed."""
    return HeldKeys()


@pytest.fixture
def monitor(keys):
    """Monitor over the standard wheelchair actions, backed by `keys`."""
    return ActionMonitor.from_source(keys, WHEELCHAIR_ACTIONS)


class RecordingReporter:
    """Stands in for TelemetryReporter in synchronous engine tests."""

    def __init__(self):
        self.records = []

    def send(self, record):
        self.records.append(record)

    def of_kind(self, kind):
        return [r for r in self.records if r.kind == kind]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def test_state():
    """Load a full State without CLI parsing conflicts.

    sys.argv is swapped out so pydantic-settings does not try to parse
    pytest's own arguments.
    """
    from skillcoach.core.config import State

    old_argv = sys.argv
    sys.argv = ['skillcoach']

    try:
        state = State()
    finally:
        sys.argv = old_argv

    # Loading State set up the logger from the package defaults
    use_test_logger()
    yield state
    use_test_logger()


@pytest.fixture
def test_config(test_state):
    return test_state.config
