"""Scripted input for headless practice runs."""

from skillcoach.replay.script import (
    InputScript,
    InputWindow,
    ScriptedActionSource,
    load_script,
)

__all__ = ["InputScript", "InputWindow", "ScriptedActionSource", "load_script"]
