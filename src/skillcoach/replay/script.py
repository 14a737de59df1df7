"""Input scripts: which actions are held, and when.

A script is a list of windows, each holding one action from `start`
(inclusive) to `end` (exclusive), in seconds since the script began.
Used to drive the engine without a keyboard, from the CLI or tests.

Example YAML:

    windows:
      - {action: move_forward, start: 0.2, end: 1.4}
      - {action: move_forward, start: 1.6, end: 3.8}
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from skillcoach.core.errors import StepPlanError
from skillcoach.core.log import logger


class InputWindow(BaseModel):
    """One action held over a time window."""

    action: str
    start: float = Field(ge=0.0)
    end: float

    @field_validator("action", mode="after")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _ordered(self) -> InputWindow:
        if self.end <= self.start:
            raise ValueError(
                f"window for '{self.action}' ends at {self.end} "
                f"before it starts at {self.start}"
            )
        return self

    def covers(self, t: float) -> bool:
        return self.start <= t < self.end


class InputScript(BaseModel):
    windows: list[InputWindow] = Field(default_factory=list)

    @property
    def duration(self) -> float:
        return max((w.end for w in self.windows), default=0.0)

    def active_at(self, t: float) -> set[str]:
        return {w.action for w in self.windows if w.covers(t)}


class ScriptedActionSource:
    """ActionSource that replays an InputScript against a clock.

    Script time zero is the clock reading when the source is created.
    """

    def __init__(self, script: InputScript, clock):
        self.script = script
        self.clock = clock
        self.origin = clock.now()

    def elapsed(self) -> float:
        return self.clock.now() - self.origin

    def is_active(self, name: str) -> bool:
        return name.lower() in self.script.active_at(self.elapsed())


def load_script(path: Path) -> InputScript:
    """Load an input script from YAML.

    Raises:
        StepPlanError: If the file is missing or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        script = InputScript.model_validate(data)
    except OSError as e:
        raise StepPlanError(f"Cannot read input script {path}: {e}") from e
    except (yaml.YAMLError, ValidationError) as e:
        raise StepPlanError(f"Invalid input script {path}: {e}") from e

    logger.debug("Loaded input script", path=str(path), windows=len(script.windows))
    return script
