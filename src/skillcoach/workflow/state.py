"""Runtime state shared by the session workflow nodes."""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import ConfigDict, Field

from skillcoach.core.base import BaseState
from skillcoach.core.config import EngineConfig
from skillcoach.core.result import SequenceOutcome
from skillcoach.engine.steps import Step


class SessionState(BaseState):
    """One coaching session (mutates while the graph runs)."""

    subject_id: str
    skill_id: str
    steps: list[Step]
    engine: EngineConfig = Field(default_factory=EngineConfig)
    key_names: dict[str, str] = Field(default_factory=dict)
    hints: dict[str, str] = Field(default_factory=dict)

    monitor: Any = Field(description="ActionMonitor queried every tick")
    lifecycle: Any = Field(description="AttemptLifecycleManager")
    reporter: Any = Field(description="TelemetryReporter")
    clock: Any = Field(description="Clock with now() and async pause()")
    stop: asyncio.Event = Field(
        default_factory=asyncio.Event,
        description="Set to cancel the session at the next tick",
    )

    handle: Any = Field(default=None, description="AttemptHandle once started")
    sequencer: Any = Field(default=None, description="StepSequencer once started")
    outcome: SequenceOutcome | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)
