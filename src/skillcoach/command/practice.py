"""Practice command - replay an input script through one attempt."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from skillcoach.core.errors import BackendUnavailable, StepPlanError
from skillcoach.core.log import logger
from skillcoach.engine.actions import ActionMonitor
from skillcoach.engine.clock import SimulatedClock
from skillcoach.engine.steps import load_plan
from skillcoach.replay.script import ScriptedActionSource, load_script
from skillcoach.session import CoachSession
from skillcoach.telemetry.http import HttpAttemptService
from skillcoach.telemetry.service import InMemoryAttemptService

if TYPE_CHECKING:
    from skillcoach.core.config import State


class PracticeCommand(BaseModel):
    """Run one practice attempt from a step plan and an input script.

    The script is replayed against a simulated clock, so a run takes as
    long as the engine needs to evaluate it, not as long as the script
    lasts. Records go to the configured progress service unless
    --offline is given.
    """

    steps: Path = Field(description="YAML step plan (skill_id and steps)")
    script: Path = Field(description="YAML input script (timed action windows)")
    offline: bool = Field(
        default=False,
        description="Record to an in-memory service instead of the backend",
    )
    skill: str | None = Field(
        default=None,
        description="Override the skill id from the step plan",
    )
    subject: str | None = Field(
        default=None,
        description="Override config.backend.subject_id",
    )

    async def run_workflow(self, state: State) -> int:
        """Run the practice workflow.

        Returns:
            Exit code (0=success, 1=attempt failed, 2=could not start)
        """
        practice = state.runtime.practice
        config = state.config

        try:
            plan = load_plan(self.steps)
            script = load_script(self.script)
        except StepPlanError as e:
            logger.error("Cannot load practice input", reason=str(e))
            practice.status = "unavailable"
            return 2

        skill_id = self.skill or plan.skill_id
        subject_id = self.subject or config.backend.subject_id

        clock = SimulatedClock()
        source = ScriptedActionSource(script, clock)
        monitor = ActionMonitor.from_source(source, config.actions)
        unknown = sorted(
            {action for step in plan.steps for action in step.expected_actions}
            - set(monitor.actions)
        )
        if unknown:
            logger.warn("Step plan uses unconfigured actions", actions=unknown)

        if self.offline:
            service = InMemoryAttemptService()
        else:
            service = HttpAttemptService(config.backend)

        session = CoachSession(
            monitor,
            service,
            engine=config.engine,
            key_names=config.key_names(),
            hints=config.action_hints(),
            clock=clock,
        )
        watchdog = None
        if config.engine.step_timeout_seconds <= 0:
            # Without a step timeout a script that never finishes the
            # steps would run forever
            deadline = script.duration + config.engine.base_hold_seconds + 1.0
            watchdog = asyncio.create_task(_stop_after(session, clock, deadline))

        practice.status = "running"
        try:
            summary = await session.run(subject_id, skill_id, plan.steps)
        except BackendUnavailable as e:
            logger.error("Progress service unavailable", reason=e.reason)
            practice.status = "unavailable"
            return 2
        finally:
            if watchdog is not None:
                watchdog.cancel()
            await service.close()

        practice.attempt_id = summary.attempt_id
        practice.summary = summary
        practice.status = "complete" if summary.success else "failed"

        print(
            f"{summary.skill_id}: {summary.outcome.value} "
            f"({summary.steps_completed}/{summary.total_steps} steps, "
            f"{summary.errors_count} errors, {summary.elapsed_seconds:.2f}s)"
        )
        if summary.telemetry_failures:
            print(f"warning: {summary.telemetry_failures} records failed to send")
        return 0 if summary.success else 1


async def _stop_after(session: CoachSession, clock, deadline: float) -> None:
    while clock.now() < deadline:
        await asyncio.sleep(0)
    logger.warn("Script exhausted, stopping", deadline=deadline)
    session.stop()
