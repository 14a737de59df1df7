"""StartAttempt node - create the remote attempt and the sequencer."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from skillcoach.core.log import logger
from skillcoach.engine.sequencer import StepSequencer
from skillcoach.workflow.state import SessionState


@dataclass
class StartAttempt(BaseNode[SessionState]):
    """Create the attempt; the only await the session blocks on."""

    async def run(self, ctx: GraphRunContext[SessionState]) -> RunSteps:
        """Start the attempt and build its sequencer.

        BackendUnavailable propagates: no step runs without an
        attempt id.

        Returns:
            RunSteps: Start pumping ticks
        """
        state = ctx.state
        handle = await state.lifecycle.start(state.subject_id, state.skill_id)
        state.handle = handle
        state.sequencer = StepSequencer(
            state.steps,
            state.monitor,
            state.reporter,
            attempt_id=handle.attempt_id,
            config=state.engine,
            key_names=state.key_names,
            hints=state.hints,
        )
        state.lifecycle.begin(handle)
        logger.debug("Sequencer ready", attempt=handle.attempt_id, steps=len(state.steps))

        from skillcoach.workflow.nodes.run_steps import RunSteps
        return RunSteps()
