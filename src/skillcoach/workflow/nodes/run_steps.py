"""RunSteps node - pump the tick loop until the sequence resolves."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from skillcoach.core.log import logger
from skillcoach.core.result import SequenceOutcome
from skillcoach.workflow.state import SessionState


@dataclass
class RunSteps(BaseNode[SessionState]):
    """Tick the sequencer once per time step."""

    async def run(self, ctx: GraphRunContext[SessionState]) -> FinishAttempt:
        """Returns:
            FinishAttempt: With the sequence outcome, or ABANDONED when
            a stop was requested
        """
        state = ctx.state
        sequencer = state.sequencer
        tick_seconds = state.engine.tick_seconds

        while True:
            if state.stop.is_set():
                logger.warn("Stop requested", attempt=state.handle.attempt_id)
                outcome = sequencer.abandon()
                break

            outcome = sequencer.tick(state.clock.now())
            if outcome is not SequenceOutcome.RUNNING:
                break

            await state.clock.pause(tick_seconds)

        from skillcoach.workflow.nodes.finish_attempt import FinishAttempt
        return FinishAttempt(outcome=outcome)
