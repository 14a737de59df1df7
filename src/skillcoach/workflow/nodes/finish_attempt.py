"""FinishAttempt node - close the attempt with its outcome."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, End, GraphRunContext

from skillcoach.core.result import SequenceOutcome
from skillcoach.workflow.state import SessionState


@dataclass
class FinishAttempt(BaseNode[SessionState, None, SequenceOutcome]):
    """Send the completion record for the attempt."""

    outcome: SequenceOutcome

    async def run(self, ctx: GraphRunContext[SessionState]) -> End[SequenceOutcome]:
        state = ctx.state
        sequencer = state.sequencer
        state.lifecycle.finish(
            state.handle,
            self.outcome.success,
            abandoned=self.outcome is SequenceOutcome.ABANDONED,
            completion_seconds=sequencer.elapsed_seconds,
            steps_completed=sequencer.steps_completed,
            errors_count=sequencer.errors_count,
        )
        state.outcome = self.outcome
        return End(self.outcome)
