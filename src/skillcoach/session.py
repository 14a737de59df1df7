"""Coaching session: wires the engine parts together and runs one attempt."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence

from skillcoach.attempt.lifecycle import AttemptLifecycleManager
from skillcoach.core.config import EngineConfig
from skillcoach.core.errors import AttemptStateError, NetworkError
from skillcoach.core.log import logger
from skillcoach.core.result import AttemptSummary, SequenceOutcome
from skillcoach.engine.actions import ActionMonitor
from skillcoach.engine.clock import MonotonicClock
from skillcoach.engine.sequencer import CoachView
from skillcoach.engine.steps import Step
from skillcoach.telemetry.reporter import TelemetryReporter
from skillcoach.telemetry.service import RemoteAttemptService
from skillcoach.workflow.graph import create_session_graph
from skillcoach.workflow.state import SessionState


class CoachSession:
    """Runs practice attempts for one user, one at a time.

    Explicitly constructed with its collaborators; whatever drives the
    host loop holds on to the instance.
    """

    def __init__(
        self,
        monitor: ActionMonitor,
        service: RemoteAttemptService,
        *,
        engine: EngineConfig | None = None,
        key_names: Mapping[str, str] | None = None,
        hints: Mapping[str, str] | None = None,
        clock=None,
        on_error: Callable[[NetworkError], None] | None = None,
    ):
        self.monitor = monitor
        self.service = service
        self.engine = engine or EngineConfig()
        self.key_names = dict(key_names or {})
        self.hints = dict(hints or {})
        self.clock = clock or MonotonicClock()
        self.reporter = TelemetryReporter(service, on_error=on_error)
        self.lifecycle = AttemptLifecycleManager(service, self.reporter)
        self._state: SessionState | None = None
        self._stop = asyncio.Event()
        self._in_run = False

    @property
    def view(self) -> CoachView:
        """What a UI should show right now."""
        if self._state is None or self._state.sequencer is None:
            return CoachView()
        return self._state.sequencer.view

    @property
    def running(self) -> bool:
        return self._in_run or self.lifecycle.active is not None

    def stop(self) -> None:
        """Cancel the running attempt at the top of the next tick."""
        self._stop.set()

    async def run(self, subject_id: str, skill_id: str, steps: Sequence[Step]) -> AttemptSummary:
        """Run one attempt to completion.

        Raises:
            BackendUnavailable: If the attempt could not be created
            AttemptStateError: If this session already has an attempt running
        """
        if self.running:
            raise AttemptStateError(
                "An attempt is already running in this session; "
                "stop it before starting another"
            )
        self._stop.clear()
        state = SessionState(
            subject_id=subject_id,
            skill_id=skill_id,
            steps=list(steps),
            engine=self.engine,
            key_names=self.key_names,
            hints=self.hints,
            monitor=self.monitor,
            lifecycle=self.lifecycle,
            reporter=self.reporter,
            clock=self.clock,
            stop=self._stop,
        )
        self._state = state

        from skillcoach.workflow.nodes.start_attempt import StartAttempt

        graph = create_session_graph()
        self._in_run = True
        try:
            with logger.span("Practice attempt", subject=subject_id, skill=skill_id):
                async with graph.iter(StartAttempt(), state=state) as run:
                    async for _node in run:
                        pass
        finally:
            # Cancellation or an unexpected error must not leave the
            # attempt Running
            if self._owns_active(state):
                sequencer = state.sequencer
                if sequencer is not None:
                    sequencer.abandon()
                    state.outcome = SequenceOutcome.ABANDONED
                self.lifecycle.abandon_active(**self._stats(state))
            try:
                await self.reporter.drain()
            finally:
                self._in_run = False

        sequencer = state.sequencer
        return AttemptSummary(
            attempt_id=state.handle.attempt_id,
            skill_id=skill_id,
            outcome=state.outcome,
            steps_completed=sequencer.steps_completed,
            total_steps=len(state.steps),
            errors_count=sequencer.errors_count,
            elapsed_seconds=sequencer.elapsed_seconds,
            telemetry_failures=len(self.reporter.failures),
        )

    def _owns_active(self, state: SessionState) -> bool:
        """True while the attempt started by `state` is still active."""
        active = self.lifecycle.active
        return (
            active is not None
            and state.handle is not None
            and active.attempt_id == state.handle.attempt_id
        )

    @staticmethod
    def _stats(state: SessionState) -> dict:
        sequencer = state.sequencer
        if sequencer is None:
            return {}
        return {
            "completion_seconds": sequencer.elapsed_seconds,
            "steps_completed": sequencer.steps_completed,
            "errors_count": sequencer.errors_count,
        }
