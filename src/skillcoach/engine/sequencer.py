"""Tick-driven step sequencing.

Each step goes Pending -> AwaitingRelease -> Monitoring and ends in
Succeeded, FailedWrongInput or FailedTimeout. The host pumps tick(now)
once per time step; nothing here blocks or awaits.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from skillcoach.core.config import EngineConfig
from skillcoach.core.log import logger
from skillcoach.core.result import SequenceOutcome
from skillcoach.engine.actions import ActionMonitor
from skillcoach.engine.classifier import classify_error
from skillcoach.engine.hold import HOLD_EPSILON, HoldTracker
from skillcoach.engine.records import ErrorRecord, InputRecord
from skillcoach.engine.steps import Step

if TYPE_CHECKING:
    from skillcoach.telemetry.reporter import TelemetryReporter


class StepPhase(str, Enum):
    PENDING = "pending"
    AWAITING_RELEASE = "awaiting_release"
    MONITORING = "monitoring"
    SUCCEEDED = "succeeded"
    FAILED_WRONG_INPUT = "failed_wrong_input"
    FAILED_TIMEOUT = "failed_timeout"


COMPLETED_TEXT = "Tutorial completed! Well done!"


@dataclass(frozen=True)
class CoachView:
    """Read-only snapshot for whatever renders the session."""

    step_number: int | None = None
    step_index: int = 0
    total_steps: int = 0
    instruction: str = ""
    cue: str = ""
    input_hint: str = ""
    action_hint: str = ""
    hold_elapsed: float = 0.0
    hold_required: float = 0.0
    feedback: str = ""

    @property
    def hold_fraction(self) -> float:
        if self.hold_required <= 0:
            return 1.0 if self.hold_elapsed > 0 else 0.0
        return min(1.0, self.hold_elapsed / self.hold_required)

    @property
    def hold_text(self) -> str:
        if self.hold_elapsed <= 0:
            return ""
        return f"Hold: {self.hold_elapsed:.1f}s / {self.hold_required:.1f}s"


class StepSequencer:
    """Runs the step list of one attempt against live action state."""

    def __init__(
        self,
        steps: Sequence[Step],
        monitor: ActionMonitor,
        reporter: TelemetryReporter,
        *,
        attempt_id: str,
        config: EngineConfig | None = None,
        key_names: Mapping[str, str] | None = None,
        hints: Mapping[str, str] | None = None,
    ):
        if not steps:
            raise ValueError("A step sequence needs at least one step")
        self.steps = list(steps)
        self.monitor = monitor
        self.reporter = reporter
        self.attempt_id = attempt_id
        self.config = config or EngineConfig()
        self.key_names = {k.lower(): v for k, v in (key_names or {}).items()}
        self.hints = {k.lower(): v for k, v in (hints or {}).items()}

        self._index = 0
        self._phase = StepPhase.PENDING
        self._outcome = SequenceOutcome.RUNNING
        self._hold = HoldTracker(())
        self._required_hold = 0.0
        self._hold_elapsed = 0.0
        self._previous_action: str | None = None
        self._quiet_since: float | None = None
        self._step_started_at: float | None = None
        self._first_tick_at: float | None = None
        self._last_tick_at: float | None = None
        self._feedback = ""
        self.steps_completed = 0
        self.errors_count = 0

    # ---- observables -------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def phase(self) -> StepPhase:
        return self._phase

    @property
    def outcome(self) -> SequenceOutcome:
        return self._outcome

    @property
    def finished(self) -> bool:
        return self._outcome.finished

    @property
    def current_step(self) -> Step | None:
        if self._index < len(self.steps):
            return self.steps[self._index]
        return None

    @property
    def required_hold(self) -> float:
        return self._required_hold

    @property
    def previous_action(self) -> str | None:
        """Action that satisfied the most recently completed step."""
        return self._previous_action

    @property
    def hold(self) -> HoldTracker:
        return self._hold

    @property
    def elapsed_seconds(self) -> float:
        if self._first_tick_at is None or self._last_tick_at is None:
            return 0.0
        return self._last_tick_at - self._first_tick_at

    @property
    def view(self) -> CoachView:
        step = self.current_step
        if step is None or self._outcome is SequenceOutcome.SUCCEEDED:
            return CoachView(
                step_index=self._index,
                total_steps=len(self.steps),
                feedback=self._feedback,
            )
        return CoachView(
            step_number=step.step_number,
            step_index=self._index,
            total_steps=len(self.steps),
            instruction=step.text,
            cue=step.cue or "",
            input_hint=self.input_hint(step, self._required_hold),
            action_hint=self.action_hint(step),
            hold_elapsed=self._hold_elapsed,
            hold_required=self._required_hold,
            feedback=self._feedback,
        )

    # ---- policy -------------------------------------------------------

    def required_hold_for(self, step: Step) -> float:
        """Base hold, multiplied when the step expects the action that
        satisfied the previous step."""
        base = self.config.base_hold_seconds
        if (
            self.config.cumulative_hold
            and self._previous_action is not None
            and self._previous_action in step.expected_actions
        ):
            return base * self.config.cumulative_hold_multiplier
        return base

    def input_hint(self, step: Step, required: float) -> str:
        if step.accepts_any:
            keys = "any key"
        else:
            keys = " OR ".join(
                self.key_names.get(action, action) for action in step.expected_actions
            )
        return f"Hold {keys} for {required:.1f}s"

    def action_hint(self, step: Step) -> str:
        """Configured hints for the expected actions, e.g. "Press W OR Press S"."""
        return " OR ".join(
            self.hints[action] for action in step.expected_actions if action in self.hints
        )

    # ---- tick loop ----------------------------------------------------

    def tick(self, now: float) -> SequenceOutcome:
        """Evaluate one time step."""
        if self._outcome.finished:
            return self._outcome

        if self._first_tick_at is None:
            self._first_tick_at = now
        self._last_tick_at = now

        if self._phase in (StepPhase.PENDING, StepPhase.SUCCEEDED):
            self._activate()

        if self._phase is StepPhase.AWAITING_RELEASE:
            if not self._released(now):
                return self._outcome
            self._phase = StepPhase.MONITORING
            if self._step_started_at is None:
                self._step_started_at = now
            logger.debug("Monitoring step", step=self.current_step.step_number)

        return self._monitor(now)

    def abandon(self) -> SequenceOutcome:
        """Stop where we are; the current step is not completed."""
        if not self._outcome.finished:
            logger.warn(
                "Step sequence abandoned",
                step=getattr(self.current_step, "step_number", None),
            )
            self._outcome = SequenceOutcome.ABANDONED
            self._feedback = "Attempt cancelled"
            self._hold.reset()
            self._hold_elapsed = 0.0
        return self._outcome

    def _activate(self) -> None:
        step = self.current_step
        self._required_hold = self.required_hold_for(step)
        self._hold = HoldTracker(step.expected_actions or self.monitor.actions)
        self._hold_elapsed = 0.0
        self._quiet_since = None
        self._step_started_at = None
        self._phase = StepPhase.AWAITING_RELEASE
        logger.info(
            "Step {step} activated",
            step=step.step_number,
            instruction=step.text,
            expected=list(step.expected_actions),
            required_hold=self._required_hold,
        )
        if step.cue:
            logger.debug("Step cue", step=step.step_number, cue=step.cue)
        hint = self.action_hint(step)
        if hint:
            logger.debug("Step hint", step=step.step_number, hint=hint)

    def _released(self, now: float) -> bool:
        """Debounce barrier: nothing asserted for the settle period."""
        if self.monitor.any_active():
            self._quiet_since = None
            return False
        if self._quiet_since is None:
            self._quiet_since = now
        return now - self._quiet_since + HOLD_EPSILON >= self.config.release_settle_seconds

    def _monitor(self, now: float) -> SequenceOutcome:
        step = self.current_step
        timeout = self.config.step_timeout_seconds
        if timeout > 0 and now - self._step_started_at > timeout:
            return self._fail_timeout(step, now)

        # Wrong input wins over a hold completing in the same tick
        active = self.monitor.active_actions()
        wrong = next((name for name in active if not step.expects(name)), None)
        if wrong is not None:
            return self._wrong_input(step, wrong)

        self._hold_elapsed = self._hold.update(active, now)
        if self._hold.reached(self._required_hold, now):
            return self._succeed(step)
        logger.spew(
            "Hold progress",
            step=step.step_number,
            action=self._hold.action,
            elapsed=self._hold_elapsed,
        )
        return self._outcome

    def _succeed(self, step: Step) -> SequenceOutcome:
        action = self._hold.action
        self.reporter.send(InputRecord(
            attempt_id=self.attempt_id,
            step_number=step.step_number,
            expected_action=action,
            actual_action=action,
            success=True,
            hold_seconds=self._hold_elapsed,
        ))
        logger.info(
            "Step {step} complete",
            step=step.step_number,
            action=action,
            held=round(self._hold_elapsed, 3),
        )

        self._previous_action = action
        self.steps_completed += 1
        self._index += 1
        self._hold.reset()
        self._hold_elapsed = 0.0
        self._phase = StepPhase.SUCCEEDED

        if self._index >= len(self.steps):
            self._outcome = SequenceOutcome.SUCCEEDED
            self._feedback = COMPLETED_TEXT
            logger.info("All steps complete", steps=len(self.steps))
        else:
            self._feedback = f"Step {step.step_number} complete"
        return self._outcome

    def _wrong_input(self, step: Step, actual: str) -> SequenceOutcome:
        expected = step.primary_action
        category = classify_error(expected, actual)
        self.errors_count += 1
        logger.warn(
            "Wrong input",
            step=step.step_number,
            expected=expected,
            actual=actual,
            category=category.value,
        )

        self.reporter.send(InputRecord(
            attempt_id=self.attempt_id,
            step_number=step.step_number,
            expected_action=expected,
            actual_action=actual,
            success=False,
        ))
        if self.config.record_errors:
            self.reporter.send(ErrorRecord(
                attempt_id=self.attempt_id,
                step_number=step.step_number,
                category=category,
                expected_action=expected,
                actual_action=actual,
            ))

        self._feedback = f"Wrong input: {category.label}"
        self._hold.reset()
        self._hold_elapsed = 0.0

        if self.config.wrong_input_policy == "retry":
            # The wrong action has to be let go before the step resumes
            self._phase = StepPhase.AWAITING_RELEASE
            self._quiet_since = None
            return self._outcome

        self._phase = StepPhase.FAILED_WRONG_INPUT
        self._outcome = SequenceOutcome.FAILED_WRONG_INPUT
        return self._outcome

    def _fail_timeout(self, step: Step, now: float) -> SequenceOutcome:
        logger.warn(
            "Step timed out",
            step=step.step_number,
            waited=round(now - self._step_started_at, 3),
            timeout=self.config.step_timeout_seconds,
        )
        self._hold.reset()
        self._hold_elapsed = 0.0
        self._feedback = f"Time is up for step {step.step_number}"
        self._phase = StepPhase.FAILED_TIMEOUT
        self._outcome = SequenceOutcome.FAILED_TIMEOUT
        return self._outcome
