"""Continuous-hold accumulation for one step."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from skillcoach.core.log import logger

# Clock values are floats summed tick by tick
HOLD_EPSILON = 1e-9


@dataclass
class HoldState:
    """Action being held and when the hold began."""

    action: str | None = None
    started_at: float = 0.0

    @property
    def holding(self) -> bool:
        return self.action is not None


class HoldTracker:
    """Idle / Holding(action, start) state machine.

    - Idle -> Holding(a, now) when an expected action `a` is active.
    - Holding(a) stays put while `a` is still active, even if other
      expected actions are also active.
    - Holding(a) -> Holding(b, now) when `a` is released but another
      expected action `b` is active. Progress made under `a` is lost.
    - Holding -> Idle when no expected action is active.
    """

    def __init__(self, expected: Iterable[str]):
        self.expected = tuple(name.lower() for name in expected)
        self.state = HoldState()

    @property
    def action(self) -> str | None:
        return self.state.action

    @property
    def holding(self) -> bool:
        return self.state.holding

    def elapsed(self, now: float) -> float:
        if not self.state.holding:
            return 0.0
        return max(0.0, now - self.state.started_at)

    def reset(self) -> None:
        self.state = HoldState()

    def update(self, active: Sequence[str], now: float) -> float:
        """Advance one tick given the expected actions active now.

        Returns:
            Seconds the current action has been held continuously
        """
        active = [name.lower() for name in active if name.lower() in self.expected]

        if not active:
            if self.state.holding:
                logger.debug(
                    "Hold released, resetting",
                    action=self.state.action,
                    held=round(self.elapsed(now), 3),
                )
                self.reset()
            return 0.0

        if self.state.holding and self.state.action in active:
            return self.elapsed(now)

        if self.state.holding:
            logger.debug(
                "Hold switched, restarting",
                previous=self.state.action,
                action=active[0],
                held=round(self.elapsed(now), 3),
            )
        self.state = HoldState(action=active[0], started_at=now)
        return 0.0

    def reached(self, required: float, now: float) -> bool:
        """Return True if the current hold has lasted `required` seconds."""
        return self.state.holding and self.elapsed(now) + HOLD_EPSILON >= required
