"""Logical action queries.

The host input layer decides what "move_forward is active" means (a
key held down, a joystick past a threshold, a replayed script). The
engine only sees named boolean predicates.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Protocol, runtime_checkable

ActionPredicate = Callable[[], bool]


@runtime_checkable
class ActionSource(Protocol):
    """Host-side query for whether a logical action is asserted."""

    def is_active(self, name: str) -> bool:
        ...


class ActionMonitor:
    """Explicit mapping of action name to predicate.

    Names are case-insensitive. Unknown names are never active. Order
    of registration is kept: it decides which wrong input is reported
    when several are asserted in the same tick.
    """

    def __init__(self, checks: Mapping[str, ActionPredicate]):
        self._checks: dict[str, ActionPredicate] = {
            name.lower(): predicate for name, predicate in checks.items()
        }

    @classmethod
    def from_source(cls, source: ActionSource, names: Iterable[str]) -> ActionMonitor:
        """Build a monitor that asks `source` about each of `names`."""
        return cls({
            name: (lambda n=name: source.is_active(n))
            for name in names
        })

    @property
    def actions(self) -> tuple[str, ...]:
        """All known action names, in registration order."""
        return tuple(self._checks)

    def knows(self, name: str) -> bool:
        return name.lower() in self._checks

    def is_active(self, name: str) -> bool:
        """Return True if `name` is known and currently asserted."""
        predicate = self._checks.get(name.lower())
        return predicate is not None and bool(predicate())

    def active_actions(self) -> list[str]:
        """Every known action asserted right now."""
        return [name for name, predicate in self._checks.items() if predicate()]

    def any_active(self) -> bool:
        return any(predicate() for predicate in self._checks.values())


class HeldKeys:
    """ActionSource backed by a mutable set of held action names.

    Handy for hosts that receive press/release events, and for tests.
    """

    def __init__(self, *held: str):
        self._held = {name.lower() for name in held}

    def press(self, *names: str) -> None:
        self._held.update(name.lower() for name in names)

    def release(self, *names: str) -> None:
        if not names:
            self._held.clear()
            return
        self._held.difference_update(name.lower() for name in names)

    def is_active(self, name: str) -> bool:
        return name.lower() in self._held
