"""Clocks that drive the tick loop."""

from __future__ import annotations

import asyncio
import time


class MonotonicClock:
    """Wall-clock ticks for live sessions."""

    def now(self) -> float:
        return time.monotonic()

    async def pause(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class SimulatedClock:
    """Clock that only moves when paused.

    Elapsed time is rounded to the nanosecond on every advance so long
    runs do not drift from repeated float addition.
    """

    def __init__(self, start: float = 0.0):
        self.start = start
        self._elapsed = 0.0

    def now(self) -> float:
        return self.start + self._elapsed

    def advance(self, seconds: float) -> None:
        self._elapsed = round(self._elapsed + seconds, 9)

    async def pause(self, seconds: float) -> None:
        self.advance(seconds)
        # Let scheduled telemetry tasks run between ticks
        await asyncio.sleep(0)
