"""Best-effort delivery of engine records to the progress service."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from skillcoach.core.errors import NetworkError
from skillcoach.core.log import logger
from skillcoach.engine.records import CompletionRecord, ErrorRecord, InputRecord, Record
from skillcoach.telemetry.service import RemoteAttemptService


class SendReceipt:
    """Handle on one scheduled send.

    The tick loop never waits on these; callers that care can inspect
    them later or await wait().
    """

    def __init__(self, record: Record, task: asyncio.Task):
        self.record = record
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def error(self) -> NetworkError | None:
        """The delivery failure, or None if pending or delivered."""
        if not self._task.done() or self._task.cancelled():
            return None
        return self._task.result()

    @property
    def failed(self) -> bool:
        return self.error is not None

    async def wait(self) -> NetworkError | None:
        return await self._task


class TelemetryReporter:
    """Schedules record sends on the running event loop.

    A failed send is logged, appended to `failures` and passed to
    `on_error`; it is never raised into the caller and never changes
    engine state. Must be used from inside a running event loop.
    """

    def __init__(
        self,
        service: RemoteAttemptService,
        on_error: Callable[[NetworkError], None] | None = None,
    ):
        self.service = service
        self.on_error = on_error
        self.failures: list[NetworkError] = []
        self.submitted = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def send(self, record: Record) -> SendReceipt:
        """Schedule delivery of `record` and return immediately."""
        task = asyncio.get_running_loop().create_task(self._deliver(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self.submitted += 1
        return SendReceipt(record, task)

    async def drain(self) -> None:
        """Wait for every send scheduled so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _deliver(self, record: Record) -> NetworkError | None:
        operation = f"record_{record.kind}" if record.kind != "completion" else "complete_attempt"
        try:
            if isinstance(record, InputRecord):
                await self.service.record_input(
                    record.attempt_id,
                    record.step_number,
                    record.expected_action,
                    record.actual_action,
                )
            elif isinstance(record, ErrorRecord):
                await self.service.record_error(
                    record.attempt_id,
                    record.step_number,
                    record.category.value,
                    record.expected_action,
                    record.actual_action,
                )
            elif isinstance(record, CompletionRecord):
                await self.service.complete_attempt(
                    record.attempt_id,
                    record.success,
                    completion_seconds=record.completion_seconds,
                    steps_completed=record.steps_completed,
                    errors_count=record.errors_count,
                )
            else:
                raise TypeError(f"Unsupported record type {type(record).__name__}")
        except NetworkError as e:
            error = e
        except Exception as e:
            error = NetworkError(operation, f"{type(e).__name__}: {e}", record.attempt_id)
        else:
            logger.trace("Record delivered", operation=operation, attempt=record.attempt_id)
            return None

        if error.attempt_id is None:
            error.attempt_id = record.attempt_id
        logger.warn(
            "Telemetry send failed",
            operation=operation,
            attempt=record.attempt_id,
            reason=error.reason,
        )
        self.failures.append(error)
        if self.on_error is not None:
            self.on_error(error)
        return error
