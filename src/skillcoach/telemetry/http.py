"""aiohttp client for the progress service REST API."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from skillcoach.core.config import BackendConfig
from skillcoach.core.errors import NetworkError
from skillcoach.core.log import logger


class HttpAttemptService:
    """RemoteAttemptService over HTTP/JSON.

    Endpoints:
        POST /user/{subject}/skill/{skill}/start-attempt -> {"attempt_id"}
        POST /attempt/{id}/record-input
        POST /attempt/{id}/record-error
        POST /attempt/{id}/complete
    """

    def __init__(self, config: BackendConfig):
        self.base_url = config.base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def _post(self, operation: str, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        logger.trace("POST", url=url, operation=operation)
        try:
            session = await self._get_session()
            async with session.post(url, json=data) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise NetworkError(operation, f"HTTP {response.status}: {body[:200]}")
                if response.content_type == "application/json":
                    return await response.json()
                return {}
        except aiohttp.ClientError as e:
            raise NetworkError(operation, f"{type(e).__name__}: {e}") from e
        except asyncio.TimeoutError as e:
            raise NetworkError(operation, "request timed out") from e

    async def start_attempt(self, subject_id: str, skill_id: str) -> str:
        result = await self._post(
            "start_attempt",
            f"/user/{subject_id}/skill/{skill_id}/start-attempt",
            {},
        )
        return str(result.get("attempt_id") or "")

    async def record_input(self, attempt_id, step_number, expected_action, actual_action) -> None:
        await self._post("record_input", f"/attempt/{attempt_id}/record-input", {
            "step_number": step_number,
            "expected_input": expected_action,
            "actual_input": actual_action,
        })

    async def record_error(
        self, attempt_id, step_number, error_category, expected_action, actual_action
    ) -> None:
        await self._post("record_error", f"/attempt/{attempt_id}/record-error", {
            "step_number": step_number,
            "error_type": error_category,
            "expected_action": expected_action,
            "actual_action": actual_action,
        })

    async def complete_attempt(
        self,
        attempt_id,
        success,
        *,
        completion_seconds=0.0,
        steps_completed=0,
        errors_count=0,
    ) -> None:
        await self._post("complete_attempt", f"/attempt/{attempt_id}/complete", {
            "success": success,
            "completion_time": round(completion_seconds, 3),
            "steps_completed": steps_completed,
            "errors_count": errors_count,
        })
