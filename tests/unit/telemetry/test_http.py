"""Tests for the aiohttp progress service client."""

import asyncio

import pytest
from aiohttp import test_utils, web

from skillcoach.core.config import BackendConfig
from skillcoach.core.errors import NetworkError
from skillcoach.telemetry.http import HttpAttemptService


def make_app(received):
    async def start_attempt(request):
        received.append(("start", request.match_info["user"], request.match_info["skill"]))
        return web.json_response({"attempt_id": "att-42"})

    async def record_input(request):
        received.append(("input", request.match_info["attempt"], await request.json()))
        return web.json_response({"ok": True})

    async def record_error(request):
        received.append(("error", request.match_info["attempt"], await request.json()))
        return web.json_response({"ok": True})

    async def complete(request):
        received.append(("complete", request.match_info["attempt"], await request.json()))
        return web.Response(status=500, text="database down")

    app = web.Application()
    app.router.add_post("/user/{user}/skill/{skill}/start-attempt", start_attempt)
    app.router.add_post("/attempt/{attempt}/record-input", record_input)
    app.router.add_post("/attempt/{attempt}/record-error", record_error)
    app.router.add_post("/attempt/{attempt}/complete", complete)
    return app


def test_endpoints_and_payloads():
    received = []

    async def scenario():
        server = test_utils.TestServer(make_app(received))
        await server.start_server()
        service = HttpAttemptService(BackendConfig(base_url=str(server.make_url("/"))))
        try:
            attempt_id = await service.start_attempt("user-1", "basic_driving")
            await service.record_input(attempt_id, 1, "move_forward", "move_forward")
            await service.record_error(attempt_id, 2, "wrong_direction", "move_forward", "move_backward")
            with pytest.raises(NetworkError, match="HTTP 500"):
                await service.complete_attempt(
                    attempt_id, False, completion_seconds=3.14159, steps_completed=1, errors_count=1
                )
        finally:
            await service.close()
            await server.close()
        return attempt_id

    attempt_id = asyncio.run(scenario())

    assert attempt_id == "att-42"
    assert received == [
        ("start", "user-1", "basic_driving"),
        ("input", "att-42", {
            "step_number": 1,
            "expected_input": "move_forward",
            "actual_input": "move_forward",
        }),
        ("error", "att-42", {
            "step_number": 2,
            "error_type": "wrong_direction",
            "expected_action": "move_forward",
            "actual_action": "move_backward",
        }),
        ("complete", "att-42", {
            "success": False,
            "completion_time": 3.142,
            "steps_completed": 1,
            "errors_count": 1,
        }),
    ]


def test_connection_failure_is_network_error():
    async def scenario():
        # Nothing listens on port 9 (discard) on a test machine
        service = HttpAttemptService(BackendConfig(base_url="http://127.0.0.1:9", timeout_seconds=2.0))
        try:
            with pytest.raises(NetworkError) as exc_info:
                await service.start_attempt("u", "s")
        finally:
            await service.close()
        return exc_info.value

    error = asyncio.run(scenario())
    assert error.operation == "start_attempt"
