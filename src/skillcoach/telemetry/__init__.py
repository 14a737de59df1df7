"""Delivery of attempt records to the progress service."""

from skillcoach.telemetry.http import HttpAttemptService
from skillcoach.telemetry.reporter import SendReceipt, TelemetryReporter
from skillcoach.telemetry.service import InMemoryAttemptService, RemoteAttemptService

__all__ = [
    "HttpAttemptService",
    "InMemoryAttemptService",
    "RemoteAttemptService",
    "SendReceipt",
    "TelemetryReporter",
]
