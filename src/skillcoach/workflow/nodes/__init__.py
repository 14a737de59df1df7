"""Workflow nodes for the coaching session graph."""

from skillcoach.workflow.nodes.finish_attempt import FinishAttempt
from skillcoach.workflow.nodes.run_steps import RunSteps
from skillcoach.workflow.nodes.start_attempt import StartAttempt

__all__ = [
    "StartAttempt",
    "RunSteps",
    "FinishAttempt",
]
