"""Step validation engine: actions, holds, classification, sequencing."""

from skillcoach.engine.actions import ActionMonitor, ActionSource, HeldKeys
from skillcoach.engine.classifier import ErrorCategory, classify_error
from skillcoach.engine.clock import MonotonicClock, SimulatedClock
from skillcoach.engine.hold import HoldTracker
from skillcoach.engine.records import CompletionRecord, ErrorRecord, InputRecord, Record
from skillcoach.engine.sequencer import CoachView, StepPhase, StepSequencer
from skillcoach.engine.steps import PracticePlan, Step, load_plan

__all__ = [
    "ActionMonitor",
    "ActionSource",
    "CoachView",
    "CompletionRecord",
    "ErrorCategory",
    "ErrorRecord",
    "HeldKeys",
    "HoldTracker",
    "InputRecord",
    "MonotonicClock",
    "PracticePlan",
    "Record",
    "SimulatedClock",
    "Step",
    "StepPhase",
    "StepSequencer",
    "classify_error",
    "load_plan",
]
