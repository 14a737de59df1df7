"""CLI command modules for skillcoach."""

from skillcoach.command.classify import ClassifyCommand
from skillcoach.command.practice import PracticeCommand

__all__ = ["ClassifyCommand", "PracticeCommand"]
