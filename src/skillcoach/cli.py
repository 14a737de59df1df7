#!/usr/bin/env python3
"""skillcoach CLI - step-by-step skill practice with progress tracking."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from skillcoach.command.classify import ClassifyCommand
from skillcoach.command.practice import PracticeCommand
from skillcoach.core.config import State
from skillcoach.core.log import logger


class CliState(State):
    """Coach a user through a skill one held action at a time.

    Each step names the actions that satisfy it and how long one of
    them must be held. Wrong inputs are classified (wrong direction,
    stopped instead of moving, ...) and every attempt is recorded with
    the progress service.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.engine.base_hold_seconds 2)
    2. skillcoach.yaml in the current directory, then --include files
    3. .env file
    4. Environment variables
       (SKILLCOACH_CONFIG__BACKEND__BASE_URL=http://host:8000)
    """

    practice: CliSubCommand[PracticeCommand]
    classify: CliSubCommand[ClassifyCommand]

    def cli_cmd(self):
        """Dispatch to active subcommand, or show help if none
        provided."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        with logger:
            exit_code = asyncio.run(subcommand.run_workflow(self))
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
