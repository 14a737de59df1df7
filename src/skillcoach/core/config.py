"""Application state and configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from skillcoach.core.base import BaseConfig, BaseState
from skillcoach.core.log import Logger
from skillcoach.core.yaml_settings import YamlWithIncludesSettingsSource

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================


class EngineConfig(BaseConfig):
    """Step validation thresholds and policies."""

    base_hold_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Continuous hold required to satisfy a step",
    )
    cumulative_hold: bool = Field(
        default=True,
        description=(
            "Multiply the required hold when a step expects the action "
            "that satisfied the previous step"
        ),
    )
    cumulative_hold_multiplier: float = Field(
        default=2.0,
        ge=1.0,
        description="Factor applied to base_hold_seconds by cumulative_hold",
    )
    step_timeout_seconds: float = Field(
        default=15.0,
        ge=0.0,
        description="Seconds a step may stay unresolved (0 disables)",
    )
    release_settle_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description=(
            "Quiet period after every action is released before a new "
            "step starts monitoring"
        ),
    )
    tick_seconds: float = Field(
        default=1.0 / 60.0,
        gt=0.0,
        description="Interval between monitoring ticks",
    )
    record_errors: bool = Field(
        default=True,
        description="Send an error record for every wrong input",
    )
    wrong_input_policy: Literal["fail", "retry"] = Field(
        default="fail",
        description=(
            "'fail' ends the attempt on the first wrong input; 'retry' "
            "records it and lets the user try the step again"
        ),
    )


class BackendConfig(BaseConfig):
    """Remote progress service."""

    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the progress service",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Per-request timeout",
    )
    subject_id: str = Field(
        default="anonymous",
        description="User the attempts are recorded for",
    )


class ActionBinding(BaseConfig):
    """How one logical action is presented to the user."""

    key: str = Field(description="Key or button name shown in hints")
    hint: str | None = Field(
        default=None,
        description="Longer instruction, e.g. 'Press W'",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance",
    )
    engine: EngineConfig = Field(
        default_factory=EngineConfig,
        description="Step validation settings",
    )
    backend: BackendConfig = Field(
        default_factory=BackendConfig,
        description="Progress service settings",
    )
    actions: dict[str, ActionBinding] = Field(
        default_factory=dict,
        description="Known logical actions and their key names",
    )
    session_name: str = Field(
        default="practice",
        description="Name used for the log directory and service name",
    )
    log_root: Path = Field(
        default_factory=lambda: Path(platformdirs.user_state_dir("skillcoach", appauthor=False)),
        description="Root directory for all log files",
    )

    @field_validator("actions", mode="after")
    @classmethod
    def _lowercase_action_names(cls, value: dict[str, ActionBinding]) -> dict[str, ActionBinding]:
        return {name.lower(): binding for name, binding in value.items()}

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Configure the global logger once the config is loaded."""
        from skillcoach.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger()

        setup_logger(
            log_root=self.log_root,
            session_name=self.session_name,
            console=self.logger.console,
            file=self.logger.file,
            logfire=self.logger.logfire,
            level=self.logger.level,
        )
        return self

    def key_names(self) -> dict[str, str]:
        """Action name -> key name, for input hints."""
        return {name: binding.key for name, binding in self.actions.items()}

    def action_hints(self) -> dict[str, str]:
        """Action name -> instruction hint, for actions that have one."""
        return {
            name: binding.hint for name, binding in self.actions.items() if binding.hint
        }

    def close(self):
        """Close the global logger, then the other children."""
        from skillcoach.core.log import logger
        if logger is not None:
            logger.close()
        super().close()


# ============================================================
# RUNTIME STATE MODELS (mutable while a command runs)
# ============================================================


class PracticeState(BaseState):
    """Practice command runtime state."""

    status: str = Field(
        default="pending",
        description="pending, running, complete, failed, unavailable",
    )
    attempt_id: str | None = Field(
        default=None,
        description="Attempt id handed out by the progress service",
    )
    summary: Any = Field(
        default=None,
        description="AttemptSummary of the finished attempt",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Runtime(BaseModel):
    """All runtime state organized by command."""

    practice: PracticeState = Field(
        default_factory=PracticeState,
        description="Practice command runtime state",
    )


# ============================================================
# STATE (config + runtime combined)
# ============================================================


class State(BaseSettings):
    """Complete application state: configuration and runtime."""

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates while a command runs)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file="skillcoach.yaml",
        env_file=".env",
        env_prefix="SKILLCOACH_",
        env_nested_delimiter="__",
        cli_parse_args=True,
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority, highest first: init args, YAML, .env, environment,
        file secrets."""
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


__all__ = [
    "ActionBinding",
    "BackendConfig",
    "Config",
    "EngineConfig",
    "State",
    "BaseConfig",
    "BaseState",
]
