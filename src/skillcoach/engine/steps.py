"""Step plans: the ordered steps of one skill."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from skillcoach.core.errors import StepPlanError


class Step(BaseModel):
    """One instructed action the user must perform."""

    step_number: int = Field(ge=1, description="1-based, matches remote numbering")
    text: str = Field(description="Instruction shown to the user")
    cue: str | None = Field(default=None, description="Optional hint")
    expected_actions: list[str] = Field(
        default_factory=list,
        description="Any one of these satisfies the step; empty accepts any action",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("expected_actions", mode="after")
    @classmethod
    def _normalize(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for name in value:
            name = name.strip().lower()
            if name and name not in seen:
                seen.append(name)
        return seen

    @property
    def accepts_any(self) -> bool:
        return not self.expected_actions

    @property
    def primary_action(self) -> str:
        """Expected action reported when the user gets the step wrong."""
        return self.expected_actions[0] if self.expected_actions else "unknown"

    def expects(self, action: str) -> bool:
        return self.accepts_any or action.lower() in self.expected_actions


class PracticePlan(BaseModel):
    """Steps for one skill, as handed over by the planning collaborator."""

    skill_id: str
    steps: list[Step] = Field(min_length=1)

    @model_validator(mode="after")
    def _numbers_increase(self) -> PracticePlan:
        numbers = [step.step_number for step in self.steps]
        if numbers != sorted(set(numbers)):
            raise ValueError(f"step numbers must strictly increase, got {numbers}")
        return self


def load_plan(path: Path) -> PracticePlan:
    """Load a practice plan from YAML.

    Raises:
        StepPlanError: If the file is missing or does not describe a plan
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return PracticePlan.model_validate(data)
    except OSError as e:
        raise StepPlanError(f"Cannot read step plan {path}: {e}") from e
    except (yaml.YAMLError, ValidationError) as e:
        raise StepPlanError(f"Invalid step plan {path}: {e}") from e
