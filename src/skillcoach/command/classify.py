"""Classify command - name the mistake for an expected/actual pair."""

from pydantic import BaseModel, Field

from skillcoach.engine.classifier import classify_error


class ClassifyCommand(BaseModel):
    """Print the error category for an expected and an actual action."""

    expected: str = Field(description="Action the step asked for")
    actual: str = Field(description="Action the user performed")

    async def run_workflow(self, state: "State") -> int:  # noqa: F821
        """Returns:
            Exit code (always 0)
        """
        category = classify_error(self.expected, self.actual)
        print(category.value)
        return 0
