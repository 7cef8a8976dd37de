"""Toolkit data models for agent action definitions.

Frozen dataclasses for action definitions, model-requested calls, and
execution results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class ActionDefinition:
    """A single action the generation model may call.

    Attributes:
        name: Action name (e.g. "list_pods").
        description: Human-readable description of when/why to use this action.
        parameters: JSON Schema dict describing action parameters.
        handler: Callable that executes the action.
    """

    name: str
    description: str
    parameters: dict
    handler: Callable[..., object]

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class ActionCall:
    """An action invocation requested by the model."""

    id: str
    name: str
    arguments: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ActionResult:
    """Structured result from executing an action.

    Attributes:
        action_name: Name of the action that was executed.
        success: Whether execution succeeded.
        output: String output on success.
        error: Error message on failure.
    """

    action_name: str
    success: bool
    output: str = ""
    error: str = ""

    def as_message_content(self) -> str:
        """Render the result as the content of a ``tool`` chat message."""
        if self.success:
            return self.output
        return f"Error: {self.error}"
