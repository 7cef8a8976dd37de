"""ActionExecutor: dispatches model-requested calls to action handlers.

Provides a single ``execute()`` method that looks up the action by name,
invokes its handler with the provided arguments, and returns a structured
``ActionResult``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from k8s_agent.toolkit.models import ActionDefinition, ActionResult

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Dispatches action calls to their handlers and returns structured results.

    Usage::

        executor = ActionExecutor(actions)
        result = executor.execute("list_pods", {"namespace": "default"})
        if result.success:
            print(result.output)
        else:
            print(result.error)
    """

    def __init__(self, actions: Iterable[ActionDefinition] = ()) -> None:
        self._actions: dict[str, ActionDefinition] = {}
        for action in actions:
            self._actions[action.name] = action

    def execute(self, action_name: str, arguments: dict) -> ActionResult:
        """Execute an action by name with the given arguments.

        Handler exceptions are captured in the result, never raised.

        Args:
            action_name: Name of the action to execute.
            arguments: Dict of arguments matching the action's parameter schema.

        Returns:
            ActionResult with success/failure status and output/error.
        """
        action = self._actions.get(action_name)
        if action is None:
            return ActionResult(
                action_name=action_name,
                success=False,
                error=f"Unknown action: {action_name}",
            )
        try:
            result = action.handler(**arguments)
            return ActionResult(
                action_name=action_name,
                success=True,
                output=str(result),
            )
        except Exception as exc:
            logger.debug("Action %s failed: %s", action_name, exc, exc_info=True)
            return ActionResult(
                action_name=action_name,
                success=False,
                error=f"{type(exc).__name__}: {exc}",
            )

    def available_actions(self) -> list[str]:
        """Return the names of all registered actions."""
        return list(self._actions.keys())

    def to_openai(self) -> list[dict]:
        """Return every registered action in OpenAI function-calling format."""
        return [action.to_openai() for action in self._actions.values()]
