"""Agent toolkit: LLM-consumable action definitions.

Provides action definitions and an executor that expose domain
operations (e.g. cluster inspection) as function-calling schemas for the
generation model. The actions themselves are supplied by the caller.
"""

from k8s_agent.toolkit.executor import ActionExecutor
from k8s_agent.toolkit.models import ActionCall, ActionDefinition, ActionResult

__all__ = [
    "ActionCall",
    "ActionDefinition",
    "ActionExecutor",
    "ActionResult",
]
