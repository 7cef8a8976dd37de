"""k8s-agent: a Kubernetes assistant that always answers in styled HTML.

A bounded generate/evaluate refinement loop drives an OpenAI-compatible
model towards a well-formed HTML answer, and a deterministic normalizer
guarantees the final output is structurally valid whatever the model
produced.
"""

from k8s_agent._version import __version__

# Core entry point
from k8s_agent.agent import Agent, AgentResponse

# Configuration
from k8s_agent.config import AgentConfig
from k8s_agent.refinement.config import RefinementConfig

# Refinement loop
from k8s_agent.refinement import (
    CollectingSink,
    Evaluation,
    RefinementEvent,
    RefinementLoop,
    RefinementResult,
    Termination,
    Verdict,
)

# Rendering
from k8s_agent.render import is_valid, markdown_to_html, normalize, render_error

# Actions
from k8s_agent.toolkit import ActionDefinition

# Exceptions
from k8s_agent.exceptions import (
    AgentError,
    ConfigError,
    GenerationExhaustedError,
    RefinementError,
    RetryExhaustedError,
)

__all__ = [
    "__version__",
    "Agent",
    "AgentResponse",
    "AgentConfig",
    "RefinementConfig",
    "RefinementLoop",
    "RefinementResult",
    "RefinementEvent",
    "CollectingSink",
    "Evaluation",
    "Termination",
    "Verdict",
    "is_valid",
    "markdown_to_html",
    "normalize",
    "render_error",
    "ActionDefinition",
    "AgentError",
    "ConfigError",
    "GenerationExhaustedError",
    "RefinementError",
    "RetryExhaustedError",
]
