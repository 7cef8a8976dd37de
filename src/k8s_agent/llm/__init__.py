"""LLM client infrastructure for k8s-agent.

Provides an OpenAI-compatible HTTP client, pluggable client/capability
protocols, and the LLM-backed generation and evaluation capabilities.
"""

from k8s_agent.llm.capabilities import LLMEvaluator, LLMGenerator
from k8s_agent.llm.client import OpenAIClient
from k8s_agent.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from k8s_agent.llm.protocols import (
    EvaluationCapability,
    GenerationCapability,
    LLMClient,
)

__all__ = [
    "OpenAIClient",
    "LLMClient",
    "GenerationCapability",
    "EvaluationCapability",
    "LLMGenerator",
    "LLMEvaluator",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
