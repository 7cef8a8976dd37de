"""Agent configuration.

AgentConfig holds LLM connection settings and the refinement ceilings.
It is read-only after construction and can be loaded from ``K8S_AGENT_*``
environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ValidationError

from k8s_agent.exceptions import ConfigError
from k8s_agent.llm.client import (
    DEFAULT_BASE_URL,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
)
from k8s_agent.refinement.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_ITERATIONS,
    RefinementConfig,
)

ENV_PREFIX = "K8S_AGENT_"

# field name -> environment variable suffix
_ENV_FIELDS: dict[str, str] = {
    "api_key": "OPENAI_API_KEY",
    "base_url": "OPENAI_BASE_URL",
    "model": "MODEL",
    "evaluator_model": "EVALUATOR_MODEL",
    "temperature": "TEMPERATURE",
    "connect_timeout": "CONNECT_TIMEOUT",
    "read_timeout": "READ_TIMEOUT",
    "max_tool_rounds": "MAX_TOOL_ROUNDS",
    "max_iterations": "MAX_ITERATIONS",
    "max_attempts": "MAX_ATTEMPTS",
    "base_delay": "BASE_DELAY",
}


class AgentConfig(BaseModel):
    """Settings for building an :class:`~k8s_agent.agent.Agent`."""

    model_config = {"frozen": True}

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = "gpt-4o-mini"
    evaluator_model: Optional[str] = None  # None = same as model
    temperature: Optional[float] = None
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    max_tool_rounds: int = 8
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> AgentConfig:
        """Build a config from ``K8S_AGENT_*`` variables.

        Explicit ``overrides`` win over the environment; ``None`` overrides
        are ignored so CLI options can be passed through unconditionally.

        Raises:
            ConfigError: If a variable cannot be converted to its field type.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field_name, suffix in _ENV_FIELDS.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw is not None and raw != "":
                values[field_name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid agent configuration: {exc}") from exc

    def refinement(self) -> RefinementConfig:
        """Return the loop ceilings as a :class:`RefinementConfig`."""
        return RefinementConfig(
            max_iterations=self.max_iterations,
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
        )
