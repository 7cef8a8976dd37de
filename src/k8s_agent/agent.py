"""Agent: the invoke entry point.

Runs the refinement loop for one request, normalizes whatever it
produced, and turns any unrecoverable failure into the error fragment.
``invoke`` never raises and always returns structurally valid HTML.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from k8s_agent.refinement.events import (
    INVOKE_FAILED,
    EventSink,
    RefinementEvent,
    emit,
    log_event,
)
from k8s_agent.refinement.loop import RefinementLoop
from k8s_agent.render.normalize import normalize, render_error

if TYPE_CHECKING:
    from k8s_agent.config import AgentConfig
    from k8s_agent.llm.protocols import EvaluationCapability, GenerationCapability
    from k8s_agent.refinement.config import RefinementConfig
    from k8s_agent.refinement.models import RefinementResult
    from k8s_agent.toolkit.models import ActionDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentResponse:
    """Outcome of one request.

    Attributes:
        html: The normalized response (always structurally valid).
        failed: True when ``html`` is the error fragment.
        result: The loop result, or None when the run failed.
    """

    html: str
    failed: bool = False
    result: RefinementResult | None = None


class Agent:
    """Kubernetes assistant producing styled HTML answers.

    Usage::

        agent = Agent.from_config(AgentConfig.from_env(), actions=my_actions)
        html = agent.invoke("List the pods in the payments namespace")
    """

    def __init__(
        self,
        generator: GenerationCapability,
        evaluator: EvaluationCapability,
        *,
        config: RefinementConfig | None = None,
        actions: Sequence[ActionDefinition] = (),
        on_event: EventSink | None = log_event,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._on_event = on_event
        self._loop = RefinementLoop(
            generator,
            evaluator,
            config=config,
            actions=actions,
            on_event=on_event,
            sleep=sleep,
        )

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        *,
        actions: Sequence[ActionDefinition] = (),
        on_event: EventSink | None = log_event,
    ) -> Agent:
        """Build an agent backed by the OpenAI-compatible HTTP client.

        Raises:
            LLMConfigError: If no API key is configured.
        """
        from k8s_agent.llm.capabilities import LLMEvaluator, LLMGenerator
        from k8s_agent.llm.client import OpenAIClient

        # Single transport attempt: the loop owns retries.
        client = OpenAIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            default_model=config.model,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            max_retries=1,
        )
        generator = LLMGenerator(
            client,
            model=config.model,
            temperature=config.temperature,
            max_tool_rounds=config.max_tool_rounds,
        )
        evaluator = LLMEvaluator(
            client,
            model=config.evaluator_model or config.model,
            temperature=config.temperature,
        )
        return cls(
            generator,
            evaluator,
            config=config.refinement(),
            actions=actions,
            on_event=on_event,
        )

    @property
    def loop(self) -> RefinementLoop:
        return self._loop

    def run(self, request: str) -> AgentResponse:
        """Process ``request`` and return the response with run details."""
        try:
            result = self._loop.run(request)
            html = normalize(result.text)
        except Exception as exc:
            logger.error("Failed to process request: %s", exc, exc_info=True)
            message = str(exc) or type(exc).__name__
            emit(self._on_event, RefinementEvent(
                kind=INVOKE_FAILED, stage="invoke", message=message,
            ))
            return AgentResponse(html=render_error(message), failed=True)

        return AgentResponse(html=html, result=result)

    def invoke(self, request: str) -> str:
        """Process ``request`` and return structurally valid HTML."""
        return self.run(request).html
