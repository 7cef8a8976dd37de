"""Generation and evaluation capabilities backed by an LLM client.

LLMGenerator runs an OpenAI tool-calling loop: send the prompt with the
available actions, execute any requested action calls, feed the results
back, and repeat until the model answers with plain content.
LLMEvaluator is a single system+user completion.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from k8s_agent.llm.errors import LLMResponseError
from k8s_agent.toolkit.executor import ActionExecutor
from k8s_agent.toolkit.models import ActionCall

if TYPE_CHECKING:
    from k8s_agent.llm.protocols import LLMClient
    from k8s_agent.toolkit.models import ActionDefinition, ActionResult

logger = logging.getLogger(__name__)


def _content_of(client: Any, response: dict) -> str:
    """Extract content with the client's extractor when it has one."""
    extractor = getattr(client, "extract_content", None)
    if extractor is not None:
        return extractor(response) or ""
    try:
        return response["choices"][0]["message"].get("content") or ""
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise LLMResponseError(
            f"Cannot extract content from response: {exc}. Response: {response}"
        ) from exc


def extract_action_calls(response: dict) -> list[ActionCall]:
    """Parse an OpenAI-format response into action calls.

    Navigates response["choices"][0]["message"]["tool_calls"].

    Returns:
        List of ActionCall instances. Empty if no calls were requested.
    """
    try:
        choices = response.get("choices", [])
        if not choices:
            return []
        message = choices[0].get("message", {})
        raw_calls = message.get("tool_calls", [])
        if not raw_calls:
            return []

        result: list[ActionCall] = []
        for raw in raw_calls:
            call_id = raw.get("id", f"call_{uuid.uuid4().hex[:8]}")
            func = raw.get("function", {})
            name = func.get("name", "")
            try:
                arguments = json.loads(func.get("arguments") or "{}")
            except (json.JSONDecodeError, TypeError):
                arguments = {}
                logger.warning("Malformed JSON in action call arguments for %s", name)
            result.append(ActionCall(id=call_id, name=name, arguments=arguments))
        return result
    except (AttributeError, KeyError, IndexError, TypeError) as exc:
        logger.debug("Failed to extract action calls: %s", exc)
        return []


def format_action_results(
    response: dict,
    calls: list[ActionCall],
    results: list[ActionResult],
) -> list[dict]:
    """Format action results for the next turn of the conversation.

    Returns the assistant message from ``response`` (preserving its
    tool_calls) followed by one ``tool`` message per call.
    """
    formatted: list[dict] = []

    try:
        formatted.append(copy.deepcopy(response["choices"][0]["message"]))
    except (KeyError, IndexError, TypeError):
        formatted.append({"role": "assistant", "content": ""})

    for call, result in zip(calls, results):
        formatted.append({
            "role": "tool",
            "tool_call_id": call.id,
            "content": result.as_message_content(),
        })
    return formatted


class LLMGenerator:
    """Generation capability over an LLMClient.

    Usage::

        generator = LLMGenerator(OpenAIClient(api_key="sk-..."))
        html = generator.generate(prompt, GENERATOR_SYSTEM_PROMPT, actions)
    """

    def __init__(
        self,
        client: LLMClient | Any,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tool_rounds: int = 8,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tool_rounds = max_tool_rounds

    def generate(
        self,
        prompt: str,
        system_instructions: str,
        available_actions: Sequence[ActionDefinition] = (),
    ) -> str:
        """Generate a response, executing requested actions along the way.

        Raises:
            LLMClientError: Propagated from the client; the refinement loop
                treats it as a transient failure.
        """
        executor = ActionExecutor(available_actions)
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": system_instructions},
            {"role": "user", "content": prompt},
        ]
        kwargs: dict[str, Any] = {}
        if available_actions:
            kwargs["tools"] = executor.to_openai()

        response: dict = {}
        for round_idx in range(self._max_tool_rounds + 1):
            response = self._client.chat(
                messages,
                model=self._model,
                temperature=self._temperature,
                **kwargs,
            )
            calls = extract_action_calls(response)
            if not calls:
                return _content_of(self._client, response)
            if round_idx == self._max_tool_rounds:
                logger.warning(
                    "Action round limit (%d) reached; returning partial content",
                    self._max_tool_rounds,
                )
                break

            results = [executor.execute(call.name, call.arguments) for call in calls]
            for call, result in zip(calls, results):
                logger.debug(
                    "Action %s -> %s", call.name, "ok" if result.success else result.error
                )
            messages.extend(format_action_results(response, calls, results))

        return _content_of(self._client, response)


class LLMEvaluator:
    """Evaluation capability over an LLMClient."""

    def __init__(
        self,
        client: LLMClient | Any,
        *,
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature

    def evaluate(self, prompt: str, system_instructions: str) -> str:
        messages = [
            {"role": "system", "content": system_instructions},
            {"role": "user", "content": prompt},
        ]
        response = self._client.chat(
            messages,
            model=self._model,
            temperature=self._temperature,
        )
        return _content_of(self._client, response)
