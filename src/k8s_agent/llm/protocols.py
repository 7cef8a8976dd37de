"""LLM client and capability protocols.

Defines the pluggable interfaces the refinement loop consumes: a raw
chat client, a generation capability and an evaluation capability.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from k8s_agent.toolkit.models import ActionDefinition


@runtime_checkable
class LLMClient(Protocol):
    """Protocol for pluggable LLM clients.

    Any object with chat() and close() methods matching this signature works.
    The built-in OpenAIClient implements this protocol.

    Custom clients can override ``extract_content()`` to support non-OpenAI
    response formats. The default assumes OpenAI-style responses
    (``choices[0].message.content``).
    """

    def chat(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send messages, return response dict."""
        ...

    def close(self) -> None:
        """Release underlying resources."""
        ...

    def extract_content(self, response: dict) -> str:
        """Extract assistant message content from an LLM response.

        Override this for non-OpenAI response formats.
        """
        try:
            return response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ValueError(
                f"Cannot extract content from response: {exc}. "
                f"Override extract_content() for custom formats."
            ) from exc


@runtime_checkable
class GenerationCapability(Protocol):
    """Produces a candidate response for a prompt.

    May raise on transient failure; the refinement loop retries.
    """

    def generate(
        self,
        prompt: str,
        system_instructions: str,
        available_actions: Sequence[ActionDefinition],
    ) -> str:
        """Return generated text for ``prompt``."""
        ...


@runtime_checkable
class EvaluationCapability(Protocol):
    """Judges a candidate response.

    Expected (but not required) to emit ``RATING:`` and ``FEEDBACK:``
    markers in its output.
    """

    def evaluate(self, prompt: str, system_instructions: str) -> str:
        """Return raw evaluation text for ``prompt``."""
        ...
