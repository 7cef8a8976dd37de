"""Generate/evaluate refinement loop.

Provides the RefinementLoop class that runs a bounded evaluator-optimizer
loop: generate a candidate, have it evaluated, re-prompt with the
feedback, repeat until a candidate passes or the iteration ceiling is
reached. The final iteration is accepted without evaluation.

Retry exhaustion is asymmetric and handled explicitly here:

- generation exhausted -> GenerationExhaustedError (fatal)
- evaluation exhausted -> synthetic PASS, the loop carries on
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from k8s_agent.exceptions import GenerationExhaustedError
from k8s_agent.prompts.evaluator import EVALUATOR_SYSTEM_PROMPT, build_evaluation_prompt
from k8s_agent.prompts.generator import GENERATOR_SYSTEM_PROMPT, build_refinement_prompt
from k8s_agent.refinement.backoff import BackoffPolicy
from k8s_agent.refinement.config import RefinementConfig
from k8s_agent.refinement.events import (
    ACCEPTED,
    EVALUATED,
    EVALUATION_SKIPPED,
    GENERATED,
    EventSink,
    RefinementEvent,
    emit,
    log_event,
)
from k8s_agent.refinement.feedback import parse_evaluation, skipped_evaluation
from k8s_agent.refinement.models import (
    Candidate,
    Evaluation,
    RefinementResult,
    Termination,
    Transcript,
    TranscriptEntry,
)
from k8s_agent.refinement.retry import call_with_retry

if TYPE_CHECKING:
    from k8s_agent.llm.protocols import EvaluationCapability, GenerationCapability
    from k8s_agent.toolkit.models import ActionDefinition

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Failed to generate a response"


class RefinementLoop:
    """Bounded generate -> evaluate -> re-prompt loop.

    One instance can serve many requests: ``run()`` keeps all per-request
    state (transcript, candidates) in local variables.

    Usage::

        loop = RefinementLoop(generator, evaluator, config=RefinementConfig())
        result = loop.run("Why is my nginx pod crash-looping?")
        print(result.text, result.termination)
    """

    def __init__(
        self,
        generator: GenerationCapability,
        evaluator: EvaluationCapability,
        *,
        config: RefinementConfig | None = None,
        actions: Sequence[ActionDefinition] = (),
        generator_instructions: str = GENERATOR_SYSTEM_PROMPT,
        evaluator_instructions: str = EVALUATOR_SYSTEM_PROMPT,
        on_event: EventSink | None = log_event,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._generator = generator
        self._evaluator = evaluator
        self._config = config or RefinementConfig()
        self._actions = tuple(actions)
        self._generator_instructions = generator_instructions
        self._evaluator_instructions = evaluator_instructions
        self._on_event = on_event
        self._policy = BackoffPolicy(self._config.base_delay)
        self._sleep = sleep

    @property
    def config(self) -> RefinementConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, request: str) -> RefinementResult:
        """Refine a response to ``request``.

        Args:
            request: The user's request text.

        Returns:
            RefinementResult with the accepted candidate text (not yet
            normalized) and the transcript.

        Raises:
            GenerationExhaustedError: If generation failed on every attempt.
        """
        transcript = Transcript()
        max_iterations = self._config.max_iterations
        candidate: Candidate | None = None
        termination = Termination.FINAL_ITERATION
        iteration = 0

        for iteration in range(1, max_iterations + 1):
            prompt = self._generation_prompt(request, candidate, transcript)
            text = self._generate(prompt, iteration)
            if text is None:
                break
            candidate = Candidate(iteration=iteration, text=text)
            emit(self._on_event, RefinementEvent(
                kind=GENERATED, stage="generation", iteration=iteration,
                message=f"{len(text)} chars",
            ))

            if iteration == max_iterations:
                transcript.append(TranscriptEntry(iteration, candidate))
                termination = Termination.FINAL_ITERATION
                break

            evaluation = self._evaluate(request, candidate)
            transcript.append(TranscriptEntry(iteration, candidate, evaluation))

            if evaluation.passed:
                termination = Termination.PASSED
                break

        if candidate is None:
            logger.warning("No candidate was generated; using placeholder text")
            return RefinementResult(
                text=PLACEHOLDER_TEXT,
                termination=Termination.PLACEHOLDER,
                iterations=iteration,
                transcript=transcript.entries,
            )

        emit(self._on_event, RefinementEvent(
            kind=ACCEPTED, stage="generation", iteration=candidate.iteration,
            message=termination.value,
        ))
        return RefinementResult(
            text=candidate.text,
            termination=termination,
            iterations=candidate.iteration,
            transcript=transcript.entries,
        )

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _generation_prompt(
        self,
        request: str,
        prior: Candidate | None,
        transcript: Transcript,
    ) -> str:
        if prior is None:
            return request
        return build_refinement_prompt(request, prior.text, transcript.latest_feedback())

    def _generate(self, prompt: str, iteration: int) -> str | None:
        """Run the generation stage; exhaustion is fatal."""
        result = call_with_retry(
            self._generator.generate,
            prompt,
            self._generator_instructions,
            self._actions,
            stage="generation",
            max_attempts=self._config.max_attempts,
            policy=self._policy,
            sleep=self._sleep,
            on_event=self._on_event,
            iteration=iteration,
        )
        if not result.ok:
            raise GenerationExhaustedError(result.attempts, result.error) from result.error
        return result.value

    def _evaluate(self, request: str, candidate: Candidate) -> Evaluation:
        """Run the evaluation stage; exhaustion degrades to a synthetic PASS."""
        result = call_with_retry(
            self._evaluator.evaluate,
            build_evaluation_prompt(request, candidate.text),
            self._evaluator_instructions,
            stage="evaluation",
            max_attempts=self._config.max_attempts,
            policy=self._policy,
            sleep=self._sleep,
            on_event=self._on_event,
            iteration=candidate.iteration,
        )
        if not result.ok:
            evaluation = skipped_evaluation()
            emit(self._on_event, RefinementEvent(
                kind=EVALUATION_SKIPPED,
                stage="evaluation",
                iteration=candidate.iteration,
                message=f"Continuing with current response: {result.error}",
            ))
            return evaluation

        evaluation = parse_evaluation(result.value)
        emit(self._on_event, RefinementEvent(
            kind=EVALUATED,
            stage="evaluation",
            iteration=candidate.iteration,
            message=evaluation.verdict.value,
        ))
        return evaluation
