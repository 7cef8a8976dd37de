"""Retrying call wrapper for generation and evaluation capabilities.

Provides call_with_retry() -- runs a capability call under tenacity with
the exponential :class:`BackoffPolicy` and returns an explicit
:class:`CallResult` instead of raising when attempts run out. What to do
with an exhausted call (fail or degrade) is the caller's decision.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

import tenacity

from k8s_agent.refinement.backoff import BackoffPolicy
from k8s_agent.refinement.config import DEFAULT_MAX_ATTEMPTS
from k8s_agent.refinement.events import (
    EXHAUSTED,
    RETRY,
    EventSink,
    RefinementEvent,
    emit,
)
from k8s_agent.refinement.models import CallOutcome, CallResult

T = TypeVar("T")

logger = logging.getLogger(__name__)


def call_with_retry(
    fn: Callable[..., T],
    *args: Any,
    stage: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    policy: BackoffPolicy | None = None,
    sleep: Callable[[float], None] | None = None,
    on_event: EventSink | None = None,
    iteration: int = 0,
    **kwargs: Any,
) -> CallResult[T]:
    """Call ``fn(*args, **kwargs)``, retrying any exception.

    Flow:
        1. Call fn
        2. On success: return SUCCEEDED with the value
        3. On failure before the ceiling: emit a ``retry`` event, block
           for ``policy.delay(attempt)`` seconds, goto 1
        4. On failure at the ceiling: emit ``exhausted``, return EXHAUSTED
           carrying the last exception

    Only ``Exception`` subclasses are retried; KeyboardInterrupt and
    friends propagate.

    Args:
        fn: The capability call.
        stage: "generation" or "evaluation", used in events and logs.
        max_attempts: Total attempts, including the first.
        policy: Backoff policy (default base delay 1s).
        sleep: Blocking sleep used between attempts (default time.sleep).
        on_event: Event sink for retry/exhausted events.
        iteration: Loop iteration, copied into events.

    Returns:
        CallResult with the value or the last error, and the attempt count.
    """
    policy = policy or BackoffPolicy()
    attempts = 0

    def _attempt() -> T:
        nonlocal attempts
        attempts += 1
        return fn(*args, **kwargs)

    def _before_sleep(retry_state: tenacity.RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "%s call failed (attempt %d/%d): %s. Retrying in %.1fs...",
            stage.capitalize(),
            retry_state.attempt_number,
            max_attempts,
            exc,
            wait,
        )
        emit(on_event, RefinementEvent(
            kind=RETRY,
            stage=stage,
            iteration=iteration,
            attempt=retry_state.attempt_number,
            max_attempts=max_attempts,
            message=str(exc),
        ))

    retryer = tenacity.Retrying(
        retry=tenacity.retry_if_exception_type(Exception),
        wait=policy,
        stop=tenacity.stop_after_attempt(max_attempts),
        sleep=sleep or time.sleep,
        before_sleep=_before_sleep,
        reraise=False,
    )

    try:
        value = retryer(_attempt)
    except tenacity.RetryError as exc:
        last_error = exc.last_attempt.exception()
        logger.warning(
            "%s call failed after %d attempts: %s",
            stage.capitalize(),
            attempts,
            last_error,
        )
        emit(on_event, RefinementEvent(
            kind=EXHAUSTED,
            stage=stage,
            iteration=iteration,
            attempt=attempts,
            max_attempts=max_attempts,
            message=str(last_error),
        ))
        return CallResult(
            outcome=CallOutcome.EXHAUSTED,
            error=last_error,
            attempts=attempts,
        )

    return CallResult(outcome=CallOutcome.SUCCEEDED, value=value, attempts=attempts)
