"""Exponential backoff policy for retried capability calls."""

from __future__ import annotations

import tenacity

from k8s_agent.refinement.config import DEFAULT_BASE_DELAY


def backoff_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Seconds to wait after failed attempt ``attempt`` (1-based).

    ``base_delay * 2 ** attempt``: with the default base, 2s after the
    first failure, 4s after the second.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return base_delay * 2**attempt


class BackoffPolicy(tenacity.wait.wait_base):
    """tenacity wait strategy computing :func:`backoff_delay`.

    tenacity calls the wait after a failed attempt with
    ``retry_state.attempt_number`` set to that attempt's number.
    """

    def __init__(self, base_delay: float = DEFAULT_BASE_DELAY) -> None:
        self.base_delay = base_delay

    def delay(self, attempt: int) -> float:
        return backoff_delay(attempt, self.base_delay)

    def __call__(self, retry_state: tenacity.RetryCallState) -> float:
        return self.delay(retry_state.attempt_number)

    def __repr__(self) -> str:
        return f"BackoffPolicy(base_delay={self.base_delay})"
