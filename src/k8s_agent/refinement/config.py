"""Refinement loop configuration.

Frozen: the loop reads its ceilings once at construction and independent
invocations share the same instance.
"""

from __future__ import annotations

from dataclasses import dataclass

from k8s_agent.exceptions import ConfigError

DEFAULT_MAX_ITERATIONS = 3
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


@dataclass(frozen=True)
class RefinementConfig:
    """Ceilings for the generate/evaluate loop.

    Attributes:
        max_iterations: Maximum generate rounds. The last round is accepted
            without evaluation, so the evaluator runs at most
            ``max_iterations - 1`` times.
        max_attempts: Attempts per generation or evaluation call, shared
            by both stages.
        base_delay: Backoff base in seconds; the wait after failed attempt
            ``n`` is ``base_delay * 2 ** n``.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ConfigError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        if self.max_attempts < 1:
            raise ConfigError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ConfigError(f"base_delay must be >= 0, got {self.base_delay}")
