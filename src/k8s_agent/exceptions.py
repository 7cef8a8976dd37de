"""Agent exception hierarchy.

All k8s-agent exceptions inherit from AgentError.
"""


class AgentError(Exception):
    """Base exception for all k8s-agent errors."""


class ConfigError(AgentError):
    """Raised when agent or loop configuration is invalid."""


class RefinementError(AgentError):
    """Raised when the refinement loop encounters an unrecoverable error."""


class RetryExhaustedError(RefinementError):
    """All attempts of a retried capability call failed."""

    def __init__(
        self, stage: str, attempts: int, last_error: BaseException | None = None
    ) -> None:
        self.stage = stage
        self.attempts = attempts
        self.last_error = last_error
        if last_error is None:
            detail = "unknown error"
        else:
            detail = str(last_error) or type(last_error).__name__
        super().__init__(detail)


class GenerationExhaustedError(RetryExhaustedError):
    """The generation capability failed on every attempt.

    The message is the last underlying failure message so it can be shown
    to the user verbatim in the error fragment.
    """

    def __init__(self, attempts: int, last_error: BaseException | None = None) -> None:
        super().__init__("generation", attempts, last_error)
