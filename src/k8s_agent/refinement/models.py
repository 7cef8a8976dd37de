"""Refinement loop data models.

Provides Verdict, Candidate, Evaluation, TranscriptEntry, Transcript,
CallOutcome, CallResult and RefinementResult.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


class Verdict(str, enum.Enum):
    """Evaluation outcome for a candidate."""

    PASS = "pass"
    NEEDS_IMPROVEMENT = "needs_improvement"


@dataclass(frozen=True)
class Candidate:
    """A generated response tagged with the iteration that produced it."""

    iteration: int
    text: str


@dataclass(frozen=True)
class Evaluation:
    """Parsed evaluation of a candidate.

    Attributes:
        verdict: PASS or NEEDS_IMPROVEMENT.
        feedback: Feedback text used to build the next prompt.
        raw: The evaluator's unparsed output.
        skipped: True when the evaluation was synthesized because the
            evaluator failed on every attempt.
    """

    verdict: Verdict
    feedback: str = ""
    raw: str = ""
    skipped: bool = False

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS


@dataclass(frozen=True)
class TranscriptEntry:
    """One round of the loop. ``evaluation`` is None for the final round."""

    iteration: int
    candidate: Candidate
    evaluation: Evaluation | None = None


class Transcript:
    """Append-only history of one invocation's rounds."""

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []

    def append(self, entry: TranscriptEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def latest_feedback(self) -> str:
        """Feedback of the most recent evaluated entry, or ``""``."""
        for entry in reversed(self._entries):
            if entry.evaluation is not None:
                return entry.evaluation.feedback
        return ""

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"Transcript({len(self._entries)} entries)"


class CallOutcome(str, enum.Enum):
    """How a retried capability call ended."""

    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Result of a retried capability call.

    Attributes:
        outcome: SUCCEEDED or EXHAUSTED.
        value: The call's return value (None when exhausted).
        error: The last failure (None when succeeded).
        attempts: Total attempts made (1 = first try succeeded).
    """

    outcome: CallOutcome
    value: T | None = None
    error: BaseException | None = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.SUCCEEDED


class Termination(str, enum.Enum):
    """Why the loop stopped."""

    PASSED = "passed"
    FINAL_ITERATION = "final_iteration"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class RefinementResult:
    """Final result of one refinement run.

    Frozen: the result is immutable once the run completes.
    """

    text: str
    termination: Termination
    iterations: int
    transcript: tuple[TranscriptEntry, ...] = field(default_factory=tuple)

    @property
    def evaluations(self) -> list[Evaluation]:
        """Return every evaluation performed (or synthesized) during the run."""
        return [e.evaluation for e in self.transcript if e.evaluation is not None]
