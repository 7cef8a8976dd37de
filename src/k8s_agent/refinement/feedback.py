"""Evaluation text parsing.

The evaluator is asked for::

    RATING: PASS | NEEDS_IMPROVEMENT
    FEEDBACK: ...

but the format is a soft contract. Parsing never fails: a missing
``FEEDBACK:`` marker makes the whole trimmed text the feedback.
"""

from __future__ import annotations

from k8s_agent.refinement.models import Evaluation, Verdict

PASS_MARKER = "RATING: PASS"
FEEDBACK_MARKER = "FEEDBACK:"

SKIPPED_EVALUATION_FEEDBACK = (
    "Unable to evaluate due to repeated evaluation failures, "
    "continuing with current response."
)


def extract_verdict(text: str) -> Verdict:
    """PASS iff ``text`` contains ``RATING: PASS``."""
    return Verdict.PASS if PASS_MARKER in text else Verdict.NEEDS_IMPROVEMENT


def extract_feedback(text: str) -> str:
    """Text after the first ``FEEDBACK:`` marker, trimmed.

    Without the marker, the whole evaluation text (trimmed) is returned.
    """
    _, marker, rest = text.partition(FEEDBACK_MARKER)
    if not marker:
        return text.strip()
    return rest.strip()


def parse_evaluation(text: str | None) -> Evaluation:
    """Parse raw evaluator output into an :class:`Evaluation`."""
    raw = text or ""
    return Evaluation(
        verdict=extract_verdict(raw),
        feedback=extract_feedback(raw),
        raw=raw,
    )


def skipped_evaluation() -> Evaluation:
    """Synthetic PASS used when the evaluator failed on every attempt."""
    raw = f"{PASS_MARKER}\n{FEEDBACK_MARKER} {SKIPPED_EVALUATION_FEEDBACK}"
    return Evaluation(
        verdict=Verdict.PASS,
        feedback=SKIPPED_EVALUATION_FEEDBACK,
        raw=raw,
        skipped=True,
    )
