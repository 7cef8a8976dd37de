"""Refinement package -- the generate/evaluate loop and its parts.

Provides the RefinementLoop class, its configuration, the retrying call
wrapper with exponential backoff, evaluation parsing, result models and
the event sinks used for observability.
"""

from k8s_agent.refinement.backoff import BackoffPolicy, backoff_delay
from k8s_agent.refinement.config import RefinementConfig
from k8s_agent.refinement.events import (
    CollectingSink,
    EventSink,
    RefinementEvent,
    log_event,
    make_log_sink,
    null_sink,
)
from k8s_agent.refinement.feedback import (
    extract_feedback,
    extract_verdict,
    parse_evaluation,
)
from k8s_agent.refinement.loop import PLACEHOLDER_TEXT, RefinementLoop
from k8s_agent.refinement.models import (
    CallOutcome,
    CallResult,
    Candidate,
    Evaluation,
    RefinementResult,
    Termination,
    Transcript,
    TranscriptEntry,
    Verdict,
)
from k8s_agent.refinement.retry import call_with_retry

__all__ = [
    # Core
    "RefinementLoop",
    "PLACEHOLDER_TEXT",
    # Config
    "RefinementConfig",
    # Retry
    "BackoffPolicy",
    "backoff_delay",
    "call_with_retry",
    # Feedback
    "extract_feedback",
    "extract_verdict",
    "parse_evaluation",
    # Models
    "CallOutcome",
    "CallResult",
    "Candidate",
    "Evaluation",
    "RefinementResult",
    "Termination",
    "Transcript",
    "TranscriptEntry",
    "Verdict",
    # Events
    "RefinementEvent",
    "EventSink",
    "CollectingSink",
    "log_event",
    "make_log_sink",
    "null_sink",
]
