"""Refinement events and built-in event sinks.

The loop and the agent never print. They report what happened to an
injected sink, a plain callable taking a :class:`RefinementEvent`. The
default sink forwards to :mod:`logging`; tests pass a
:class:`CollectingSink`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GENERATED = "generated"
EVALUATED = "evaluated"
RETRY = "retry"
EXHAUSTED = "exhausted"
EVALUATION_SKIPPED = "evaluation_skipped"
ACCEPTED = "accepted"
INVOKE_FAILED = "invoke_failed"

_FAILURE_KINDS = frozenset({RETRY, EXHAUSTED, EVALUATION_SKIPPED, INVOKE_FAILED})


@dataclass(frozen=True)
class RefinementEvent:
    """Something observable that happened during a run.

    Attributes:
        kind: One of the module-level kind constants.
        stage: "generation", "evaluation" or "invoke".
        iteration: Loop iteration (0 when not inside the loop).
        attempt: Attempt number for retry/exhausted events.
        max_attempts: Attempt ceiling for retry/exhausted events.
        message: Human-readable detail (error text, verdict, ...).
    """

    kind: str
    stage: str
    iteration: int = 0
    attempt: int | None = None
    max_attempts: int | None = None
    message: str = ""

    @property
    def is_failure(self) -> bool:
        return self.kind in _FAILURE_KINDS

    def __str__(self) -> str:
        parts = [f"[{self.stage}] {self.kind}"]
        if self.iteration:
            parts.append(f"iteration={self.iteration}")
        if self.attempt is not None:
            parts.append(f"attempt={self.attempt}/{self.max_attempts}")
        if self.message:
            parts.append(self.message)
        return " ".join(parts)


EventSink = Callable[[RefinementEvent], None]


def log_event(event: RefinementEvent) -> None:
    """Default sink: failures at WARNING, progress at DEBUG."""
    level = logging.WARNING if event.is_failure else logging.DEBUG
    logger.log(level, "%s", event)


def make_log_sink(level: int, log: logging.Logger | None = None) -> EventSink:
    """Create a sink that logs every event at ``level``."""
    target = log or logger

    def _sink(event: RefinementEvent) -> None:
        target.log(level, "%s", event)

    return _sink


def null_sink(event: RefinementEvent) -> None:
    """Discard every event."""


class CollectingSink:
    """Sink that keeps events in memory.

    Usage::

        sink = CollectingSink()
        Agent(generator, evaluator, on_event=sink).invoke("list pods")
        retries = sink.of_kind("retry")
    """

    def __init__(self) -> None:
        self.events: list[RefinementEvent] = []

    def __call__(self, event: RefinementEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> list[RefinementEvent]:
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()


def emit(sink: EventSink | None, event: RefinementEvent) -> None:
    """Deliver ``event``; a failing sink never breaks the caller."""
    if sink is None:
        return
    try:
        sink(event)
    except Exception:
        logger.debug("Event sink error for %s", event.kind, exc_info=True)
