"""Shared test fixtures and doubles for k8s-agent tests."""

from __future__ import annotations

import pytest

from k8s_agent.refinement.events import CollectingSink

VALID_HTML = (
    '<div style="font-family: sans-serif;">'
    "<p>3 pods are running in <strong>default</strong>.</p>"
    "</div>"
)

PASS_EVALUATION = "RATING: PASS\nFEEDBACK: Looks good."


def needs_improvement(feedback: str) -> str:
    """Evaluator output rejecting a candidate with ``feedback``."""
    return f"RATING: NEEDS_IMPROVEMENT\nFEEDBACK: {feedback}"


class ScriptedCapability:
    """Generation/evaluation double that replays scripted outcomes.

    Each call consumes the next outcome; the last one repeats once the
    script runs out. Exception instances are raised instead of returned.
    """

    def __init__(self, *outcomes: object) -> None:
        self._outcomes = list(outcomes) or [""]
        self.calls: list[dict] = []

    def _next(self):
        index = min(len(self.calls), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def generate(self, prompt, system_instructions, available_actions=()):
        self.calls.append({
            "prompt": prompt,
            "system": system_instructions,
            "actions": available_actions,
        })
        return self._next()

    def evaluate(self, prompt, system_instructions):
        self.calls.append({"prompt": prompt, "system": system_instructions})
        return self._next()

    @property
    def call_count(self) -> int:
        return len(self.calls)


class RecordingSleep:
    """Replacement for time.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def no_sleep(seconds: float) -> None:
    """Sleep that returns immediately."""


@pytest.fixture()
def sink():
    """In-memory event sink."""
    return CollectingSink()


@pytest.fixture()
def sleeper():
    """Recording sleep so retry tests never block."""
    return RecordingSleep()
