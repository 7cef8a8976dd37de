"""Structural validation of candidate HTML responses.

A structural approximation, not an HTML parser. It is conservative on
purpose: a rejected candidate is normalized, which is always safe, so
every check below must hold for a candidate to be returned as-is.
"""

from __future__ import annotations

# Substrings that indicate leftover Markdown: a code fence, a line
# starting with a heading marker, a line starting with a bullet marker.
FORBIDDEN_MARKERS: tuple[tuple[str, str], ...] = (
    ("```", "contains a fenced code marker"),
    ("\n#", "contains a line starting with a heading marker"),
    ("\n-", "contains a line starting with a bullet marker"),
)


def find_violations(text: str) -> list[str]:
    """Return a description of every structural check ``text`` fails.

    Checks run against the whitespace-trimmed text.
    """
    trimmed = text.strip()
    violations: list[str] = []

    if not trimmed.startswith("<"):
        violations.append("does not start with '<'")
    if not (trimmed.endswith(">") or trimmed.endswith("</div>")):
        violations.append("does not end with '>'")
    if "<div" not in trimmed:
        violations.append("has no opening <div> container")
    if "</div>" not in trimmed:
        violations.append("has no closing </div> container")
    for marker, description in FORBIDDEN_MARKERS:
        if marker in trimmed:
            violations.append(description)

    return violations


def is_valid(text: str) -> bool:
    """Whether ``text`` already satisfies the structural output contract."""
    return not find_violations(text)
