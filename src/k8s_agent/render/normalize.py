"""Output normalization and the error fragment.

``normalize`` is total: whatever text it receives, the result satisfies
:func:`k8s_agent.render.validate.is_valid`. Valid input is returned as-is,
so running it twice is the same as running it once.
"""

from __future__ import annotations

import html
import logging

from k8s_agent.render import styles
from k8s_agent.render.markdown import markdown_to_html
from k8s_agent.render.validate import find_violations

logger = logging.getLogger(__name__)

ERROR_TITLE = "Error Processing Request"
REMEDIATION_HINT = (
    "This may be due to a connection timeout with the OpenAI API. "
    "Please try again or check your network connection."
)


def wrap_container(fragment: str) -> str:
    """Wrap an HTML fragment in the standard styled ``<div>``."""
    return f'<div style="{styles.CONTAINER}">\n{fragment}\n</div>'


def normalize(candidate: str) -> str:
    """Guarantee ``candidate`` satisfies the structural output contract.

    Args:
        candidate: Raw generated text (HTML, Markdown, or a mix).

    Returns:
        ``candidate`` unchanged if it is already valid, otherwise the
        trimmed candidate converted from Markdown and wrapped in the
        standard container.
    """
    violations = find_violations(candidate)
    if not violations:
        return candidate

    logger.debug("Normalizing candidate: %s", "; ".join(violations))
    return wrap_container(markdown_to_html(candidate.strip()))


def _escape_message(message: str) -> str:
    escaped = html.escape(message).replace("`", "&#96;")
    lines = escaped.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return "<br>".join(lines)


def render_error(message: str) -> str:
    """Render the fixed-shape error fragment for a failure message.

    The shape is part of the external contract::

        <div>
            <h3>Error Processing Request</h3>
            <p>{message}</p>
            <p>{remediation hint}</p>
        </div>
    """
    return (
        f'<div style="{styles.ERROR_CONTAINER}">\n'
        f'    <h3 style="{styles.ERROR_HEADING}">{ERROR_TITLE}</h3>\n'
        f'    <p style="{styles.ERROR_PARAGRAPH}">{_escape_message(message)}</p>\n'
        f'    <p style="{styles.ERROR_PARAGRAPH}">{REMEDIATION_HINT}</p>\n'
        f"</div>"
    )
