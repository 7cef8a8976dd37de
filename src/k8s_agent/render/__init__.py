"""HTML rendering: Markdown conversion, structural validation, normalization."""

from k8s_agent.render.markdown import STAGES, markdown_to_html
from k8s_agent.render.normalize import (
    ERROR_TITLE,
    REMEDIATION_HINT,
    normalize,
    render_error,
    wrap_container,
)
from k8s_agent.render.validate import find_violations, is_valid

__all__ = [
    "STAGES",
    "markdown_to_html",
    "normalize",
    "render_error",
    "wrap_container",
    "ERROR_TITLE",
    "REMEDIATION_HINT",
    "find_violations",
    "is_valid",
]
