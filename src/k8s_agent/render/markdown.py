"""Minimal Markdown-to-HTML transformer.

Converts the small Markdown subset language models fall back to (fenced
and inline code, ``#``-``###`` headings, ``-`` bullets, bold, italic) into
inline-styled HTML. This is not a general Markdown parser.

The transformer is a fixed-order pipeline of pure ``str -> str`` stages.
Order matters:

1. fenced code blocks (must run before inline code, which shares the
   backtick delimiter)
2. inline code
3. headings, ``#`` then ``##`` then ``###``
4. bullet lists
5. paragraphs (skips every line the earlier stages turned into a tag)
6. bold (must run before italic, whose delimiter is a subset of bold's)
7. italic

Code text is emitted with character references for ``&<>``, ``*``,
backticks and newlines. It renders verbatim but later stages cannot
rewrite it and it never produces a line starting with ``#`` or ``-``.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable

from k8s_agent.render import styles

Stage = Callable[[str], str]

_FENCED_CODE = re.compile(r"```(\w*)\n(.*?)\n?```", re.DOTALL)
_INLINE_CODE = re.compile(r"`([^`\n]+)`")
_BULLET = re.compile(r"- (.+)$")
_BOLD = re.compile(r"\*\*([^*\n]+)\*\*")
_ITALIC = re.compile(r"\*([^*\n]+)\*")

_HEADINGS: tuple[tuple[int, str], ...] = (
    (1, styles.H1),
    (2, styles.H2),
    (3, styles.H3),
)


def _code_text(code: str) -> str:
    """Escape code so it survives the remaining stages unchanged."""
    escaped = html.escape(code, quote=False)
    return (
        escaped.replace("*", "&#42;")
        .replace("`", "&#96;")
        .replace("\n", "&#10;")
    )


def convert_code_blocks(text: str) -> str:
    """Fenced code blocks -> one-line ``<pre><code>`` elements."""

    def _render(match: re.Match[str]) -> str:
        language, code = match.group(1), match.group(2)
        class_attr = f' class="language-{language}"' if language else ""
        return (
            f'<pre style="{styles.PRE}"><code{class_attr}>'
            f"{_code_text(code)}</code></pre>"
        )

    return _FENCED_CODE.sub(_render, text)


def convert_inline_code(text: str) -> str:
    """Single-backtick spans -> ``<code>``; stray backticks are escaped."""
    converted = _INLINE_CODE.sub(
        lambda m: f'<code style="{styles.INLINE_CODE}">{_code_text(m.group(1))}</code>',
        text,
    )
    return converted.replace("`", "&#96;")


def _heading_stage(level: int, style: str) -> Stage:
    # Exactly ``level`` markers then a space, so "##" never matches "#".
    pattern = re.compile(rf"^{'#' * level} (.+)$", re.MULTILINE)

    def convert(text: str) -> str:
        return pattern.sub(
            lambda m: f'<h{level} style="{style}">{m.group(1).strip()}</h{level}>',
            text,
        )

    convert.__name__ = f"convert_h{level}"
    return convert


convert_h1, convert_h2, convert_h3 = (
    _heading_stage(level, style) for level, style in _HEADINGS
)


def convert_headings(text: str) -> str:
    """``#``, ``##``, ``###`` lines -> ``<h1>``-``<h3>``, in that order."""
    for stage in (convert_h1, convert_h2, convert_h3):
        text = stage(text)
    return text


def convert_lists(text: str) -> str:
    """``- item`` lines -> ``<li>``; each contiguous run gets one ``<ul>``."""
    out: list[str] = []
    in_list = False
    for line in text.split("\n"):
        match = _BULLET.match(line)
        if match:
            if not in_list:
                out.append(f'<ul style="{styles.UL}">')
                in_list = True
            out.append(f"<li>{match.group(1)}</li>")
            continue
        if in_list:
            out.append("</ul>")
            in_list = False
        out.append(line)
    if in_list:
        out.append("</ul>")
    return "\n".join(out)


def convert_paragraphs(text: str) -> str:
    """Wrap non-blank lines that do not start with a tag in ``<p>``."""
    out: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith("<"):
            out.append(f"<p>{stripped}</p>")
        else:
            out.append(line)
    return "\n".join(out)


def convert_bold(text: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", text)


def convert_italic(text: str) -> str:
    return _ITALIC.sub(r"<em>\1</em>", text)


STAGES: tuple[Stage, ...] = (
    convert_code_blocks,
    convert_inline_code,
    convert_headings,
    convert_lists,
    convert_paragraphs,
    convert_bold,
    convert_italic,
)


def markdown_to_html(text: str) -> str:
    """Run every stage over ``text`` in order.

    Args:
        text: Markdown (or partially HTML) text.

    Returns:
        HTML fragment without a container element.
    """
    result = text.replace("\r\n", "\n").replace("\r", "\n")
    for stage in STAGES:
        result = stage(result)
    return result
