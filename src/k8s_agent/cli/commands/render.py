"""k8s-agent render -- normalize a response file without calling a model."""

from __future__ import annotations

import click

from k8s_agent.cli.formatting import get_console, print_html


@click.command()
@click.argument("source", type=click.File("r"), default="-")
def render(source) -> None:
    """Normalize SOURCE (Markdown or HTML, default stdin) into valid HTML."""
    from k8s_agent.render.normalize import normalize

    print_html(normalize(source.read()), get_console())
