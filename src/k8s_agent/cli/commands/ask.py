"""k8s-agent ask -- send a request through the refinement loop."""

from __future__ import annotations

import sys

import click

from k8s_agent.cli.formatting import format_error, format_events, get_console, print_html


@click.command()
@click.argument("prompt")
@click.option("--model", default=None, help="Model for generation and evaluation.")
@click.option("--base-url", default=None, help="OpenAI-compatible API base URL.")
@click.option("--max-iterations", default=None, type=click.IntRange(min=1), help="Generate/evaluate rounds.")
@click.option("--max-attempts", default=None, type=click.IntRange(min=1), help="Attempts per model call.")
@click.option("-o", "--output", type=click.File("w"), default=None, help="Write the HTML to a file.")
@click.option("-v", "--verbose", is_flag=True, help="Show refinement events on stderr.")
def ask(
    prompt: str,
    model: str | None,
    base_url: str | None,
    max_iterations: int | None,
    max_attempts: int | None,
    output,
    verbose: bool,
) -> None:
    """Answer PROMPT as styled HTML ('-' reads the prompt from stdin)."""
    from k8s_agent.agent import Agent
    from k8s_agent.config import AgentConfig
    from k8s_agent.refinement.events import CollectingSink, log_event

    console = get_console()
    err_console = get_console(stderr=True)

    if prompt == "-":
        prompt = sys.stdin.read()
    if not prompt.strip():
        format_error("Empty prompt.", err_console)
        raise SystemExit(1)

    sink = CollectingSink()

    def _on_event(event):
        sink(event)
        log_event(event)

    try:
        config = AgentConfig.from_env(
            model=model,
            base_url=base_url,
            max_iterations=max_iterations,
            max_attempts=max_attempts,
        )
        agent = Agent.from_config(config, on_event=_on_event)
    except Exception as e:
        format_error(str(e), err_console)
        raise SystemExit(1) from None

    response = agent.run(prompt)

    if output is not None:
        output.write(response.html)
    else:
        print_html(response.html, console)

    if verbose:
        format_events(sink.events, err_console)

    if response.failed:
        raise SystemExit(1)
