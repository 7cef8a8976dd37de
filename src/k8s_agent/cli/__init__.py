"""k8s-agent CLI -- ask the agent, render and validate HTML answers.

This module is NEVER imported from k8s_agent/__init__.py.
It is only loaded via the ``k8s-agent`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging

try:
    import click
    from dotenv import find_dotenv, load_dotenv
    from rich.logging import RichHandler
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install k8s-agent[cli]"
    ) from None

from k8s_agent.cli.formatting import get_console


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="K8S_AGENT_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for diagnostics (written to stderr).",
)
@click.option(
    "--env-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Load environment variables from this file (default: ./.env).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, env_file: str | None) -> None:
    """k8s-agent: Kubernetes assistant answering in styled HTML."""
    ctx.ensure_object(dict)
    load_dotenv(env_file or find_dotenv(usecwd=True))
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=get_console(stderr=True), show_path=False)],
    )


# Register subcommands after cli group is defined
from k8s_agent.cli.commands.ask import ask  # noqa: E402
from k8s_agent.cli.commands.render import render  # noqa: E402
from k8s_agent.cli.commands.validate import validate  # noqa: E402

cli.add_command(ask)
cli.add_command(render)
cli.add_command(validate)
