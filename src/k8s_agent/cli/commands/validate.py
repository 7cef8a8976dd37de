"""k8s-agent validate -- check a response against the structural contract."""

from __future__ import annotations

import click

from k8s_agent.cli.formatting import format_violations, get_console


@click.command()
@click.argument("source", type=click.File("r"), default="-")
def validate(source) -> None:
    """Report whether SOURCE already satisfies the HTML contract.

    Exits with status 1 when it does not.
    """
    from k8s_agent.render.validate import find_violations

    violations = find_violations(source.read())
    format_violations(violations, get_console())
    if violations:
        raise SystemExit(1)
