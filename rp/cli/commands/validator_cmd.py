from __future__ import annotations

import os

import typer

from rp.cli.commands._helpers import exit_with_code
from rp.cli.context import get_console
from rp.core.errors import ErrorCode
from rp.platform.process import format_command
from rp.services.validator import UnsupportedClient, launch, plan_launch


def validator(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the validator command instead of running it."
    ),
) -> None:
    """Start the ETH2 validator client selected by $CLIENT."""
    console = get_console()

    plan = plan_launch(os.environ)
    if isinstance(plan, UnsupportedClient):
        # Nothing to start; the container exits cleanly as it always has.
        console.warning(plan.message)
        exit_with_code(int(ErrorCode.OK))

    if not plan.provider:
        console.warning("ETH2_PROVIDER is not set; the validator has no beacon node to talk to.")

    if dry_run:
        console.print(format_command(plan.argv))
        exit_with_code(int(ErrorCode.OK))

    error = launch(plan)
    console.error(f"Could not start the {plan.client} validator: {error.stderr}")
    exit_with_code(int(ErrorCode.FAILURE))
