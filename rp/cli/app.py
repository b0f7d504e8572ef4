from __future__ import annotations

import sys

import click
import typer

from rp import __version__
from rp.cli.commands import release_cmd
from rp.cli.commands.validator_cmd import validator
from rp.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(release_cmd.release)
app.command()(validator)

# Standalone entry points keep the flags of the scripts they replace.
release_app = typer.Typer(add_completion=False)
release_app.command()(release_cmd.release)

validator_app = typer.Typer(add_completion=False)
validator_app.command()(validator)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Rocket Pool smartnode release and validator tooling."""


def _invoke(target: typer.Typer, args: list[str] | None) -> int:
    """Run an app and return its exit code.

    A malformed ``release`` invocation prints the release usage and exits 0,
    like getopts falling through to ``usage`` did. Other usage errors keep
    click's presentation.
    """
    try:
        code = target(args=args, standalone_mode=False)
    except click.UsageError as e:
        if e.ctx is None or e.ctx.command.name != "release":
            e.show()
            return e.exit_code
        release_cmd.print_usage(release_cmd.get_console())
        return int(ErrorCode.OK)
    except typer.Abort:
        typer.echo("Aborted!", err=True)
        return int(ErrorCode.FAILURE)
    return int(code or ErrorCode.OK)


def main(args: list[str] | None = None) -> None:
    sys.exit(_invoke(app, args))


def release_main(args: list[str] | None = None) -> None:
    sys.exit(_invoke(release_app, args))


def validator_main(args: list[str] | None = None) -> None:
    sys.exit(_invoke(validator_app, args))
