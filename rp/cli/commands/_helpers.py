"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn, TypeVar

import typer

from rp.core.result import Err, Ok, Result
from rp.output.console import ConsoleProtocol
from rp.output.errors import print_release_error, release_error_exit_code
from rp.services.release.errors import ReleaseError

T = TypeVar("T")


def exit_on_release_error(result: Result[T, ReleaseError], console: ConsoleProtocol) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        print_release_error(result.error, console)
        exit_with_code(release_error_exit_code(result.error))
    assert isinstance(result, Ok)
    return result.value


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
