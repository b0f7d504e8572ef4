"""Result type for explicit error handling.

Release steps and helpers return ``Ok(value)`` or ``Err(error)`` instead of
raising, so the CLI layer decides how a failure is presented and which exit
code it maps to.

Usage:
    match service.build_cli():
        case Ok(paths):
            for p in paths:
                console.success(str(p))
        case Err(error):
            print_release_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = "Ok[T] | Err[E]"
