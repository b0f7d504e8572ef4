"""Subprocess execution with Result-based error handling.

Usage:
    result = run_silent(["./build.sh"], cwd=cli_dir)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from rp.core.result import Err, Ok, Result

__all__ = ["ProcessError", "exec_replace", "format_command", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 if it could not be started.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the OS error when the process never ran.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def format_command(cmd: Sequence[str]) -> str:
    """Render a command the way a shell user would type it."""
    return shlex.join(cmd)


def run_silent(cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    Build tools and docker are run this way so their progress stays visible.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)


def exec_replace(cmd: list[str], env: Mapping[str, str] | None = None) -> ProcessError:
    """Replace the current process with ``cmd``.

    Only returns if the exec itself failed (e.g. the binary does not exist);
    the returned error describes why.
    """
    try:
        if env is None:
            os.execvp(cmd[0], cmd)
        else:
            os.execvpe(cmd[0], cmd, dict(env))
    except OSError as e:
        return ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e))
    raise AssertionError("exec returned without error")  # pragma: no cover
