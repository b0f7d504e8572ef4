"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rp.core.errors import ErrorCode
from rp.output.console import Style
from rp.services.release.errors import (
    ArchiveFailed,
    ArtifactMissing,
    CommandFailed,
    DirectoryMissing,
    FileOperationFailed,
    InvalidVersion,
    ReleaseError,
    UnsupportedArch,
)

if TYPE_CHECKING:
    from rp.output.console import ConsoleProtocol

__all__ = ["format_release_error", "print_release_error", "release_error_exit_code"]


def format_release_error(error: ReleaseError) -> str:
    """Human-readable description of a release error."""
    match error:
        case UnsupportedArch(machine=machine):
            return f"CPU architecture not supported: {machine}"
        case InvalidVersion(version=version, reason=reason):
            return f"Invalid version '{version}': {reason}"
        case DirectoryMissing(path=path):
            return (
                f"Directory {path} does not exist or you don't have permissions to access it."
            )
        case CommandFailed(description=description, returncode=rc, detail=detail):
            if rc < 0 and detail:
                return f"{description}\n{detail}"
            return f"{description} (exit {rc})"
        case ArchiveFailed(description=description, path=path, reason=reason):
            return f"{description}\n{path}: {reason}"
        case ArtifactMissing(path=path, description=description):
            return f"{description}\nExpected output not found: {path}"
        case FileOperationFailed(path=path, reason=reason):
            return f"Could not update {path}: {reason}"


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print the ``**ERROR**`` diagnostic for a release error."""
    console.error(format_release_error(error))
    if isinstance(error, CommandFailed) and error.command:
        console.print(f"command: {' '.join(error.command)}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Every release error is fatal with the same status."""
    return int(ErrorCode.FAILURE)
