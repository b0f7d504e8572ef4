"""Exit codes for the rp commands.

Every failure in a release run is fatal and reported with the same exit
status, so the set is intentionally small. Usage help is not a failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()
