"""Platform abstraction layer."""

from .detection import (
    Arch,
    UnsupportedArch,
    detect_arch,
    detect_machine,
    resolve_arch,
)
from .files import clear_dir_files, copy_into, move_into, remove_matching
from .process import (
    ProcessError,
    exec_replace,
    format_command,
    run_silent,
)

__all__ = [
    # detection
    "Arch",
    "UnsupportedArch",
    "detect_arch",
    "detect_machine",
    "resolve_arch",
    # files
    "clear_dir_files",
    "copy_into",
    "move_into",
    "remove_matching",
    # process
    "ProcessError",
    "exec_replace",
    "format_command",
    "run_silent",
]
