"""Host CPU architecture detection.

Release artifacts are only built on amd64 and arm64 hosts; the architecture
is resolved once per run and used to tag Docker images.
"""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from rp.core.result import Err, Ok, Result

__all__ = [
    "Arch",
    "UnsupportedArch",
    "detect_arch",
    "detect_machine",
    "resolve_arch",
]


class Arch(Enum):
    """Supported CPU architectures, valued by their Docker/Go tag."""

    AMD64 = "amd64"
    ARM64 = "arm64"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class UnsupportedArch:
    """The host reported a machine type we cannot build on."""

    machine: str


_MACHINE_ALIASES: dict[str, Arch] = {
    "x86_64": Arch.AMD64,
    "amd64": Arch.AMD64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


def resolve_arch(machine: str) -> Result[Arch, UnsupportedArch]:
    """Map a machine type (as printed by ``uname -m``) to an Arch.

    Example: resolve_arch("x86_64") -> Ok(Arch.AMD64)
    """
    arch = _MACHINE_ALIASES.get(machine.strip().lower())
    if arch is None:
        return Err(UnsupportedArch(machine=machine))
    return Ok(arch)


@lru_cache(maxsize=1)
def detect_machine() -> str:
    """Raw host machine type (cached)."""
    return _platform.machine()


def detect_arch() -> Result[Arch, UnsupportedArch]:
    """Resolve the host architecture."""
    return resolve_arch(detect_machine())
