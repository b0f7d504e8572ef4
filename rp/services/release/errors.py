from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rp.platform.detection import UnsupportedArch

__all__ = [
    "ArchiveFailed",
    "ArtifactMissing",
    "CommandFailed",
    "DirectoryMissing",
    "FileOperationFailed",
    "InvalidVersion",
    "ReleaseError",
    "UnsupportedArch",
]


@dataclass(frozen=True, slots=True)
class InvalidVersion:
    version: str
    reason: str


@dataclass(frozen=True, slots=True)
class DirectoryMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class CommandFailed:
    description: str
    command: tuple[str, ...]
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ArchiveFailed:
    description: str
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    path: Path
    description: str


@dataclass(frozen=True, slots=True)
class FileOperationFailed:
    path: Path
    reason: str


ReleaseError = (
    UnsupportedArch
    | InvalidVersion
    | DirectoryMissing
    | CommandFailed
    | ArchiveFailed
    | ArtifactMissing
    | FileOperationFailed
)
