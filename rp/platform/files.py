"""Filesystem helpers.

These raise OSError on failure; callers turn that into a release error.
"""

from __future__ import annotations

import shutil
from pathlib import Path

__all__ = ["clear_dir_files", "copy_into", "move_into", "remove_matching"]


def clear_dir_files(path: Path) -> list[Path]:
    """Create ``path`` if needed and delete the files directly inside it.

    Subdirectories are left alone. Returns the removed paths.
    """
    path.mkdir(parents=True, exist_ok=True)
    removed: list[Path] = []
    for entry in sorted(path.iterdir()):
        if entry.is_file() or entry.is_symlink():
            entry.unlink()
            removed.append(entry)
    return removed


def remove_matching(directory: Path, pattern: str) -> list[Path]:
    """Delete files in ``directory`` matching a glob pattern.

    A missing directory matches nothing.
    """
    if not directory.is_dir():
        return []
    removed: list[Path] = []
    for entry in sorted(directory.glob(pattern)):
        if entry.is_file() or entry.is_symlink():
            entry.unlink()
            removed.append(entry)
    return removed


def move_into(src: Path, dest_dir: Path) -> Path:
    """Move a file into ``dest_dir``, replacing a same-named file there."""
    dest = dest_dir / src.name
    if dest.exists() and not dest.is_dir():
        dest.unlink()
    shutil.move(str(src), str(dest))
    return dest


def copy_into(src: Path, dest_dir: Path) -> Path:
    """Copy a file into ``dest_dir`` preserving mode bits."""
    dest = dest_dir / src.name
    shutil.copy2(src, dest)
    return dest
