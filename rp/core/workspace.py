"""Release workspace detection and paths.

The release workspace is the directory that holds the ``smartnode`` and
``smartnode-install`` checkouts side by side. Each release run writes its
artifacts into ``<workspace>/<version>/``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import CONFIG_FILENAME, PathsConfig
from .result import Err, Ok, Result

__all__ = [
    "Workspace",
    "WorkspaceError",
    "WORKSPACE_ENV_VAR",
    "detect_workspace",
    "find_workspace_upward",
]

WORKSPACE_ENV_VAR = "RP_WORKSPACE"


@dataclass(frozen=True)
class WorkspaceError:
    """Error when the workspace cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A release workspace rooted at ``root``."""

    root: Path
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    @property
    def smartnode_dir(self) -> Path:
        """Smartnode checkout (daemon sources, Dockerfile)."""
        return self.root / self.paths.smartnode

    @property
    def cli_dir(self) -> Path:
        return self.smartnode_dir / "rocketpool-cli"

    @property
    def daemon_output_dir(self) -> Path:
        """Where daemon-build.sh leaves its binaries."""
        return self.smartnode_dir / "rocketpool"

    @property
    def install_dir(self) -> Path:
        """Installer checkout (per-arch file trees, install.sh)."""
        return self.root / self.paths.install

    def output_dir(self, version: str) -> Path:
        """Artifact directory for a release version."""
        return self.root / version

    def with_paths(self, paths: PathsConfig) -> Workspace:
        return Workspace(root=self.root, paths=paths)

    def __str__(self) -> str:
        return str(self.root)


def find_workspace_upward(start: Path) -> Path | None:
    """Search upward from start for a directory holding release.toml."""
    for parent in (start, *start.parents):
        if (parent / CONFIG_FILENAME).is_file():
            return parent
    return None


def detect_workspace(
    *,
    explicit: Path | None = None,
    start_dir: Path | None = None,
    env_var: str = WORKSPACE_ENV_VAR,
) -> Result[Workspace, WorkspaceError]:
    """Detect the workspace root directory.

    Detection order:
    1. Explicit path (``--workspace``)
    2. RP_WORKSPACE environment variable
    3. Nearest parent of start_dir (or cwd) containing release.toml
    4. start_dir (or cwd) itself
    """
    if explicit is not None:
        root = explicit.expanduser().resolve()
        if not root.is_dir():
            return Err(
                WorkspaceError(message=f"Workspace '{explicit}' is not a directory")
            )
        return Ok(Workspace(root=root))

    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir():
            return Ok(Workspace(root=env_path))
        return Err(
            WorkspaceError(
                message=f"${env_var} is set to '{env_value}' but it is not a directory",
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_workspace_upward(search_start)
    return Ok(Workspace(root=found or search_start))
