"""Release artifact orchestration.

Builds the smartnode release artifacts for one version and collects them in
``<workspace>/<version>/``:

- CLI binaries for every supported platform
- installer packages (one .tar.xz per architecture) plus install.sh
- the daemon binary for this host, and optionally the arm64 one fetched
  from a remote build machine
- the Docker image for this host's architecture, and the multi-arch manifest

Steps run in ``ReleaseStep`` order. The first failing step ends the run;
nothing is retried or rolled back. macOS daemons are not built here.
"""

from __future__ import annotations

import tarfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rp.core.config import ReleaseConfig
from rp.core.result import Err, Ok, Result
from rp.core.workspace import Workspace
from rp.output.console import ConsoleProtocol, Style
from rp.platform.detection import Arch
from rp.platform.files import clear_dir_files, copy_into, move_into, remove_matching
from rp.platform.process import format_command, run_silent

from . import docker
from .errors import (
    ArchiveFailed,
    ArtifactMissing,
    CommandFailed,
    DirectoryMissing,
    FileOperationFailed,
    InvalidVersion,
    ReleaseError,
)
from .steps import ReleaseStep, StepSelection

__all__ = [
    "CLI_BINARIES",
    "ReleaseReport",
    "ReleaseService",
    "StepOutcome",
    "installer_archive_name",
    "validate_version",
]

CLI_BUILD_SCRIPT = "./build.sh"
DAEMON_BUILD_SCRIPT = "./daemon-build.sh"
INSTALL_SCRIPT = "install.sh"
INSTALLER_TREE = "rp-smartnode-install"
ARM64_DAEMON_BINARY = "rocketpool-daemon-linux-arm64"

CLI_BINARIES: tuple[str, ...] = (
    "rocketpool-cli-linux-amd64",
    "rocketpool-cli-darwin-amd64",
    "rocketpool-cli-windows-amd64.exe",
    "rocketpool-cli-linux-arm64",
    "rocketpool-cli-darwin-arm64",
)

Artifacts = list[str]


def installer_archive_name(arch: Arch) -> str:
    return f"{INSTALLER_TREE}-{arch}.tar.xz"


def validate_version(version: str) -> Result[str, InvalidVersion]:
    """The version becomes a directory name, so it must be a single path segment."""
    v = version.strip()
    if not v:
        return Err(InvalidVersion(version, "version is empty"))
    if v in (".", "..") or "/" in v or "\\" in v:
        return Err(InvalidVersion(version, "version must be a plain directory name"))
    return Ok(v)


@dataclass(frozen=True, slots=True)
class StepOutcome:
    step: ReleaseStep
    artifacts: tuple[str, ...]


@dataclass(slots=True)
class ReleaseReport:
    version: str
    arch: Arch
    output_dir: Path
    completed: list[StepOutcome] = field(default_factory=list)

    @property
    def steps(self) -> list[ReleaseStep]:
        return [o.step for o in self.completed]


class ReleaseService:
    """Builds and publishes release artifacts for one version."""

    def __init__(
        self,
        *,
        workspace: Workspace,
        config: ReleaseConfig,
        arch: Arch,
        version: str,
        console: ConsoleProtocol,
        home: Path | None = None,
        dry_run: bool = False,
    ) -> None:
        self._workspace = workspace
        self._config = config
        self._arch = arch
        self._version = version
        self._console = console
        self._home = home if home is not None else Path.home()
        self._dry_run = dry_run

    @property
    def output_dir(self) -> Path:
        return self._workspace.output_dir(self._version)

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    def actions(self) -> dict[ReleaseStep, Callable[[], Result[Artifacts, ReleaseError]]]:
        return {
            ReleaseStep.CLI: self.build_cli,
            ReleaseStep.PACKAGES: self.build_install_packages,
            ReleaseStep.DAEMON: self.build_daemon,
            ReleaseStep.DOCKER: self.build_docker_image,
            ReleaseStep.MANIFEST: self.build_docker_manifest,
        }

    def run(self, selection: StepSelection) -> Result[ReleaseReport, ReleaseError]:
        """Run the selected steps in order, stopping at the first failure."""
        report = ReleaseReport(version=self._version, arch=self._arch, output_dir=self.output_dir)
        if not selection:
            return Ok(report)

        prepared = self.prepare_output_dir()
        if isinstance(prepared, Err):
            return prepared

        actions = self.actions()
        for step in selection:
            self._console.header(f"Building {step.title}...")
            result = actions[step]()
            if isinstance(result, Err):
                return result
            report.completed.append(StepOutcome(step=step, artifacts=tuple(result.value)))
            self._console.success(step.title)

        return Ok(report)

    def prepare_output_dir(self) -> Result[Path, ReleaseError]:
        """Create the version directory and drop artifacts from earlier runs."""
        out = self.output_dir
        if self._dry_run:
            self._console.print(f"rm -f {out}/*", Style.DIM)
            return Ok(out)
        try:
            clear_dir_files(out)
        except OSError as e:
            return Err(FileOperationFailed(path=out, reason=str(e)))
        return Ok(out)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def build_cli(self) -> Result[Artifacts, ReleaseError]:
        """Build the CLI for every platform and collect the binaries."""
        cli_dir = self._workspace.cli_dir
        checked = self._require_dir(cli_dir)
        if isinstance(checked, Err):
            return checked

        removed = self._remove_matching(cli_dir, "rocketpool-cli-*")
        if isinstance(removed, Err):
            return removed

        built = self._run(
            [CLI_BUILD_SCRIPT], cwd=cli_dir, description="Error building CLI binaries."
        )
        if isinstance(built, Err):
            return built

        return self._collect(
            [cli_dir / name for name in CLI_BINARIES],
            description="Error building CLI binaries.",
        )

    def build_install_packages(self) -> Result[Artifacts, ReleaseError]:
        """Archive the per-arch installer trees and collect them with install.sh."""
        install_dir = self._workspace.install_dir
        checked = self._require_dir(install_dir)
        if isinstance(checked, Err):
            return checked

        archives: list[Path] = []
        for arch in Arch:
            archive = install_dir / str(arch) / installer_archive_name(arch)
            removed = self._remove_matching(archive.parent, archive.name)
            if isinstance(removed, Err):
                return removed

            created = self._archive(
                source=install_dir / str(arch) / INSTALLER_TREE,
                archive=archive,
                base=install_dir,
                description=f"Error building {arch} package.",
            )
            if isinstance(created, Err):
                return created
            archives.append(archive)

        collected = self._collect(archives, description="Error building installer packages.")
        if isinstance(collected, Err):
            return collected

        script = install_dir / INSTALL_SCRIPT
        self._console.print(f"cp {script} {self.output_dir}", Style.DIM)
        if self._dry_run:
            return Ok(collected.value + [INSTALL_SCRIPT])
        if not script.is_file():
            return Err(
                ArtifactMissing(path=script, description="Error copying the installer script.")
            )
        try:
            copy_into(script, self.output_dir)
        except OSError as e:
            return Err(FileOperationFailed(path=script, reason=str(e)))
        return Ok(collected.value + [INSTALL_SCRIPT])

    def build_daemon(self) -> Result[Artifacts, ReleaseError]:
        """Build this host's daemon, fetching the arm64 one first if configured."""
        smartnode = self._workspace.smartnode_dir
        checked = self._require_dir(smartnode)
        if isinstance(checked, Err):
            return checked

        daemon_dir = self._workspace.daemon_output_dir
        removed = self._remove_matching(daemon_dir, "rocketpool-daemon-*")
        if isinstance(removed, Err):
            return removed

        artifacts: Artifacts = []
        arm = self._config.arm
        if not arm.is_configured:
            self._console.warning(
                "ARM machine address not provided, skipping retrieval of the arm64 binary."
            )
        else:
            self._console.print("Retrieving arm64 binary...")
            copied = self._run(
                [
                    "scp",
                    "-P",
                    str(arm.port),
                    arm.remote_file(self._version, ARM64_DAEMON_BINARY),
                    str(self.output_dir),
                ],
                cwd=smartnode,
                description="Copying the arm64 daemon failed.",
            )
            if isinstance(copied, Err):
                return copied
            artifacts.append(ARM64_DAEMON_BINARY)

        built = self._run(
            [DAEMON_BUILD_SCRIPT], cwd=smartnode, description="Error building daemon binary."
        )
        if isinstance(built, Err):
            return built

        if self._dry_run:
            self._console.print(
                f"mv {daemon_dir}/rocketpool-daemon-* {self.output_dir}", Style.DIM
            )
            return Ok(artifacts)

        binaries = sorted(daemon_dir.glob("rocketpool-daemon-*")) if daemon_dir.is_dir() else []
        if not binaries:
            return Err(
                ArtifactMissing(
                    path=daemon_dir / "rocketpool-daemon-*",
                    description="Error building daemon binary.",
                )
            )
        collected = self._collect(binaries, description="Error building daemon binary.")
        if isinstance(collected, Err):
            return collected
        return Ok(artifacts + collected.value)

    def build_docker_image(self) -> Result[Artifacts, ReleaseError]:
        """Build this host's smartnode image and push it."""
        smartnode = self._workspace.smartnode_dir
        checked = self._require_dir(smartnode)
        if isinstance(checked, Err):
            return checked

        cfg = self._config.docker
        built = self._run(
            docker.build_image_cmd(cfg, self._version, self._arch),
            cwd=smartnode,
            description="Error building Docker Smartnode image.",
        )
        if isinstance(built, Err):
            return built

        self._console.print("Pushing to Docker Hub...")
        pushed = self._run(
            docker.push_image_cmd(cfg, self._version, self._arch),
            cwd=smartnode,
            description="Error pushing Docker Smartnode image to Docker Hub.",
        )
        if isinstance(pushed, Err):
            return pushed

        return Ok([docker.arch_tag(cfg, self._version, self._arch)])

    def build_docker_manifest(self) -> Result[Artifacts, ReleaseError]:
        """Create the multi-arch manifest and push it, replacing any remote one."""
        cfg = self._config.docker
        stale = docker.manifest_cache_path(cfg, self._version, self._home)
        self._console.print(f"rm -f {stale}", Style.DIM)
        if not self._dry_run:
            try:
                stale.unlink(missing_ok=True)
            except OSError as e:
                return Err(FileOperationFailed(path=stale, reason=str(e)))

        created = self._run(
            docker.manifest_create_cmd(cfg, self._version),
            cwd=self._workspace.root,
            description="Error creating Docker manifest.",
        )
        if isinstance(created, Err):
            return created

        pushed = self._run(
            docker.manifest_push_cmd(cfg, self._version),
            cwd=self._workspace.root,
            description="Error pushing Docker manifest to Docker Hub.",
        )
        if isinstance(pushed, Err):
            return pushed

        return Ok([docker.manifest_tag(cfg, self._version)])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_dir(self, path: Path) -> Result[Path, ReleaseError]:
        if not path.is_dir():
            return Err(DirectoryMissing(path=path))
        return Ok(path)

    def _run(self, cmd: list[str], *, cwd: Path, description: str) -> Result[None, ReleaseError]:
        self._console.print(format_command(cmd), Style.DIM)
        if self._dry_run:
            return Ok(None)
        result = run_silent(cmd, cwd=cwd)
        if isinstance(result, Err):
            e = result.error
            return Err(
                CommandFailed(
                    description=description,
                    command=e.command,
                    returncode=e.returncode,
                    detail=e.stderr,
                )
            )
        return Ok(None)

    def _remove_matching(self, directory: Path, pattern: str) -> Result[None, ReleaseError]:
        if self._dry_run:
            self._console.print(f"rm -f {directory / pattern}", Style.DIM)
            return Ok(None)
        try:
            remove_matching(directory, pattern)
        except OSError as e:
            return Err(FileOperationFailed(path=directory / pattern, reason=str(e)))
        return Ok(None)

    def _archive(
        self, *, source: Path, archive: Path, base: Path, description: str
    ) -> Result[Path, ReleaseError]:
        """Write an xz-compressed tar of ``source`` with paths relative to ``base``."""
        arcname = source.relative_to(base).as_posix()
        self._console.print(f"tar cfJ {archive.relative_to(base).as_posix()} {arcname}", Style.DIM)
        if self._dry_run:
            return Ok(archive)
        if not source.is_dir():
            return Err(DirectoryMissing(path=source))
        try:
            with tarfile.open(archive, "w:xz") as tar:
                tar.add(source, arcname=arcname)
        except (OSError, tarfile.TarError) as e:
            archive.unlink(missing_ok=True)
            return Err(ArchiveFailed(description=description, path=archive, reason=str(e)))
        return Ok(archive)

    def _collect(self, files: list[Path], *, description: str) -> Result[Artifacts, ReleaseError]:
        """Move build outputs into the version directory; all must exist."""
        if self._dry_run:
            for f in files:
                self._console.print(f"mv {f} {self.output_dir}", Style.DIM)
            return Ok([f.name for f in files])

        missing = [f for f in files if not f.is_file()]
        if missing:
            return Err(ArtifactMissing(path=missing[0], description=description))

        moved: Artifacts = []
        for f in files:
            try:
                moved.append(move_into(f, self.output_dir).name)
            except OSError as e:
                return Err(FileOperationFailed(path=f, reason=str(e)))
        return Ok(moved)
