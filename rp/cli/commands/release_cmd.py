from __future__ import annotations

from pathlib import Path

import typer

from rp.cli.commands._helpers import exit_on_release_error, exit_with_code
from rp.cli.context import build_context, get_console
from rp.core.errors import ErrorCode
from rp.output.console import ConsoleProtocol, Style
from rp.platform.detection import detect_arch
from rp.services.release.service import ReleaseReport, ReleaseService, validate_version
from rp.services.release.steps import StepSelection

USAGE_LINES: tuple[str, ...] = (
    "Usage: rp-build-release [options] -v <version number>",
    "Run this from the directory that contains the smartnode and smartnode-install checkouts,",
    "or point --workspace at it.",
    "To copy the arm64 daemon binary from a remote system, set the [arm] section of",
    "release.toml or the RP_ARM_* environment variables.",
    "Options:",
    "\t-a\tBuild all of the artifacts",
    "\t-c\tBuild the CLI binaries for all platforms",
    "\t-m\tBuild the Daemon binary for this local platform",
    "\t-p\tBuild the Smartnode installer packages",
    "\t-d\tBuild the Docker Smartnode image and push it to Docker Hub",
    "\t-n\tBuild the Docker manifest, and push it to Docker Hub",
)


def print_usage(console: ConsoleProtocol) -> None:
    for line in USAGE_LINES:
        console.print(line)


def release(
    all_steps: bool = typer.Option(False, "-a", "--all", help="Build all of the artifacts."),
    cli: bool = typer.Option(
        False, "-c", "--cli", help="Build the CLI binaries for all platforms."
    ),
    packages: bool = typer.Option(
        False, "-p", "--packages", help="Build the Smartnode installer packages."
    ),
    daemon: bool = typer.Option(
        False, "-m", "--daemon", help="Build the Daemon binary for this local platform."
    ),
    docker: bool = typer.Option(
        False, "-d", "--docker", help="Build the Docker Smartnode image and push it."
    ),
    manifest: bool = typer.Option(
        False, "-n", "--manifest", help="Build the Docker manifest and push it."
    ),
    version: str | None = typer.Option(
        None, "-v", "--version", help="Release version (output directory and image tag)."
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", help="Directory holding the smartnode checkouts."
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Release config file (default: <workspace>/release.toml)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print what would be done without doing it."
    ),
) -> None:
    """Build the smartnode release artifacts for a version."""
    console = get_console()

    arch = exit_on_release_error(detect_arch(), console)

    if not version:
        print_usage(console)
        exit_with_code(int(ErrorCode.OK))

    version = exit_on_release_error(validate_version(version), console)

    selection = StepSelection.from_flags(
        all_steps=all_steps,
        cli=cli,
        packages=packages,
        daemon=daemon,
        docker=docker,
        manifest=manifest,
    )
    if not selection:
        console.warning("No build steps selected, nothing to do.")
        exit_with_code(int(ErrorCode.OK))

    ctx = build_context(console=console, workspace=workspace, config_path=config)
    service = ReleaseService(
        workspace=ctx.workspace,
        config=ctx.config,
        arch=arch,
        version=version,
        console=console,
        dry_run=dry_run,
    )

    report = exit_on_release_error(service.run(selection), console)
    _print_summary(report, console)


def _print_summary(report: ReleaseReport, console: ConsoleProtocol) -> None:
    console.header(f"Release {report.version} ({report.arch})")
    for outcome in report.completed:
        console.print(f"{outcome.step.title}:", Style.BOLD)
        for artifact in outcome.artifacts:
            console.print(f"  {artifact}")
    console.print(f"Artifacts are in {report.output_dir}", Style.INFO)
