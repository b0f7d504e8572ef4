from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from rp.core.config import ReleaseConfig, load_config, load_config_or_default
from rp.core.errors import ErrorCode
from rp.core.result import Err
from rp.core.workspace import Workspace, detect_workspace
from rp.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    config: ReleaseConfig
    console: ConsoleProtocol


def get_console() -> ConsoleProtocol:
    return RichConsole()


def build_context(
    *,
    console: ConsoleProtocol,
    workspace: Path | None = None,
    config_path: Path | None = None,
) -> CLIContext:
    """Resolve the workspace and load its release config, or exit."""
    workspace_result = detect_workspace(explicit=workspace)
    if isinstance(workspace_result, Err):
        console.error(workspace_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    ws = workspace_result.value

    if config_path is not None:
        config_result = load_config(config_path, os.environ)
    else:
        config_result = load_config_or_default(ws.config_path, os.environ)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    config = config_result.value

    return CLIContext(
        workspace=ws.with_paths(config.paths),
        config=config,
        console=console,
    )
