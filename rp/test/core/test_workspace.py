"""Tests for rp.core.workspace module."""

from __future__ import annotations

from pathlib import Path

import pytest

from rp.core.config import PathsConfig
from rp.core.result import Err, Ok
from rp.core.workspace import Workspace, detect_workspace


class TestWorkspacePaths:
    def test_default_layout(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path)
        assert ws.smartnode_dir == tmp_path / "smartnode"
        assert ws.cli_dir == tmp_path / "smartnode" / "rocketpool-cli"
        assert ws.daemon_output_dir == tmp_path / "smartnode" / "rocketpool"
        assert ws.install_dir == tmp_path / "smartnode-install"
        assert ws.output_dir("v1.2.3") == tmp_path / "v1.2.3"
        assert ws.config_path == tmp_path / "release.toml"

    def test_custom_paths(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path).with_paths(PathsConfig(smartnode="sn", install="inst"))
        assert ws.cli_dir == tmp_path / "sn" / "rocketpool-cli"
        assert ws.install_dir == tmp_path / "inst"


class TestDetectWorkspace:
    def test_explicit(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RP_WORKSPACE", str(tmp_path / "ignored"))
        result = detect_workspace(explicit=tmp_path)
        assert result == Ok(Workspace(root=tmp_path.resolve()))

    def test_explicit_missing(self, tmp_path: Path) -> None:
        result = detect_workspace(explicit=tmp_path / "nope")
        assert isinstance(result, Err)

    def test_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RP_WORKSPACE", str(tmp_path))
        (tmp_path / "elsewhere").mkdir()
        (tmp_path / "elsewhere" / "release.toml").write_text("", encoding="utf-8")
        result = detect_workspace(start_dir=tmp_path / "elsewhere")
        assert result == Ok(Workspace(root=tmp_path.resolve()))

    def test_env_not_a_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RP_WORKSPACE", str(tmp_path / "missing"))
        result = detect_workspace()
        assert isinstance(result, Err)
        assert "RP_WORKSPACE" in result.error.message

    def test_marker_upward(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RP_WORKSPACE", raising=False)
        (tmp_path / "release.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "smartnode" / "rocketpool-cli"
        nested.mkdir(parents=True)
        result = detect_workspace(start_dir=nested)
        assert result == Ok(Workspace(root=tmp_path.resolve()))

    def test_falls_back_to_start_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RP_WORKSPACE", raising=False)
        start = tmp_path / "no-marker-here"
        start.mkdir()
        result = detect_workspace(start_dir=start)
        assert isinstance(result, Ok)
        # A release.toml further up the real filesystem would win; otherwise start is used.
        assert start.resolve().is_relative_to(result.value.root)
