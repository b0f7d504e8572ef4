"""Tests for rp.platform.files module."""

from __future__ import annotations

from pathlib import Path

from rp.platform.files import clear_dir_files, copy_into, move_into, remove_matching


class TestClearDirFiles:
    def test_creates_missing_dir(self, tmp_path: Path) -> None:
        out = tmp_path / "v1.0.0"
        assert clear_dir_files(out) == []
        assert out.is_dir()

    def test_removes_files_keeps_subdirs(self, tmp_path: Path) -> None:
        out = tmp_path / "v1.0.0"
        (out / "nested").mkdir(parents=True)
        (out / "old.tar.xz").write_text("x")
        (out / "nested" / "keep").write_text("x")

        removed = clear_dir_files(out)

        assert removed == [out / "old.tar.xz"]
        assert (out / "nested" / "keep").exists()


class TestRemoveMatching:
    def test_glob(self, tmp_path: Path) -> None:
        (tmp_path / "rocketpool-cli-linux-amd64").write_text("x")
        (tmp_path / "rocketpool-cli-darwin-arm64").write_text("x")
        (tmp_path / "build.sh").write_text("x")

        removed = remove_matching(tmp_path, "rocketpool-cli-*")

        assert len(removed) == 2
        assert [p.name for p in tmp_path.iterdir()] == ["build.sh"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert remove_matching(tmp_path / "nope", "*") == []


class TestMoveAndCopy:
    def test_move_replaces_existing(self, tmp_path: Path) -> None:
        src_dir = tmp_path / "src"
        dest_dir = tmp_path / "dest"
        src_dir.mkdir()
        dest_dir.mkdir()
        (src_dir / "a.bin").write_text("new")
        (dest_dir / "a.bin").write_text("old")

        dest = move_into(src_dir / "a.bin", dest_dir)

        assert dest == dest_dir / "a.bin"
        assert dest.read_text() == "new"
        assert not (src_dir / "a.bin").exists()

    def test_copy_keeps_source(self, tmp_path: Path) -> None:
        dest_dir = tmp_path / "dest"
        dest_dir.mkdir()
        src = tmp_path / "install.sh"
        src.write_text("#!/bin/sh\n")

        dest = copy_into(src, dest_dir)

        assert dest.read_text() == "#!/bin/sh\n"
        assert src.exists()
