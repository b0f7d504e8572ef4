"""Docker image naming and command construction."""

from __future__ import annotations

from pathlib import Path

from rp.core.config import DockerConfig
from rp.platform.detection import Arch

__all__ = [
    "arch_tag",
    "build_image_cmd",
    "manifest_cache_path",
    "manifest_create_cmd",
    "manifest_push_cmd",
    "manifest_tag",
    "push_image_cmd",
]


def manifest_tag(docker: DockerConfig, version: str) -> str:
    """Multi-arch tag, e.g. ``rocketpool/smartnode:v1.0.0``."""
    return f"{docker.repository}:{version}"


def arch_tag(docker: DockerConfig, version: str, arch: Arch) -> str:
    """Per-arch tag, e.g. ``rocketpool/smartnode:v1.0.0-amd64``."""
    return f"{docker.repository}:{version}-{arch}"


def build_image_cmd(docker: DockerConfig, version: str, arch: Arch) -> list[str]:
    return [
        "docker",
        "build",
        "-t",
        arch_tag(docker, version, arch),
        "-f",
        docker.dockerfile,
        ".",
    ]


def push_image_cmd(docker: DockerConfig, version: str, arch: Arch) -> list[str]:
    return ["docker", "push", arch_tag(docker, version, arch)]


def manifest_create_cmd(docker: DockerConfig, version: str) -> list[str]:
    cmd = ["docker", "manifest", "create", manifest_tag(docker, version)]
    for arch in Arch:
        cmd += ["--amend", arch_tag(docker, version, arch)]
    return cmd


def manifest_push_cmd(docker: DockerConfig, version: str) -> list[str]:
    return ["docker", "manifest", "push", "--purge", manifest_tag(docker, version)]


def manifest_cache_path(docker: DockerConfig, version: str, home: Path) -> Path:
    """Local manifest list that `docker manifest create` refuses to overwrite."""
    name = f"docker.io_{docker.namespace}_{docker.image}-{version}"
    return home / ".docker" / "manifests" / name
