"""Tests for docker naming and command construction."""

from __future__ import annotations

from pathlib import Path

from rp.core.config import DockerConfig
from rp.platform.detection import Arch
from rp.services.release import docker

CFG = DockerConfig()


def test_tags() -> None:
    assert docker.manifest_tag(CFG, "v1.0.0") == "rocketpool/smartnode:v1.0.0"
    assert docker.arch_tag(CFG, "v1.0.0", Arch.ARM64) == "rocketpool/smartnode:v1.0.0-arm64"


def test_build_and_push() -> None:
    assert docker.build_image_cmd(CFG, "v1.0.0", Arch.AMD64) == [
        "docker",
        "build",
        "-t",
        "rocketpool/smartnode:v1.0.0-amd64",
        "-f",
        "docker/rocketpool-dockerfile",
        ".",
    ]
    assert docker.push_image_cmd(CFG, "v1.0.0", Arch.AMD64) == [
        "docker",
        "push",
        "rocketpool/smartnode:v1.0.0-amd64",
    ]


def test_manifest_commands_reference_both_arches() -> None:
    assert docker.manifest_create_cmd(CFG, "v1.0.0") == [
        "docker",
        "manifest",
        "create",
        "rocketpool/smartnode:v1.0.0",
        "--amend",
        "rocketpool/smartnode:v1.0.0-amd64",
        "--amend",
        "rocketpool/smartnode:v1.0.0-arm64",
    ]
    assert docker.manifest_push_cmd(CFG, "v1.0.0") == [
        "docker",
        "manifest",
        "push",
        "--purge",
        "rocketpool/smartnode:v1.0.0",
    ]


def test_manifest_cache_path() -> None:
    path = docker.manifest_cache_path(DockerConfig(namespace="me"), "v2", Path("/home/u"))
    assert path == Path("/home/u/.docker/manifests/docker.io_me_smartnode-v2")
