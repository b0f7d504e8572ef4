"""Typed release configuration.

The release workspace may contain a ``release.toml``. Every section is
optional; a missing file yields the defaults below.

    [arm]
    address = "10.0.0.5"
    port = 22
    user = "builder"
    path = "/srv/rocketpool"

    [docker]
    namespace = "rocketpool"
    image = "smartnode"
    dockerfile = "docker/rocketpool-dockerfile"

    [paths]
    smartnode = "smartnode"
    install = "smartnode-install"

The ``[arm]`` values can be overridden with ``RP_ARM_ADDRESS``,
``RP_ARM_PORT``, ``RP_ARM_USER`` and ``RP_ARM_PATH``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "ArmHostConfig",
    "ConfigError",
    "DockerConfig",
    "PathsConfig",
    "ReleaseConfig",
    "CONFIG_FILENAME",
    "DEFAULT_DOCKER_NAMESPACE",
    "DEFAULT_DOCKER_IMAGE",
    "DEFAULT_DOCKERFILE",
    "DEFAULT_SSH_PORT",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "release.toml"

DEFAULT_DOCKER_NAMESPACE = "rocketpool"
DEFAULT_DOCKER_IMAGE = "smartnode"
DEFAULT_DOCKERFILE = "docker/rocketpool-dockerfile"
DEFAULT_SSH_PORT = 22


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ArmHostConfig:
    """Remote arm64 machine that already built the arm64 daemon.

    ``path`` is the directory on that machine holding the per-version output
    directories (the remote equivalent of the local workspace root).
    """

    address: str | None = None
    port: int = DEFAULT_SSH_PORT
    user: str | None = None
    path: str | None = None

    @property
    def is_configured(self) -> bool:
        return self.address is not None

    def remote_file(self, version: str, filename: str) -> str:
        """scp source spec for a file in the remote version directory."""
        host = f"{self.user}@{self.address}" if self.user else f"{self.address}"
        return f"{host}:{self.path}/{version}/{filename}"


@dataclass(frozen=True, slots=True)
class DockerConfig:
    namespace: str = DEFAULT_DOCKER_NAMESPACE
    image: str = DEFAULT_DOCKER_IMAGE
    dockerfile: str = DEFAULT_DOCKERFILE

    @property
    def repository(self) -> str:
        return f"{self.namespace}/{self.image}"


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Source checkouts, relative to the workspace root."""

    smartnode: str = "smartnode"
    install: str = "smartnode-install"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    arm: ArmHostConfig = field(default_factory=ArmHostConfig)
    docker: DockerConfig = field(default_factory=DockerConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a ReleaseConfig from parsed TOML."""
        arm: StrDict = get_table(data, "arm") or {}
        docker: StrDict = get_table(data, "docker") or {}
        paths: StrDict = get_table(data, "paths") or {}

        port = get_int(arm, "port")
        if port is None and arm.get("port") is not None:
            raise ValueError(f"arm.port must be an integer, got {arm.get('port')!r}")

        return cls(
            arm=ArmHostConfig(
                address=get_str(arm, "address"),
                port=DEFAULT_SSH_PORT if port is None else port,
                user=get_str(arm, "user"),
                path=get_str(arm, "path"),
            ),
            docker=DockerConfig(
                namespace=get_str(docker, "namespace") or DEFAULT_DOCKER_NAMESPACE,
                image=get_str(docker, "image") or DEFAULT_DOCKER_IMAGE,
                dockerfile=get_str(docker, "dockerfile") or DEFAULT_DOCKERFILE,
            ),
            paths=PathsConfig(
                smartnode=get_str(paths, "smartnode") or "smartnode",
                install=get_str(paths, "install") or "smartnode-install",
            ),
        )

    def with_env_overrides(self, env: Mapping[str, str]) -> ReleaseConfig:
        """Apply RP_ARM_* environment overrides. Empty values are ignored."""
        arm = self.arm
        address = env.get("RP_ARM_ADDRESS", "").strip()
        user = env.get("RP_ARM_USER", "").strip()
        path = env.get("RP_ARM_PATH", "").strip()
        port = env.get("RP_ARM_PORT", "").strip()

        if address:
            arm = replace(arm, address=address)
        if user:
            arm = replace(arm, user=user)
        if path:
            arm = replace(arm, path=path)
        if port:
            if not port.isdigit():
                raise ValueError(f"RP_ARM_PORT must be an integer, got {port!r}")
            arm = replace(arm, port=int(port))
        return replace(self, arm=arm)

    def validate(self) -> str | None:
        """Return a problem description, or None if the config is usable."""
        if self.arm.is_configured and self.arm.path is None:
            return "arm.path is required when arm.address is set"
        if not 0 < self.arm.port < 65536:
            return f"arm.port out of range: {self.arm.port}"
        return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(
    path: Path, env: Mapping[str, str] | None = None
) -> Result[ReleaseConfig, ConfigError]:
    """Load release.toml, apply environment overrides and validate.

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = ReleaseConfig.from_dict(result.value)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))

    return _finish(config, env, path)


def load_config_or_default(
    path: Path, env: Mapping[str, str] | None = None
) -> Result[ReleaseConfig, ConfigError]:
    """Like load_config, but a missing file yields the default config.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return _finish(ReleaseConfig(), env, None)
    return load_config(path, env)


def _finish(
    config: ReleaseConfig, env: Mapping[str, str] | None, path: Path | None
) -> Result[ReleaseConfig, ConfigError]:
    if env is not None:
        try:
            config = config.with_env_overrides(env)
        except ValueError as e:
            return Err(ConfigError(str(e), path=path))

    problem = config.validate()
    if problem is not None:
        return Err(ConfigError(f"Invalid config: {problem}", path=path))
    return Ok(config)
