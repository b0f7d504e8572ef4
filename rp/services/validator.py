"""ETH2 validator client launcher for the smartnode docker stack.

The container environment picks the client and the beacon node:

- ``CLIENT``: ``lighthouse`` or ``prysm``
- ``ETH2_PROVIDER``: beacon node address (host:port)
- ``CUSTOM_GRAFFITI``: optional text appended to the Rocket Pool graffiti

``plan_launch`` is pure and decides what to run; ``launch`` replaces the
current process with it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from rp.platform.process import ProcessError, exec_replace

__all__ = [
    "GRAFFITI_VERSION",
    "UnsupportedClient",
    "ValidatorClient",
    "ValidatorLaunch",
    "build_graffiti",
    "launch",
    "plan_launch",
]

# Rocket Pool version advertised in block graffiti
GRAFFITI_VERSION = "v0.0.6"

CLIENT_ENV = "CLIENT"
PROVIDER_ENV = "ETH2_PROVIDER"
GRAFFITI_ENV = "CUSTOM_GRAFFITI"

TESTNET = "medalla"


class ValidatorClient(Enum):
    LIGHTHOUSE = "lighthouse"
    PRYSM = "prysm"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> ValidatorClient | None:
        """Exact, case-sensitive match on the client name."""
        for client in cls:
            if client.value == value:
                return client
        return None


@dataclass(frozen=True, slots=True)
class UnsupportedClient:
    value: str | None

    @property
    def message(self) -> str:
        supported = ", ".join(c.value for c in ValidatorClient)
        shown = self.value if self.value else "(unset)"
        return f"Unsupported validator client {shown}; expected one of: {supported}"


@dataclass(frozen=True, slots=True)
class ValidatorLaunch:
    client: ValidatorClient
    argv: tuple[str, ...]
    graffiti: str
    provider: str


def build_graffiti(suffix: str | None) -> str:
    """``RP <version>``, plus `` (<suffix>)`` when a suffix is given."""
    graffiti = f"RP {GRAFFITI_VERSION}"
    if suffix:
        graffiti = f"{graffiti} ({suffix})"
    return graffiti


def _lighthouse_argv(provider: str, graffiti: str) -> tuple[str, ...]:
    return (
        "/usr/local/bin/lighthouse",
        "validator",
        "--testnet",
        TESTNET,
        "--datadir",
        "/data/validators/lighthouse",
        "--init-slashing-protection",
        "--beacon-node",
        f"http://{provider}",
        "--graffiti",
        graffiti,
    )


def _prysm_argv(provider: str, graffiti: str) -> tuple[str, ...]:
    return (
        "/app/validator/image.binary",
        "--wallet-dir",
        "/data/validators/prysm-non-hd",
        "--wallet-password-file",
        "/data/password",
        "--beacon-rpc-provider",
        provider,
        "--graffiti",
        graffiti,
    )


def plan_launch(env: Mapping[str, str]) -> ValidatorLaunch | UnsupportedClient:
    """Decide which validator to start for this environment."""
    raw = env.get(CLIENT_ENV)
    client = ValidatorClient.parse(raw)
    if client is None:
        return UnsupportedClient(value=raw)

    provider = env.get(PROVIDER_ENV, "")
    graffiti = build_graffiti(env.get(GRAFFITI_ENV))
    match client:
        case ValidatorClient.LIGHTHOUSE:
            argv = _lighthouse_argv(provider, graffiti)
        case ValidatorClient.PRYSM:
            argv = _prysm_argv(provider, graffiti)
    return ValidatorLaunch(client=client, argv=argv, graffiti=graffiti, provider=provider)


def launch(plan: ValidatorLaunch, env: Mapping[str, str] | None = None) -> ProcessError:
    """Exec the validator. Returns only if the exec failed."""
    return exec_replace(list(plan.argv), env)
