from __future__ import annotations

import pytest
import typer

import rp.cli.commands.validator_cmd as validator_cmd
from rp.output.console import MockConsole
from rp.platform.process import ProcessError
from rp.services.validator import ValidatorLaunch


@pytest.fixture
def console(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    mock = MockConsole()
    monkeypatch.setattr(validator_cmd, "get_console", lambda: mock)
    for var in ("CLIENT", "ETH2_PROVIDER", "CUSTOM_GRAFFITI"):
        monkeypatch.delenv(var, raising=False)
    return mock


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> list[ValidatorLaunch]:
    seen: list[ValidatorLaunch] = []

    def fake_launch(plan: ValidatorLaunch) -> ProcessError:
        seen.append(plan)
        return ProcessError(plan.argv, -1, "", "No such file or directory")

    monkeypatch.setattr(validator_cmd, "launch", fake_launch)
    return seen


def test_unsupported_client_starts_nothing(
    console: MockConsole, launched: list[ValidatorLaunch], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CLIENT", "teku")

    with pytest.raises(typer.Exit) as exc:
        validator_cmd.validator(dry_run=False)

    assert exc.value.exit_code == 0
    assert launched == []
    assert console.has_warning()


@pytest.mark.parametrize("client", ["lighthouse", "prysm"])
def test_launches_exactly_once(
    client: str,
    console: MockConsole,
    launched: list[ValidatorLaunch],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CLIENT", client)
    monkeypatch.setenv("ETH2_PROVIDER", "eth2:5052")
    monkeypatch.setenv("CUSTOM_GRAFFITI", "pool")

    with pytest.raises(typer.Exit) as exc:
        validator_cmd.validator(dry_run=False)

    assert len(launched) == 1
    assert launched[0].graffiti == "RP v0.0.6 (pool)"
    # fake_launch reports an exec failure
    assert exc.value.exit_code == 1
    assert console.find("No such file or directory")


def test_dry_run_prints_command(
    console: MockConsole, launched: list[ValidatorLaunch], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CLIENT", "prysm")
    monkeypatch.setenv("ETH2_PROVIDER", "eth2:5052")

    with pytest.raises(typer.Exit) as exc:
        validator_cmd.validator(dry_run=True)

    assert exc.value.exit_code == 0
    assert launched == []
    assert console.find("--graffiti 'RP v0.0.6'")


def test_missing_provider_warns(
    console: MockConsole, launched: list[ValidatorLaunch], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CLIENT", "lighthouse")

    with pytest.raises(typer.Exit):
        validator_cmd.validator(dry_run=True)

    assert console.find("ETH2_PROVIDER is not set")
