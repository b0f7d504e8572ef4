"""Tests for release step selection."""

from __future__ import annotations

from rp.services.release.steps import ReleaseStep, StepSelection


def test_declared_order() -> None:
    assert [str(s) for s in ReleaseStep] == ["cli", "packages", "daemon", "docker", "manifest"]


def test_all_flag_selects_everything_in_order() -> None:
    selection = StepSelection.from_flags(all_steps=True)
    assert selection.ordered() == list(ReleaseStep)
    assert len(selection) == 5


def test_individual_flags_iterate_in_fixed_order() -> None:
    selection = StepSelection.from_flags(manifest=True, cli=True, docker=True)
    assert list(selection) == [ReleaseStep.CLI, ReleaseStep.DOCKER, ReleaseStep.MANIFEST]


def test_all_flag_wins_over_individual_flags() -> None:
    assert StepSelection.from_flags(all_steps=True, cli=True) == StepSelection.everything()


def test_empty_selection_is_falsy() -> None:
    selection = StepSelection.from_flags()
    assert not selection
    assert ReleaseStep.CLI not in selection


def test_of() -> None:
    selection = StepSelection.of([ReleaseStep.DAEMON, ReleaseStep.PACKAGES])
    assert selection.ordered() == [ReleaseStep.PACKAGES, ReleaseStep.DAEMON]
    assert ReleaseStep.DAEMON in selection


def test_titles() -> None:
    assert ReleaseStep.PACKAGES.title == "Smartnode installer packages"
