"""Release steps and step selection.

Declaration order of ``ReleaseStep`` is the execution order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

__all__ = ["ReleaseStep", "StepSelection"]


class ReleaseStep(Enum):
    CLI = "cli"
    PACKAGES = "packages"
    DAEMON = "daemon"
    DOCKER = "docker"
    MANIFEST = "manifest"

    def __str__(self) -> str:
        return self.value

    @property
    def title(self) -> str:
        return _TITLES[self]


_TITLES: dict[ReleaseStep, str] = {
    ReleaseStep.CLI: "CLI binaries",
    ReleaseStep.PACKAGES: "Smartnode installer packages",
    ReleaseStep.DAEMON: "Daemon binary",
    ReleaseStep.DOCKER: "Docker Smartnode image",
    ReleaseStep.MANIFEST: "Docker manifest",
}


@dataclass(frozen=True, slots=True)
class StepSelection:
    """Set of steps to run; iteration always follows declaration order."""

    steps: frozenset[ReleaseStep] = frozenset()

    @classmethod
    def of(cls, steps: Iterable[ReleaseStep]) -> StepSelection:
        return cls(frozenset(steps))

    @classmethod
    def everything(cls) -> StepSelection:
        return cls(frozenset(ReleaseStep))

    @classmethod
    def from_flags(
        cls,
        *,
        all_steps: bool = False,
        cli: bool = False,
        packages: bool = False,
        daemon: bool = False,
        docker: bool = False,
        manifest: bool = False,
    ) -> StepSelection:
        if all_steps:
            return cls.everything()
        flags = {
            ReleaseStep.CLI: cli,
            ReleaseStep.PACKAGES: packages,
            ReleaseStep.DAEMON: daemon,
            ReleaseStep.DOCKER: docker,
            ReleaseStep.MANIFEST: manifest,
        }
        return cls(frozenset(step for step, on in flags.items() if on))

    def ordered(self) -> list[ReleaseStep]:
        return [step for step in ReleaseStep if step in self.steps]

    def __iter__(self) -> Iterator[ReleaseStep]:
        return iter(self.ordered())

    def __contains__(self, step: object) -> bool:
        return step in self.steps

    def __len__(self) -> int:
        return len(self.steps)

    def __bool__(self) -> bool:
        return bool(self.steps)
