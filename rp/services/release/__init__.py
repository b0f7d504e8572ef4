"""Release artifact orchestration."""

from .errors import ReleaseError
from .service import ReleaseReport, ReleaseService, StepOutcome, validate_version
from .steps import ReleaseStep, StepSelection

__all__ = [
    "ReleaseError",
    "ReleaseReport",
    "ReleaseService",
    "ReleaseStep",
    "StepOutcome",
    "StepSelection",
    "validate_version",
]
