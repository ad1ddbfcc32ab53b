"""Validation findings and the error raised when a payload fails its contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a schema check or an invariant rule."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    timings_ms: Dict[str, int] = field(default_factory=dict)

    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors + self.warnings]


class ManagedValidationError(ValueError):
    """Raised by :func:`contracts.assert_valid` with the failing report attached."""

    def __init__(self, message: str, report: ValidationReport) -> None:
        super().__init__(message)
        self.report = report


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


__all__ = [
    "ManagedValidationError",
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]
