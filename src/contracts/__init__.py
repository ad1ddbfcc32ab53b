"""Contract checks for puzzle and session payloads."""

from __future__ import annotations

from .errors import ManagedValidationError, ValidationIssue, ValidationReport
from .jsoncanon import jcs_dump, jcs_sha256
from .profiles import ProfileConfig, get_profile
from .validator import assert_valid, validate

__all__ = [
    "ManagedValidationError",
    "ProfileConfig",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid",
    "get_profile",
    "jcs_dump",
    "jcs_sha256",
    "validate",
]
