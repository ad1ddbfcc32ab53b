"""Public facade for payload validation."""

from __future__ import annotations

import os
import time
from typing import Any, Dict, List, Tuple

import jsonschema

from . import loader, profiles, rulebook
from .errors import (
    SEVERITY_WARN,
    ManagedValidationError,
    ValidationIssue,
    ValidationReport,
    make_error,
)
from .profiles import ProfileConfig


def _choose_profile(profile: str | ProfileConfig | None) -> ProfileConfig:
    if isinstance(profile, ProfileConfig):
        return profile
    if profile in (None, "", "auto"):
        return profiles.get_profile(os.environ.get("PUZZLE_VALIDATION_PROFILE"))
    return profiles.get_profile(str(profile))


def _jsonschema_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _schema_stage(payload: Any, expect_type: str) -> List[ValidationIssue]:
    if not isinstance(payload, dict):
        return [make_error("type.mismatch", "Payload must be a JSON object", "$")]
    try:
        descriptor = loader.get_descriptor(expect_type)
    except KeyError:
        return [make_error("schema.not_found", f"Unknown payload type {expect_type}", "$")]
    try:
        validator = loader.compile_validator(descriptor)
    except (OSError, ValueError) as exc:
        return [make_error("schema.not_found", str(exc), "$")]

    errors = sorted(validator.iter_errors(payload), key=_jsonschema_path)
    return [make_error("schema.violation", error.message, _jsonschema_path(error)) for error in errors]


def _apply_overrides(
    profile: ProfileConfig, payload_type: str, issues: List[ValidationIssue]
) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []
    for issue in issues:
        adjusted = profile.apply_overrides(payload_type, issue)
        if adjusted.severity == SEVERITY_WARN:
            warnings.append(adjusted)
        else:
            errors.append(adjusted)
    return errors, warnings


def validate(
    payload: Dict[str, Any],
    expect_type: str,
    profile: str | ProfileConfig | None = None,
) -> ValidationReport:
    """Run schema checks, then invariant rules, against ``payload``.

    Invariants only run once the schema stage passes, so rules may rely on
    the documented field types.
    """

    profile_cfg = _choose_profile(profile)
    timings = {"schema": 0, "invariants": 0}
    all_errors: List[ValidationIssue] = []
    all_warnings: List[ValidationIssue] = []

    if profile_cfg.check_schema:
        schema_start = time.perf_counter()
        errors, warnings = _apply_overrides(profile_cfg, expect_type, _schema_stage(payload, expect_type))
        all_errors.extend(errors)
        all_warnings.extend(warnings)
        timings["schema"] = int((time.perf_counter() - schema_start) * 1000)

    if profile_cfg.check_invariants and isinstance(payload, dict) and not all_errors:
        invariants_start = time.perf_counter()
        issues = rulebook.run_invariants(payload, expect_type, profile_cfg)
        errors, warnings = _apply_overrides(profile_cfg, expect_type, issues)
        all_errors.extend(errors)
        all_warnings.extend(warnings)
        timings["invariants"] = int((time.perf_counter() - invariants_start) * 1000)

    return ValidationReport(ok=not all_errors, errors=all_errors, warnings=all_warnings, timings_ms=timings)


def assert_valid(
    payload: Dict[str, Any],
    expect_type: str,
    profile: str | ProfileConfig | None = None,
) -> None:
    profile_cfg = _choose_profile(profile)
    report = validate(payload, expect_type, profile=profile_cfg)
    if report.ok and not (profile_cfg.warn_as_error and report.warnings):
        return
    issues = report.errors[:]
    if profile_cfg.warn_as_error:
        issues.extend(report.warnings)
    codes = ", ".join(issue.code for issue in issues[:5])
    if len(issues) > 5:
        codes += ", ..."
    raise ManagedValidationError(f"Validation failed for {expect_type}: {codes}", report)


__all__ = [
    "ManagedValidationError",
    "assert_valid",
    "validate",
]
