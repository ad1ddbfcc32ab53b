"""Validation severity profiles (dev/ci/prod)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Mapping

from .errors import SEVERITY_ERROR, ValidationIssue


@dataclass(frozen=True)
class ProfileConfig:
    """Profile toggles that govern which checks are executed."""

    name: str
    check_schema: bool = True
    check_invariants: bool = True
    warn_as_error: bool = False
    invariant_rules: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    severity_overrides: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def is_invariant_enabled(self, payload_type: str, rule_name: str) -> bool:
        rules = self.invariant_rules.get(payload_type)
        return rules is None or rule_name in rules

    def apply_overrides(self, payload_type: str, issue: ValidationIssue) -> ValidationIssue:
        overrides: Dict[str, str] = {}
        overrides.update(self.severity_overrides.get("*", {}))
        overrides.update(self.severity_overrides.get(payload_type, {}))
        desired = overrides.get(issue.code)
        if desired and desired != issue.severity:
            return replace(issue, severity=desired)
        return issue


# prod skips the search-backed rules; they are re-run in dev and ci.
_PROD_INVARIANTS = {
    "GeoSudoPuzzle": frozenset(
        {"geosudo_grid_shape", "geosudo_latin_square", "geosudo_question_empty", "geosudo_answer_consistent"}
    ),
    "MotionPuzzle": frozenset(
        {"motion_bounds", "motion_disjoint", "motion_single_target", "motion_exit_on_perimeter"}
    ),
}

_PROFILES: Dict[str, ProfileConfig] = {
    "dev": ProfileConfig(name="dev"),
    "ci": ProfileConfig(
        name="ci",
        warn_as_error=True,
        severity_overrides={
            "MotionPuzzle": {"invariant.motion.min_moves_mismatch": SEVERITY_ERROR},
        },
    ),
    "prod": ProfileConfig(name="prod", invariant_rules=_PROD_INVARIANTS),
}


def get_profile(name: str | None) -> ProfileConfig:
    """Return the profile matching *name* (defaults to ``dev``)."""

    key = (name or "dev").lower()
    if key not in _PROFILES:
        raise ValueError(f"Unknown validation profile: {name}")
    return _PROFILES[key]


__all__ = ["ProfileConfig", "get_profile"]
