"""Module resolution router mapping (puzzle kind, role) to an implementation."""

from __future__ import annotations

import importlib.util
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from project_config import get_config

SUPPORTED_ROLES = {"solver", "generator", "difficulty"}

# Built-in implementations used when nothing is configured or the configured
# module cannot be found and fallback is allowed.
DEFAULT_IMPLS: Dict[str, Dict[str, str]] = {
    "geosudo": {
        "generator": "geosudo.generator",
        "solver": "geosudo.answers",
        "difficulty": "geosudo.analyzer",
    },
    "motion": {
        "generator": "motion.generator",
        "solver": "motion.play",
        "difficulty": "motion.solver",
    },
}


class RouterError(RuntimeError):
    """Raised when a module resolution request cannot be satisfied."""


@dataclass(frozen=True)
class ResolvedModule:
    """Description of the module chosen for a puzzle role."""

    puzzle_kind: str
    role: str
    impl_id: str
    module_id: str
    decision_source: str
    allow_fallback: bool
    fallback_used: bool
    config: Dict[str, Any]


def _normalise_env(env: Mapping[str, str]) -> Dict[str, str]:
    return {str(k).upper(): str(v) for k, v in env.items()}


def _extract_role_policy(puzzle_kind: str, role: str, profile: str) -> Dict[str, Any]:
    config = get_config()
    modules = config.get("modules", {})
    puzzle_cfg = modules.get(puzzle_kind, {}) if isinstance(modules, dict) else {}
    role_cfg = puzzle_cfg.get(role, {}) if isinstance(puzzle_cfg, dict) else {}

    policy: Dict[str, Any] = {}
    if isinstance(role_cfg, dict):
        for key, value in role_cfg.items():
            if key == "by_profile":
                continue
            policy[key] = value

        by_profile = role_cfg.get("by_profile")
        if isinstance(by_profile, dict):
            profile_block = by_profile.get(profile)
            if isinstance(profile_block, dict):
                policy.update(profile_block)
    return policy


def _resolve_impl(policy: Dict[str, Any], env: Dict[str, str], role: str, default: str) -> tuple[str, str]:
    role_upper = role.upper()
    cli_impl_key = f"CLI_PUZZLE_{role_upper}_IMPL"
    env_impl_key = f"PUZZLE_{role_upper}_IMPL"

    decision_source = "config" if policy.get("impl") else "default"
    impl = str(policy.get("impl", default))

    if env.get(env_impl_key):
        impl = env[env_impl_key]
        decision_source = "env"
    if env.get(cli_impl_key):
        impl = env[cli_impl_key]
        decision_source = "cli"

    return impl, decision_source


def _module_exists(module_name: str) -> bool:
    try:
        return importlib.util.find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False


def resolve(puzzle_kind: str, role: str, profile: str, env: Mapping[str, str]) -> ResolvedModule:
    if role not in SUPPORTED_ROLES:
        raise RouterError(f"Unsupported role '{role}'")

    defaults = DEFAULT_IMPLS.get(puzzle_kind)
    if defaults is None:
        raise RouterError(f"Puzzle '{puzzle_kind}' is not registered")
    default_impl = defaults[role]

    env_map = _normalise_env(env)
    policy = _extract_role_policy(puzzle_kind, role, profile.lower())
    allow_fallback = bool(policy.get("allow_fallback", True))

    impl, decision_source = _resolve_impl(policy, env_map, role, default_impl)

    fallback_used = False
    if not _module_exists(impl):
        if allow_fallback and impl != default_impl:
            impl = default_impl
            fallback_used = True
            decision_source = "fallback"
        else:
            raise RouterError(
                f"Implementation '{impl}' for role '{role}' is not available for puzzle '{puzzle_kind}'"
            )

    return ResolvedModule(
        puzzle_kind=puzzle_kind,
        role=role,
        impl_id=impl,
        module_id=f"{puzzle_kind}:/{impl}@",
        decision_source=decision_source,
        allow_fallback=allow_fallback,
        fallback_used=fallback_used,
        config=dict(policy),
    )


__all__ = ["DEFAULT_IMPLS", "ResolvedModule", "RouterError", "resolve", "SUPPORTED_ROLES"]
