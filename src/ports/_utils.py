"""Environment helpers shared by the port facades and the orchestrator."""

from __future__ import annotations

import os
from typing import Dict, Mapping

PROFILE_ENV_VAR = "PUZZLE_VALIDATION_PROFILE"
DEFAULT_PROFILE = "dev"


def build_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Process environment with ``overrides`` layered on top, all as strings."""

    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items() if v is not None})
    return env


def profile_from_env(env: Mapping[str, str], default: str = DEFAULT_PROFILE) -> str:
    value = str(env.get(PROFILE_ENV_VAR, "") or "").strip().lower()
    if not value or value == "auto":
        return default
    return value


__all__ = ["DEFAULT_PROFILE", "PROFILE_ENV_VAR", "build_env", "profile_from_env"]
