"""Facade for difficulty measurement across puzzles."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from orchestrator.router import ResolvedModule, resolve

from ._loader import get_handler
from ._utils import build_env


def analyze(
    puzzle_kind: str,
    puzzle: Dict[str, Any],
    *,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[Dict[str, Any], ResolvedModule]:
    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "difficulty", profile, env_map)
    handler = get_handler(resolved, "port_analyze")
    return handler(puzzle), resolved


__all__ = ["analyze"]
