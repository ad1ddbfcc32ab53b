"""Facade for generator implementations across puzzles."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from orchestrator.router import ResolvedModule, resolve

from ._loader import get_handler
from ._utils import build_env


def generate(
    puzzle_kind: str,
    level: int,
    *,
    seed: int | str | None = None,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
) -> tuple[Dict[str, Any], ResolvedModule]:
    """Generate a puzzle of ``puzzle_kind`` at ``level``."""

    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "generator", profile, env_map)
    handler = get_handler(resolved, "port_generate")
    payload = handler(level, seed=seed)
    return payload, resolved


__all__ = ["generate"]
