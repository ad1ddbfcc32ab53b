"""Facade for answer checking across puzzles."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from orchestrator import log
from orchestrator.router import ResolvedModule, resolve

from ._loader import get_handler
from ._utils import build_env


def check_answer(
    puzzle_kind: str,
    puzzle: Mapping[str, Any],
    answer: Any,
    *,
    profile: str = "dev",
    env: Mapping[str, str] | None = None,
    emit_events: bool = False,
) -> tuple[Dict[str, Any], ResolvedModule]:
    """Judge ``answer`` against ``puzzle``.

    GeoSudo answers are shape names; Motion answers are move lists of
    ``{"item_id", "direction"}`` mappings.  With ``emit_events`` the verdict
    is also appended to the event journal as ``answer_validated``.
    """

    env_map = build_env(env)
    resolved = resolve(puzzle_kind, "solver", profile, env_map)
    handler = get_handler(resolved, "port_check_answer")
    verdict = handler(puzzle, answer)
    if emit_events:
        log.append_event(
            {
                "event": "answer_validated",
                "puzzle_kind": puzzle_kind,
                "seed": puzzle.get("seed"),
                "impl": resolved.impl_id,
                **verdict,
            }
        )
    return verdict, resolved


__all__ = ["check_answer"]
