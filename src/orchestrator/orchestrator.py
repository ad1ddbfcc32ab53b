"""Generate, check and fingerprint a single puzzle level through the ports."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional

from contracts import validator
from contracts.jsoncanon import jcs_sha256
from ports import difficulty_port, generator_port
from ports._utils import build_env, profile_from_env
from project_config import get_section

from . import log

_LOGGER = logging.getLogger(__name__)

PAYLOAD_TYPES = {
    "geosudo": "GeoSudoPuzzle",
    "motion": "MotionPuzzle",
}


def select_puzzle_kind(cli_override: Optional[str], env: Mapping[str, str], profile: str) -> str:
    """CLI value, then ``PUZZLE_KIND``, then ``run.by_profile``, then ``run.puzzle_kind``."""

    if cli_override:
        return cli_override

    env_override = env.get("PUZZLE_KIND")
    if env_override:
        return env_override

    run_cfg = get_section("run", default={})
    if isinstance(run_cfg, dict):
        by_profile = run_cfg.get("by_profile")
        if isinstance(by_profile, dict):
            profile_cfg = by_profile.get(profile)
            if isinstance(profile_cfg, dict):
                value = profile_cfg.get("puzzle_kind")
                if isinstance(value, str) and value:
                    return value
        value = run_cfg.get("puzzle_kind")
        if isinstance(value, str) and value:
            return value

    raise RuntimeError(
        "Puzzle kind must be selected explicitly via --puzzle, PUZZLE_KIND or run.puzzle_kind"
    )


def run_level(
    level: int,
    *,
    seed: int | str | None = None,
    puzzle_kind: Optional[str] = None,
    env_overrides: Mapping[str, str] | None = None,
    emit_events: bool = False,
) -> Dict[str, Any]:
    """Generate one puzzle, validate it against its contract and re-measure it.

    Returns the payload together with its canonical digest, the validation
    outcome, the independent difficulty measurement and the modules that
    served each role.
    """

    env_map = build_env(env_overrides)
    profile = profile_from_env(env_map)
    kind = select_puzzle_kind(puzzle_kind, env_map, profile)
    if kind not in PAYLOAD_TYPES:
        raise RuntimeError(f"Unknown puzzle kind '{kind}'")

    started = time.perf_counter()
    payload, generator_module = generator_port.generate(
        kind, level, seed=seed, profile=profile, env=env_overrides
    )
    generate_ms = int((time.perf_counter() - started) * 1000)

    report = validator.validate(payload, PAYLOAD_TYPES[kind], profile=profile)
    if not report.ok:
        _LOGGER.warning(
            "%s level %s seed %s failed validation: %s",
            kind,
            level,
            payload.get("seed"),
            ", ".join(report.codes()),
        )

    analysis, difficulty_module = difficulty_port.analyze(kind, payload, profile=profile, env=env_overrides)

    result: Dict[str, Any] = {
        "puzzle_kind": kind,
        "level": level,
        "seed": payload.get("seed"),
        "digest": jcs_sha256(payload),
        "valid": report.ok,
        "issues": [issue.code for issue in report.errors + report.warnings],
        "analysis": analysis,
        "generate_ms": generate_ms,
        "modules": {
            module.role: {
                "impl": module.impl_id,
                "decision_source": module.decision_source,
                "fallback_used": module.fallback_used,
            }
            for module in (generator_module, difficulty_module)
        },
        "puzzle": payload,
    }

    if emit_events:
        event = {key: value for key, value in result.items() if key != "puzzle"}
        event["event"] = "puzzle_generated"
        log.append_event(event)
    return result


__all__ = ["PAYLOAD_TYPES", "run_level", "select_puzzle_kind"]
