"""Per-level score formulas for GeoSudo and Motion sessions."""

from __future__ import annotations

import math

from project_config import get_section

_MULTIPLIERS = get_section("session.speed_multipliers", default={})

FAST_MULTIPLIER = float(_MULTIPLIERS.get("fast", 1.5))
MEDIUM_MULTIPLIER = float(_MULTIPLIERS.get("medium", 1.2))
NORMAL_MULTIPLIER = float(_MULTIPLIERS.get("normal", 1.0))
FAST_SECONDS = float(_MULTIPLIERS.get("fast_seconds", 5.0))
MEDIUM_SECONDS = float(_MULTIPLIERS.get("medium_seconds", 10.0))

STREAK_STEP = 0.05
STREAK_CAP = 0.5


def speed_multiplier(time_taken: float) -> float:
    if time_taken < FAST_SECONDS:
        return FAST_MULTIPLIER
    if time_taken < MEDIUM_SECONDS:
        return MEDIUM_MULTIPLIER
    return NORMAL_MULTIPLIER


def streak_multiplier(streak: int) -> float:
    return 1 + min(streak * STREAK_STEP, STREAK_CAP)


def geosudo_level_score(level: int, time_taken: float, streak: int) -> float:
    """Score a solved GeoSudo level.

    ``level ** 1.5 / (log10(t + 1) + 1)``, scaled by the speed band of ``t``
    and by the current streak, rounded to two decimals.  Non-positive times
    score zero.
    """

    if time_taken <= 0:
        return 0.0
    base = level ** 1.5 / (math.log10(time_taken + 1) + 1)
    return round(base * speed_multiplier(time_taken) * streak_multiplier(streak), 2)


def motion_level_score(level: int, min_moves: int, actual_moves: int, time_taken: float) -> float:
    """Score a solved Motion level as ``(level + min/actual) ** 2 / t``."""

    if actual_moves == 0 or time_taken == 0:
        return 0.0
    efficiency = min_moves / actual_moves
    return round((level + efficiency) ** 2 / time_taken, 2)


__all__ = [
    "geosudo_level_score",
    "motion_level_score",
    "speed_multiplier",
    "streak_multiplier",
]
