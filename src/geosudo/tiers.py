"""Difficulty tiers for GeoSudo levels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from project_config import get_section


@dataclass(frozen=True)
class DifficultyTier:
    """Static acceptance criteria for a band of levels."""

    name: str
    max_level: int
    min_empty: int
    max_empty: int
    min_depth: int
    max_anchors: int
    forbid_three_known: bool


_DEFAULT_TIERS: Dict[str, Dict[str, Any]] = {
    "entry": {
        "max_level": 5,
        "min_empty": 4,
        "max_empty": 6,
        "min_depth": 1,
        "max_anchors": 2,
        "forbid_three_known": True,
    },
    "medium": {
        "max_level": 15,
        "min_empty": 5,
        "max_empty": 7,
        "min_depth": 2,
        "max_anchors": 1,
        "forbid_three_known": False,
    },
    "hard": {
        "max_level": 32,
        "min_empty": 7,
        "max_empty": 9,
        "min_depth": 3,
        "max_anchors": 0,
        "forbid_three_known": False,
    },
}


def _build_tiers() -> Tuple[DifficultyTier, ...]:
    configured = get_section("geosudo.tiers", default={})
    tiers = []
    for name, defaults in _DEFAULT_TIERS.items():
        block = dict(defaults)
        override = configured.get(name) if isinstance(configured, dict) else None
        if isinstance(override, dict):
            block.update(override)
        tiers.append(
            DifficultyTier(
                name=name,
                max_level=int(block["max_level"]),
                min_empty=int(block["min_empty"]),
                max_empty=int(block["max_empty"]),
                min_depth=int(block["min_depth"]),
                max_anchors=int(block["max_anchors"]),
                forbid_three_known=bool(block["forbid_three_known"]),
            )
        )
    tiers.sort(key=lambda tier: tier.max_level)
    return tuple(tiers)


TIERS = _build_tiers()


def tier_for_level(level: int) -> DifficultyTier:
    """Return the tier covering ``level``; levels past the last band stay hard."""

    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError("level must be an integer")
    if level < 1:
        raise ValueError("level must be >= 1")
    for tier in TIERS:
        if level <= tier.max_level:
            return tier
    return TIERS[-1]


__all__ = ["DifficultyTier", "TIERS", "tier_for_level"]
