"""Routing, level runs, scoring and assessment sessions."""

from .router import ResolvedModule, RouterError, resolve
from .scoring import geosudo_level_score, motion_level_score
from .session import AssessmentSession

__all__ = [
    "AssessmentSession",
    "ResolvedModule",
    "RouterError",
    "geosudo_level_score",
    "motion_level_score",
    "resolve",
]
