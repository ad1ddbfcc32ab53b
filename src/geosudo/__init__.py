"""GeoSudo: 4x4 geometric Latin-square puzzles with a single question cell."""

from __future__ import annotations

from .analyzer import DeductionResult, DifficultyMetrics, analyze_deduction, count_anchors
from .answers import AnswerVerdict, validate_answer
from .generator import SHAPES, GeoSudoPuzzle, generate_puzzle
from .grid import count_solutions_for_target, fill_grid, is_grid_valid, is_valid_placement
from .tiers import DifficultyTier, tier_for_level

__all__ = [
    "AnswerVerdict",
    "DeductionResult",
    "DifficultyMetrics",
    "DifficultyTier",
    "GeoSudoPuzzle",
    "SHAPES",
    "analyze_deduction",
    "count_anchors",
    "count_solutions_for_target",
    "fill_grid",
    "generate_puzzle",
    "is_grid_valid",
    "is_valid_placement",
    "tier_for_level",
    "validate_answer",
]
