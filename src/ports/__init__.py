"""Puzzle-first port facades."""

from __future__ import annotations

from .difficulty_port import analyze
from .generator_port import generate
from .solver_port import check_answer

__all__ = [
    "analyze",
    "check_answer",
    "generate",
]
