"""Answer validation for generated GeoSudo puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence

from .grid import Cell, grid_copy, is_valid_placement


@dataclass(frozen=True)
class AnswerVerdict:
    is_correct: bool
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"is_correct": self.is_correct, "reason": self.reason}


def check_answer(
    grid: Sequence[Sequence[Cell]],
    answer: str,
    question_row: int,
    question_col: int,
    correct_answer: str,
    shapes: Sequence[str],
) -> AnswerVerdict:
    """Judge ``answer`` for the question cell without touching ``grid``."""

    if answer not in shapes:
        return AnswerVerdict(False, f"Unknown shape '{answer}'.")

    trial = grid_copy(grid)
    trial[question_row][question_col] = answer
    if not is_valid_placement(trial, question_row, question_col, answer):
        return AnswerVerdict(
            False, f"Shape '{answer}' violates sudoku rules (duplicate in row/column)."
        )
    if answer != correct_answer:
        return AnswerVerdict(False, f"Incorrect. The answer was '{correct_answer}'.")
    return AnswerVerdict(True, "Correct! Well done.")


def validate_answer(puzzle: Any, answer: str) -> AnswerVerdict:
    """Validate ``answer`` against a :class:`GeoSudoPuzzle`."""

    return check_answer(
        puzzle.grid,
        answer,
        puzzle.question_row,
        puzzle.question_col,
        puzzle.correct_answer,
        puzzle.shapes,
    )


def port_check_answer(puzzle: Mapping[str, Any], answer: str) -> Dict[str, Any]:
    """Validate ``answer`` against a puzzle payload produced by ``port_generate``."""

    if not isinstance(puzzle, Mapping):
        raise TypeError("puzzle must be a mapping")
    try:
        grid = puzzle["grid"]
        row = puzzle["question_row"]
        col = puzzle["question_col"]
        correct = puzzle["correct_answer"]
        shapes = puzzle["shapes"]
    except KeyError as exc:
        raise ValueError(f"puzzle payload is missing field {exc.args[0]!r}") from exc
    return check_answer(grid, answer, row, col, correct, shapes).to_dict()


__all__ = ["AnswerVerdict", "check_answer", "port_check_answer", "validate_answer"]
