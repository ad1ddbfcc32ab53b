from __future__ import annotations

import copy

import pytest

from contracts import ManagedValidationError, assert_valid, validate
from geosudo.generator import port_generate as geosudo_generate


def _motion_payload() -> dict:
    return {
        "difficulty_level": 1,
        "seed": 5,
        "items": [
            {"id": "target", "type": "TARGET", "x": 0, "y": 0, "w": 1, "h": 1},
            {"id": "wall-0", "type": "WALL", "x": 1, "y": 0, "w": 1, "h": 1},
            {"id": "block-0", "type": "BLOCK", "x": 1, "y": 2, "w": 2, "h": 1},
        ],
        "exit_pos": {"x": 2, "y": 0},
        "grid_size": {"w": 3, "h": 3},
        "min_moves": 4,
        "metrics": {
            "min_moves_threshold": 8,
            "attempts": 1,
            "nodes_expanded": 4,
            "num_walls": 1,
            "density": 0.4444,
            "outcome": "best_effort",
        },
    }


def _codes(report) -> set:
    return set(report.codes())


def test_generated_geosudo_payload_is_valid() -> None:
    report = validate(geosudo_generate(9, seed=31), "GeoSudoPuzzle")
    assert report.ok, report.errors


def test_geosudo_question_must_be_empty() -> None:
    payload = geosudo_generate(2, seed=8)
    payload["grid"][payload["question_row"]][payload["question_col"]] = payload["correct_answer"]
    assert "invariant.geosudo.question_filled" in _codes(validate(payload, "GeoSudoPuzzle"))


def test_geosudo_latin_square_violation() -> None:
    payload = geosudo_generate(2, seed=8)
    grid = payload["grid"]
    grid[0] = [payload["shapes"][0]] * 4
    assert "invariant.geosudo.latin_square" in _codes(validate(payload, "GeoSudoPuzzle"))


def _ambiguous_geosudo() -> dict:
    return {
        "level": 1,
        "seed": 1,
        "grid_size": 4,
        "grid": [[None] * 4 for _ in range(4)],
        "question_row": 0,
        "question_col": 0,
        "correct_answer": "circle",
        "shapes": ["circle", "plus", "triangle", "square"],
        "difficulty_metrics": {"depth": 3, "method": "Strategic Deduction", "anchors": 0, "empty_cells": 16, "attempts": 1},
    }


def test_ambiguous_answer_is_rejected_in_dev_only() -> None:
    payload = _ambiguous_geosudo()
    assert "invariant.geosudo.answer_not_unique" in _codes(validate(payload, "GeoSudoPuzzle", profile="dev"))
    assert validate(payload, "GeoSudoPuzzle", profile="prod").ok


def test_schema_errors_skip_invariants() -> None:
    payload = _ambiguous_geosudo()
    del payload["shapes"]
    report = validate(payload, "GeoSudoPuzzle")
    assert not report.ok
    assert {issue.code for issue in report.errors} == {"schema.violation"}


def test_motion_payload_is_valid() -> None:
    report = validate(_motion_payload(), "MotionPuzzle")
    assert report.ok, report.errors
    assert report.warnings == []


def test_motion_overlap_and_second_target() -> None:
    payload = _motion_payload()
    payload["items"].append({"id": "extra", "type": "TARGET", "x": 2, "y": 2, "w": 1, "h": 1})
    codes = _codes(validate(payload, "MotionPuzzle"))
    assert "invariant.motion.overlap" in codes
    assert "invariant.motion.target_count" in codes


def test_motion_exit_must_be_on_perimeter() -> None:
    payload = _motion_payload()
    payload["grid_size"] = {"w": 4, "h": 4}
    payload["exit_pos"] = {"x": 1, "y": 1}
    assert "invariant.motion.exit_position" in _codes(validate(payload, "MotionPuzzle"))


def test_motion_min_moves_mismatch_is_a_warning_in_dev() -> None:
    payload = _motion_payload()
    payload["min_moves"] = 3
    report = validate(payload, "MotionPuzzle", profile="dev")
    assert report.ok
    assert "invariant.motion.min_moves_mismatch" in _codes(report)
    with pytest.raises(ManagedValidationError):
        assert_valid(payload, "MotionPuzzle", profile="ci")


def test_motion_unsolvable_board() -> None:
    payload = _motion_payload()
    payload["items"][2] = {"id": "block-0", "type": "WALL", "x": 0, "y": 1, "w": 1, "h": 1}
    assert "invariant.motion.unsolvable" in _codes(validate(payload, "MotionPuzzle"))


def test_session_result_counts() -> None:
    result = {
        "final_score": 1.5,
        "metrics": {
            "game": "geosudo",
            "total_attempts": 3,
            "correct_count": 2,
            "incorrect_count": 0,
            "max_level": 3,
            "max_streak": 2,
            "termination_reason": "TIME_UP",
        },
    }
    assert "invariant.session.attempt_counts" in _codes(validate(result, "SessionResult"))
    fixed = copy.deepcopy(result)
    fixed["metrics"]["incorrect_count"] = 1
    assert validate(fixed, "SessionResult").ok


def test_unknown_payload_type() -> None:
    report = validate({}, "Nope")
    assert [issue.code for issue in report.errors] == ["schema.not_found"]


def test_assert_valid_carries_report() -> None:
    payload = _motion_payload()
    payload["exit_pos"] = {"x": 9, "y": 9}
    with pytest.raises(ManagedValidationError) as excinfo:
        assert_valid(payload, "MotionPuzzle")
    assert not excinfo.value.report.ok
