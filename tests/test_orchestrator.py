from __future__ import annotations

import json

import pytest

from orchestrator import log
from orchestrator.orchestrator import run_level, select_puzzle_kind


def test_puzzle_kind_precedence() -> None:
    assert select_puzzle_kind("motion", {"PUZZLE_KIND": "geosudo"}, "dev") == "motion"
    assert select_puzzle_kind(None, {"PUZZLE_KIND": "motion"}, "dev") == "motion"
    assert select_puzzle_kind(None, {}, "dev") == "geosudo"


def test_run_level_geosudo() -> None:
    result = run_level(4, seed=19, puzzle_kind="geosudo")
    assert result["valid"] is True
    assert result["issues"] == []
    assert result["digest"].startswith("sha256-")
    assert set(result["modules"]) == {"generator", "difficulty"}
    assert result["analysis"]["depth"] == result["puzzle"]["difficulty_metrics"]["depth"]
    again = run_level(4, seed=19, puzzle_kind="geosudo")
    assert again["digest"] == result["digest"]


def test_run_level_motion_logs_event() -> None:
    result = run_level(1, seed=2, puzzle_kind="motion", emit_events=True)
    assert result["puzzle_kind"] == "motion"
    event = json.loads(log.current_log_path().read_text("utf-8").splitlines()[-1])
    assert event["event"] == "puzzle_generated"
    assert event["digest"] == result["digest"]
    assert "puzzle" not in event


def test_run_level_rejects_unknown_kind() -> None:
    with pytest.raises(RuntimeError):
        run_level(1, seed=1, puzzle_kind="chess")
