from __future__ import annotations

import pytest

from orchestrator import log


def test_events_are_appended_as_json_lines(tmp_path) -> None:
    log.configure(tmp_path)
    first = log.append_event({"event": "puzzle_generated", "level": 1})
    second = log.append_event({"event": "puzzle_generated", "level": 2})
    assert first == second
    assert first.name == "events_00.jsonl"
    events = list(log.iter_events(first))
    assert [event["level"] for event in events] == [1, 2]
    assert all("ts" in event for event in events)


def test_rotation_when_file_is_full(tmp_path) -> None:
    log.configure(tmp_path, max_bytes=10)
    first = log.append_event({"event": "a"})
    second = log.append_event({"event": "b"})
    assert first != second
    assert second.name == "events_01.jsonl"
    assert log.current_log_path() == second
    assert [event["event"] for event in log.iter_events()] == ["b"]


def test_event_name_is_required(tmp_path) -> None:
    log.configure(tmp_path)
    with pytest.raises(ValueError):
        log.append_event({"level": 3})
    assert list(log.iter_events()) == []
