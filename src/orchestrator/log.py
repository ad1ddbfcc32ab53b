"""Append-only JSONL event journal for generated puzzles and finished sessions.

Events land in ``<log_dir>/<YYYYMMDD>/events_NN.jsonl``; once a file reaches
``max_bytes`` the next free ``NN`` is used.  Both settings come from the
``[events]`` table of ``config.toml`` and can be replaced with
:func:`configure`.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from project_config import get_section

__all__ = ["append_event", "configure", "current_log_path", "iter_events"]

_EVENTS_CONFIG = get_section("events", default={})
_CONFIG_LOG_DIR = Path(_EVENTS_CONFIG.get("log_dir", "logs/events"))
_CONFIG_MAX_BYTES = int(_EVENTS_CONFIG.get("max_bytes", 100 * 1024 * 1024))

_LOCK = threading.Lock()
_state: Dict[str, Any] = {
    "log_dir": _CONFIG_LOG_DIR,
    "max_bytes": _CONFIG_MAX_BYTES,
    "current": None,
}


def configure(base_dir: str | Path | None = None, *, max_bytes: int | None = None) -> None:
    """Redirect the journal; ``None`` restores the configured value."""

    with _LOCK:
        _state["log_dir"] = Path(base_dir) if base_dir is not None else _CONFIG_LOG_DIR
        _state["max_bytes"] = max_bytes if max_bytes else _CONFIG_MAX_BYTES
        _state["current"] = None


def _has_room(path: Path) -> bool:
    return not path.exists() or path.stat().st_size < _state["max_bytes"]


def _active_file(now: datetime) -> Path:
    day_dir = Path(_state["log_dir"]) / now.strftime("%Y%m%d")
    current: Optional[Path] = _state["current"]
    if current is not None and current.parent == day_dir and _has_room(current):
        return current

    day_dir.mkdir(parents=True, exist_ok=True)
    index = 0
    while not _has_room(day_dir / f"events_{index:02d}.jsonl"):
        index += 1
    current = day_dir / f"events_{index:02d}.jsonl"
    _state["current"] = current
    return current


def append_event(event: Dict[str, Any]) -> Path:
    """Write ``event`` as one JSON line and return the file it went to.

    Every event needs an ``event`` name; a UTC ``ts`` is added when absent.
    """

    if not event.get("event"):
        raise ValueError("events must carry a non-empty 'event' name")
    now = datetime.now(timezone.utc)
    record = dict(event)
    record.setdefault("ts", now.isoformat(timespec="milliseconds"))
    line = json.dumps(record, sort_keys=True, ensure_ascii=False)

    with _LOCK:
        path = _active_file(now)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _state["current"]


def iter_events(path: str | Path | None = None) -> Iterator[Dict[str, Any]]:
    """Yield the events stored in ``path`` (default: the active file)."""

    target = Path(path) if path is not None else current_log_path()
    if target is None or not target.exists():
        return
    with target.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                yield json.loads(line)
