"""Assessment session bookkeeping: level progression, streaks and termination."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from project_config import get_section

from . import log
from .scoring import geosudo_level_score, motion_level_score

_LOGGER = logging.getLogger(__name__)

SESSION_CONFIG = get_section("session", default={})
MAX_CONSECUTIVE_FAILURES = int(SESSION_CONFIG.get("max_consecutive_failures", 3))
TOTAL_LEVELS = int(SESSION_CONFIG.get("total_levels", 20))

REASON_COMPLETED = "COMPLETED"
REASON_CONSECUTIVE_FAILURES = "CONSECUTIVE_FAILURES"
REASON_TIME_UP = "TIME_UP"
REASON_VIOLATION = "VIOLATION"

GAMES = ("geosudo", "motion")


class SessionOverError(RuntimeError):
    """Raised when an attempt is recorded after the session has ended."""


@dataclass
class SessionMetrics:
    total_attempts: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    reaction_times: List[float] = field(default_factory=list)
    level_scores: List[float] = field(default_factory=list)
    max_level: int = 1
    streak: int = 0
    max_streak: int = 0
    consecutive_failures: int = 0
    violations: int = 0


class AssessmentSession:
    """Tracks one candidate's run through a game.

    The caller measures time and passes elapsed seconds in; the session only
    does arithmetic and state transitions.  A correct answer advances the
    level, a wrong one keeps it, and ``max_consecutive_failures`` misses in a
    row end the session.
    """

    def __init__(
        self,
        game: str,
        *,
        total_levels: int = TOTAL_LEVELS,
        max_consecutive_failures: int = MAX_CONSECUTIVE_FAILURES,
        session_id: Optional[str] = None,
        emit_events: bool = False,
    ) -> None:
        if game not in GAMES:
            raise ValueError(f"game must be one of {GAMES}, got {game!r}")
        if total_levels < 1:
            raise ValueError("total_levels must be >= 1")
        if max_consecutive_failures < 1:
            raise ValueError("max_consecutive_failures must be >= 1")
        self.game = game
        self.total_levels = total_levels
        self.max_consecutive_failures = max_consecutive_failures
        self.session_id = session_id
        self.emit_events = emit_events
        self.current_level = 1
        self.total_score = 0.0
        self.termination_reason: Optional[str] = None
        self.metrics = SessionMetrics()

    @property
    def is_over(self) -> bool:
        return self.termination_reason is not None

    def record_attempt(
        self,
        is_correct: bool,
        time_taken: float,
        *,
        moves: Optional[int] = None,
        min_moves: Optional[int] = None,
    ) -> float:
        """Record one submitted answer and return the score it earned.

        Motion sessions must pass ``moves`` and ``min_moves`` for correct
        attempts.
        """

        if self.is_over:
            raise SessionOverError(f"session ended: {self.termination_reason}")
        if time_taken < 0:
            raise ValueError("time_taken must be >= 0")

        m = self.metrics
        m.total_attempts += 1
        m.reaction_times.append(float(time_taken))

        if not is_correct:
            m.incorrect_count += 1
            m.streak = 0
            m.consecutive_failures += 1
            if m.consecutive_failures >= self.max_consecutive_failures:
                self.terminate(REASON_CONSECUTIVE_FAILURES)
            return 0.0

        m.correct_count += 1
        m.consecutive_failures = 0
        m.streak += 1
        m.max_streak = max(m.max_streak, m.streak)
        m.max_level = max(m.max_level, self.current_level)

        if self.game == "geosudo":
            score = geosudo_level_score(self.current_level, time_taken, m.streak)
        else:
            if moves is None or min_moves is None:
                raise ValueError("motion attempts need moves and min_moves")
            score = motion_level_score(self.current_level, min_moves, moves, time_taken)
        m.level_scores.append(score)
        self.total_score += score

        if self.current_level >= self.total_levels:
            self.terminate(REASON_COMPLETED)
        else:
            self.current_level += 1
        return score

    def record_violation(self) -> None:
        self.metrics.violations += 1

    def terminate(self, reason: str) -> None:
        """End the session; later calls keep the first reason."""

        if self.is_over:
            return
        self.termination_reason = reason
        _LOGGER.info(
            "%s session %s ended at level %s: %s",
            self.game,
            self.session_id or "-",
            self.current_level,
            reason,
        )
        if self.emit_events:
            log.append_event(
                {
                    "event": "session_terminated",
                    "session_id": self.session_id,
                    "game": self.game,
                    **self.result(),
                }
            )

    def result(self) -> Dict[str, Any]:
        """Return ``{final_score, metrics}`` ready for storage."""

        m = self.metrics
        times = m.reaction_times
        return {
            "final_score": round(self.total_score, 2),
            "metrics": {
                "game": self.game,
                "total_attempts": m.total_attempts,
                "correct_count": m.correct_count,
                "incorrect_count": m.incorrect_count,
                "accuracy": round(m.correct_count / m.total_attempts, 4) if m.total_attempts else 0.0,
                "average_reaction_time": round(sum(times) / len(times), 3) if times else 0.0,
                "reaction_times": list(times),
                "level_scores": list(m.level_scores),
                "max_level": m.max_level,
                "max_streak": m.max_streak,
                "violations": m.violations,
                "termination_reason": self.termination_reason,
            },
        }


__all__ = [
    "AssessmentSession",
    "GAMES",
    "MAX_CONSECUTIVE_FAILURES",
    "REASON_COMPLETED",
    "REASON_CONSECUTIVE_FAILURES",
    "REASON_TIME_UP",
    "REASON_VIOLATION",
    "SessionMetrics",
    "SessionOverError",
    "TOTAL_LEVELS",
]
