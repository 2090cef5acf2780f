"""Per-operator statistics over completed sessions.

Computed on demand from the session history; nothing is cached, so a newly
stopped session shows up on the very next call.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.services.timer_store import SessionHistoryStore


@dataclass(frozen=True)
class Analytics:
    total_sessions: int = 0
    total_time: int = 0
    average_time: float = 0
    median_time: int = 0


def compute_analytics(history: SessionHistoryStore, operator_id: str) -> Analytics:
    durations = sorted(
        record.final_duration
        for record in history.for_operator(operator_id)
        if record.final_duration is not None
    )
    if not durations:
        return Analytics()

    total_time = sum(durations)
    return Analytics(
        total_sessions=len(durations),
        total_time=total_time,
        average_time=total_time / len(durations),
        # Upper median for even counts, kept for compatibility with existing reports
        median_time=durations[len(durations) // 2],
    )
