"""In-memory stores for live timers and completed sessions.

Both stores live for the lifetime of the process and are discarded on
restart. ``ActiveTimerStore`` owns the mutable ``Timer`` objects;
``SessionHistoryStore`` only ever holds frozen ``SessionRecord`` copies, so a
live timer mutated after it stopped can never leak into history.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TimerKey = tuple[str, str]


class TimerStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass
class Timer:
    operator_id: str
    conversation_id: str
    session_id: str
    start_time: int
    last_update: int
    status: TimerStatus = TimerStatus.RUNNING
    total_elapsed: int = 0
    final_duration: int | None = None
    end_time: int | None = None

    @property
    def key(self) -> TimerKey:
        return (self.operator_id, self.conversation_id)


@dataclass(frozen=True)
class SessionRecord:
    """A stopped timer, as it was at the moment it stopped."""

    operator_id: str
    conversation_id: str
    session_id: str
    start_time: int
    last_update: int
    status: TimerStatus
    total_elapsed: int
    final_duration: int | None
    end_time: int | None

    @classmethod
    def from_timer(cls, timer: Timer) -> SessionRecord:
        return cls(
            operator_id=timer.operator_id,
            conversation_id=timer.conversation_id,
            session_id=timer.session_id,
            start_time=timer.start_time,
            last_update=timer.last_update,
            status=timer.status,
            total_elapsed=timer.total_elapsed,
            final_duration=timer.final_duration,
            end_time=timer.end_time,
        )


class ActiveTimerStore:
    """Holds at most one running or paused timer per (operator, conversation)."""

    def __init__(self) -> None:
        self._timers: dict[TimerKey, Timer] = {}

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, key: TimerKey) -> bool:
        return key in self._timers

    def get(self, key: TimerKey) -> Timer | None:
        return self._timers.get(key)

    def put(self, timer: Timer) -> None:
        self._timers[timer.key] = timer

    def remove(self, key: TimerKey) -> None:
        self._timers.pop(key, None)

    def all(self) -> list[Timer]:
        return list(self._timers.values())

    def for_conversation(self, conversation_id: str) -> list[Timer]:
        # Returns a copy so callers may remove entries while iterating.
        return [t for t in self._timers.values() if t.conversation_id == conversation_id]


class SessionHistoryStore:
    """Append-only log of completed sessions, grouped per (operator, conversation)."""

    def __init__(self) -> None:
        self._history: dict[TimerKey, list[SessionRecord]] = {}

    def __len__(self) -> int:
        return sum(len(records) for records in self._history.values())

    def append(self, record: SessionRecord) -> None:
        key = (record.operator_id, record.conversation_id)
        self._history.setdefault(key, []).append(record)

    def for_key(self, key: TimerKey, limit: int | None = None) -> list[SessionRecord]:
        records = self._history.get(key, [])
        if limit is not None:
            if limit <= 0:
                return []
            records = records[-limit:]
        return list(records)

    def for_operator(self, operator_id: str) -> list[SessionRecord]:
        records: list[SessionRecord] = []
        for (owner, _conversation), entries in self._history.items():
            if owner == operator_id:
                records.extend(entries)
        return records
