"""Timer lifecycle for (operator, conversation) viewing time.

Every mutating call takes a caller-supplied ``now`` in epoch milliseconds;
the engine never reads the clock itself.

State changes are driven by ``TRANSITIONS``. Any (status, command) pair not
listed there is a no-op, which is what makes a repeated ``start`` harmless.
A redundant ``pause``/``resume`` changes nothing and reports NotFound
(``None``). Leaving ``running`` folds the time since ``last_update`` into
``total_elapsed``; time spent paused never counts.
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from app.services.analytics import Analytics, compute_analytics
from app.services.timer_store import (
    ActiveTimerStore,
    SessionHistoryStore,
    SessionRecord,
    Timer,
    TimerStatus,
)

logger = logging.getLogger(__name__)


class Command(str, Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"


# (current status, command) -> next status
TRANSITIONS: dict[tuple[TimerStatus, Command], TimerStatus] = {
    (TimerStatus.RUNNING, Command.PAUSE): TimerStatus.PAUSED,
    (TimerStatus.RUNNING, Command.STOP): TimerStatus.STOPPED,
    (TimerStatus.PAUSED, Command.START): TimerStatus.RUNNING,
    (TimerStatus.PAUSED, Command.RESUME): TimerStatus.RUNNING,
    (TimerStatus.PAUSED, Command.STOP): TimerStatus.STOPPED,
}


class _Elapsed(Protocol):
    status: TimerStatus
    total_elapsed: int
    last_update: int


def current_elapsed(timer: _Elapsed, now: int) -> int:
    """Elapsed running time as of ``now``, without touching ``timer``."""
    if timer.status is TimerStatus.RUNNING:
        return timer.total_elapsed + max(0, now - timer.last_update)
    return timer.total_elapsed


@dataclass(frozen=True)
class TimerSnapshot:
    operator_id: str
    conversation_id: str
    session_id: str
    status: TimerStatus
    start_time: int
    total_elapsed: int
    last_update: int
    elapsed: int
    end_time: int | None = None

    @classmethod
    def of(cls, timer: Timer | SessionRecord, now: int) -> TimerSnapshot:
        return cls(
            operator_id=timer.operator_id,
            conversation_id=timer.conversation_id,
            session_id=timer.session_id,
            status=timer.status,
            start_time=timer.start_time,
            total_elapsed=timer.total_elapsed,
            last_update=timer.last_update,
            elapsed=current_elapsed(timer, now),
            end_time=timer.end_time,
        )


class TimerController:
    """Applies start/pause/resume/stop commands to the timer stores.

    All mutations run under one re-entrant lock so that concurrent requests
    for the same key cannot interleave their elapsed-time bookkeeping.
    """

    def __init__(
        self,
        active: ActiveTimerStore | None = None,
        history: SessionHistoryStore | None = None,
    ) -> None:
        self.active = active if active is not None else ActiveTimerStore()
        self.history = history if history is not None else SessionHistoryStore()
        self._lock = threading.RLock()

    # ── transitions ─────────────────────────────────────────────────────
    def _apply(self, timer: Timer, command: Command, now: int) -> bool:
        target = TRANSITIONS.get((timer.status, command))
        if target is None:
            logger.debug(
                "No-op %s on %s timer %s", command.value, timer.status.value, timer.session_id
            )
            return False

        if timer.status is TimerStatus.RUNNING:
            timer.total_elapsed += max(0, now - timer.last_update)
        timer.status = target
        timer.last_update = now
        return True

    def start(self, operator_id: str, conversation_id: str, now: int) -> TimerSnapshot:
        with self._lock:
            timer = self.active.get((operator_id, conversation_id))
            if timer is None:
                timer = Timer(
                    operator_id=operator_id,
                    conversation_id=conversation_id,
                    session_id=str(uuid.uuid4()),
                    start_time=now,
                    last_update=now,
                )
                self.active.put(timer)
                logger.info(
                    "Started timer %s for operator %s on conversation %s",
                    timer.session_id, operator_id, conversation_id,
                )
            elif self._apply(timer, Command.START, now):
                logger.info("Resumed timer %s on start", timer.session_id)
            return TimerSnapshot.of(timer, now)

    def pause(self, operator_id: str, conversation_id: str, now: int) -> TimerSnapshot | None:
        return self._command(operator_id, conversation_id, Command.PAUSE, now)

    def resume(self, operator_id: str, conversation_id: str, now: int) -> TimerSnapshot | None:
        return self._command(operator_id, conversation_id, Command.RESUME, now)

    def _command(
        self, operator_id: str, conversation_id: str, command: Command, now: int,
    ) -> TimerSnapshot | None:
        with self._lock:
            timer = self.active.get((operator_id, conversation_id))
            # Absent key or a timer already in the requested state: NotFound
            if timer is None or not self._apply(timer, command, now):
                return None
            return TimerSnapshot.of(timer, now)

    def stop(self, timer: Timer, now: int) -> TimerSnapshot:
        """Finalize ``timer``, record it in history and drop it from the active store."""
        with self._lock:
            if not self._apply(timer, Command.STOP, now):
                return TimerSnapshot.of(timer, now)

            timer.final_duration = timer.total_elapsed
            timer.end_time = now
            self.history.append(SessionRecord.from_timer(timer))
            self.active.remove(timer.key)
            logger.info(
                "Stopped timer %s for operator %s on conversation %s after %d ms",
                timer.session_id, timer.operator_id, timer.conversation_id,
                timer.final_duration,
            )
            return TimerSnapshot.of(timer, now)

    def stop_timer(self, operator_id: str, conversation_id: str, now: int) -> TimerSnapshot | None:
        with self._lock:
            timer = self.active.get((operator_id, conversation_id))
            if timer is None:
                return None
            return self.stop(timer, now)

    def stop_all_for_conversation(self, conversation_id: str, now: int) -> list[TimerSnapshot]:
        with self._lock:
            timers = self.active.for_conversation(conversation_id)
            stopped = [self.stop(timer, now) for timer in timers]
        logger.info("Stopped %d timer(s) for closed conversation %s", len(stopped), conversation_id)
        return stopped

    # ── reads ───────────────────────────────────────────────────────────
    def peek(self, operator_id: str, conversation_id: str, now: int) -> TimerSnapshot | None:
        with self._lock:
            timer = self.active.get((operator_id, conversation_id))
            return TimerSnapshot.of(timer, now) if timer is not None else None

    def active_timers(self, now: int) -> list[TimerSnapshot]:
        with self._lock:
            return [TimerSnapshot.of(timer, now) for timer in self.active.all()]

    def session_count(self) -> int:
        """Sessions minted so far, live or stopped."""
        with self._lock:
            return len(self.active) + len(self.history)

    def get_history(
        self, operator_id: str, conversation_id: str, limit: int | None = None,
    ) -> list[SessionRecord]:
        with self._lock:
            return self.history.for_key((operator_id, conversation_id), limit)

    def analytics(self, operator_id: str) -> Analytics:
        with self._lock:
            return compute_analytics(self.history, operator_id)
