"""
Timer command endpoints used by the inbox client script.

  POST /api/timer/start
  POST /api/timer/pause
  POST /api/timer/resume
  POST /api/timer/stop
  POST /api/timer/heartbeat
  GET  /api/timer/{operator_id}/{conversation_id}/history

Pausing or resuming a conversation without a live timer is not an error:
the response carries ``found: false`` and nothing changes.
"""
import logging

from fastapi import APIRouter, Depends, Query

from app.dependencies import Clock, get_clock, get_timer_controller
from app.schemas.response import (
    HistoryResponse,
    SessionOut,
    TimerActionResponse,
    TimerCommand,
    TimerOut,
)
from app.services.timer_engine import TimerController, TimerSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timer", tags=["timer"])


def _action_response(snapshot: TimerSnapshot | None) -> TimerActionResponse:
    if snapshot is None:
        return TimerActionResponse(found=False)
    return TimerActionResponse(found=True, timer=TimerOut.from_snapshot(snapshot))


@router.post("/start", response_model=TimerActionResponse)
async def start_timer(
    body: TimerCommand,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> TimerActionResponse:
    """Start timing a conversation, or pick a paused timer back up."""
    snapshot = timers.start(body.operator_id, body.conversation_id, clock())
    return _action_response(snapshot)


@router.post("/pause", response_model=TimerActionResponse)
async def pause_timer(
    body: TimerCommand,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> TimerActionResponse:
    snapshot = timers.pause(body.operator_id, body.conversation_id, clock())
    if snapshot is None:
        logger.debug("Pause for %s/%s: no active timer", body.operator_id, body.conversation_id)
    return _action_response(snapshot)


@router.post("/resume", response_model=TimerActionResponse)
async def resume_timer(
    body: TimerCommand,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> TimerActionResponse:
    snapshot = timers.resume(body.operator_id, body.conversation_id, clock())
    if snapshot is None:
        logger.debug("Resume for %s/%s: no active timer", body.operator_id, body.conversation_id)
    return _action_response(snapshot)


@router.post("/stop", response_model=TimerActionResponse)
async def stop_timer(
    body: TimerCommand,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> TimerActionResponse:
    """Finalize one timer and move it into the session history."""
    return _action_response(
        timers.stop_timer(body.operator_id, body.conversation_id, clock())
    )


@router.post("/heartbeat", response_model=TimerActionResponse)
async def heartbeat(
    body: TimerCommand,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> TimerActionResponse:
    """Keep-alive from the client; reports the timer without changing it."""
    return _action_response(
        timers.peek(body.operator_id, body.conversation_id, clock())
    )


@router.get("/{operator_id}/{conversation_id}/history", response_model=HistoryResponse)
async def get_history(
    operator_id: str,
    conversation_id: str,
    limit: int | None = Query(default=None, ge=1),
    timers: TimerController = Depends(get_timer_controller),
) -> HistoryResponse:
    records = timers.get_history(operator_id, conversation_id, limit)
    return HistoryResponse(
        operator_id=operator_id,
        conversation_id=conversation_id,
        sessions=[SessionOut.from_record(r) for r in records],
    )
