"""
Dashboard and health endpoints: live timers and session counts.

  GET /api/dashboard
  GET /health
"""
from fastapi import APIRouter, Depends

from app.dependencies import Clock, get_clock, get_timer_controller
from app.schemas.response import DashboardResponse, HealthResponse, TimerOut
from app.services.timer_engine import TimerController

APP_VERSION = "1.0.0"

router = APIRouter(tags=["dashboard"])


@router.get("/health", response_model=HealthResponse)
def health(timers: TimerController = Depends(get_timer_controller)) -> HealthResponse:
    return HealthResponse(
        active_timers=len(timers.active),
        total_sessions=timers.session_count(),
    )


@router.get("/api/dashboard", response_model=DashboardResponse)
def get_dashboard(
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> DashboardResponse:
    """Return every live timer with its elapsed time as of now."""
    snapshots = timers.active_timers(clock())
    return DashboardResponse(
        version=APP_VERSION,
        active_timers=len(snapshots),
        total_sessions=timers.session_count(),
        timers=[TimerOut.from_snapshot(s) for s in snapshots],
    )
