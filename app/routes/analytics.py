"""
Operator analytics over completed sessions.

  GET /api/analytics/{operator_id}
"""
from fastapi import APIRouter, Depends

from app.dependencies import get_timer_controller
from app.schemas.response import AnalyticsResponse, FormattedAnalytics
from app.services.duration import format_duration
from app.services.timer_engine import TimerController

router = APIRouter(tags=["analytics"])


@router.get("/api/analytics/{operator_id}", response_model=AnalyticsResponse)
async def get_analytics(
    operator_id: str,
    timers: TimerController = Depends(get_timer_controller),
) -> AnalyticsResponse:
    """Session count, total, mean and (upper) median duration for one operator."""
    result = timers.analytics(operator_id)
    return AnalyticsResponse(
        total_sessions=result.total_sessions,
        total_time=result.total_time,
        average_time=result.average_time,
        median_time=result.median_time,
        formatted=FormattedAnalytics(
            total_time=format_duration(result.total_time),
            average_time=format_duration(result.average_time),
            median_time=format_duration(result.median_time),
        ),
    )
