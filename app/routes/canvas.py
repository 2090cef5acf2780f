"""
Intercom Canvas Kit endpoint for the inbox side panel.

  POST /initialize

Intercom calls this whenever an admin opens the app in the inbox. When the
panel is shown next to a conversation, the admin's timer for it is started
(or resumed) and the live timer panel is returned.
"""
import logging

from fastapi import APIRouter, Depends

from app.config import get_settings
from app.dependencies import Clock, get_clock, get_timer_controller
from app.schemas.response import InitializeRequest
from app.services.canvas import build_message_canvas, build_timer_canvas
from app.services.timer_engine import TimerController

logger = logging.getLogger(__name__)

router = APIRouter(tags=["canvas"])


@router.post("/initialize")
async def initialize(
    body: InitializeRequest,
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> dict:
    settings = get_settings()
    context = body.context

    if context is None or context.location != "conversation":
        location = context.location if context else None
        logger.info("Initialize outside a conversation (location=%s)", location)
        return build_message_canvas(
            "Please open a conversation to track time.",
            debug=f"location={location or 'null'}",
        )

    conversation_id = context.conversation_id
    operator_id = body.current_admin.id if body.current_admin else None
    if not conversation_id or not operator_id:
        logger.warning(
            "Initialize without ids: conversation=%s admin=%s", conversation_id, operator_id,
        )
        return build_message_canvas(
            "Unable to identify conversation or admin.",
            style="error",
            debug=f"convId={conversation_id}, adminId={operator_id}",
        )

    snapshot = timers.start(operator_id, conversation_id, clock())
    recent = timers.get_history(operator_id, conversation_id, settings.history_display_limit)
    return build_timer_canvas(snapshot, recent)
