"""
Intercom webhook receiver.

  POST /webhooks/conversations

Bodies must carry a valid ``X-Hub-Signature``. A ``conversation.admin.closed``
notification stops every admin's timer on that conversation; other topics are
acknowledged and ignored.
"""
import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from app.config import get_settings
from app.dependencies import Clock, get_clock, get_timer_controller
from app.schemas.response import WebhookResponse
from app.services.signature import verify_signature
from app.services.timer_engine import TimerController

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

CONVERSATION_CLOSED = "conversation.admin.closed"


def _closed_conversation_id(payload: dict) -> str:
    try:
        conversation_id = payload["data"]["item"]["id"]
    except (KeyError, TypeError):
        raise HTTPException(status_code=400, detail="Missing data.item.id in notification.")
    if conversation_id in (None, ""):
        raise HTTPException(status_code=400, detail="Missing data.item.id in notification.")
    return str(conversation_id)


@router.post("/conversations", response_model=WebhookResponse)
async def conversation_webhook(
    request: Request,
    x_hub_signature: str | None = Header(default=None),
    timers: TimerController = Depends(get_timer_controller),
    clock: Clock = Depends(get_clock),
) -> WebhookResponse:
    settings = get_settings()
    raw_body = await request.body()

    if not verify_signature(raw_body, x_hub_signature, settings.intercom_secret):
        logger.warning("Rejected webhook with invalid signature")
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        payload = json.loads(raw_body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Body is not valid JSON.")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object.")

    # Intercom notifications name the event in `topic`; older test payloads use `type`
    topic = payload.get("topic") or payload.get("type")
    if topic != CONVERSATION_CLOSED:
        logger.debug("Ignoring webhook topic %s", topic)
        return WebhookResponse()

    conversation_id = _closed_conversation_id(payload)
    stopped = timers.stop_all_for_conversation(conversation_id, clock())
    return WebhookResponse(stopped=len(stopped))
