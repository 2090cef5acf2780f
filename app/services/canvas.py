"""Builds Intercom Canvas Kit payloads for the inbox side panel."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from app.services.duration import format_duration
from app.services.timer_engine import TimerSnapshot
from app.services.timer_store import SessionRecord, TimerStatus

_STATUS_STYLES = {
    TimerStatus.RUNNING: "success",
    TimerStatus.PAUSED: "warning",
}


def _text(text: str, style: str) -> dict[str, Any]:
    return {"type": "text", "text": text, "style": style}


def _session_date(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).date().isoformat()


def _wrap(components: list[dict[str, Any]]) -> dict[str, Any]:
    return {"canvas": {"content": {"components": components}}}


def build_message_canvas(text: str, style: str = "muted", debug: str | None = None) -> dict[str, Any]:
    """A notice panel, e.g. when the inbox is not showing a conversation."""
    components = [_text(text, style)]
    if debug:
        components.append(_text(f"Debug: {debug}", "muted"))
    return _wrap(components)


def build_timer_canvas(
    snapshot: TimerSnapshot,
    recent_sessions: list[SessionRecord],
) -> dict[str, Any]:
    """The live timer panel followed by the most recent completed sessions."""
    components: list[dict[str, Any]] = [
        _text("⏱️ Time Tracker", "header"),
        {"type": "divider"},
        _text(
            f"Status: {snapshot.status.value.upper()}",
            _STATUS_STYLES.get(snapshot.status, "muted"),
        ),
        _text(f"Current Session: {format_duration(snapshot.elapsed)}", "paragraph"),
        _text(
            f"Admin: {snapshot.operator_id} | Conv: {snapshot.conversation_id}",
            "muted",
        ),
        {"type": "spacer", "size": "m"},
    ]

    if recent_sessions:
        components.append(_text("Recent Sessions:", "header"))
        for index, session in enumerate(recent_sessions, start=1):
            components.append(_text(
                f"{index}. {format_duration(session.final_duration or 0)}"
                f" - {_session_date(session.start_time)}",
                "muted",
            ))

    return _wrap(components)
