# tests/unit/test_helpers.py
# Unit tests for duration formatting, webhook signatures & canvas payloads

import pytest

from app.services.canvas import build_message_canvas, build_timer_canvas
from app.services.duration import format_duration
from app.services.signature import sign_payload, verify_signature
from app.services.timer_engine import TimerController


# * Test HH:MM:SS formatting
class TestFormatDuration:

    @pytest.mark.parametrize("ms, expected", [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (20000, "00:00:20"),
        (3_661_000, "01:01:01"),
        (90_000_000, "25:00:00"),
        (20000.7, "00:00:20"),
        (-5000, "00:00:00"),
    ])
    def test_format(self, ms, expected):
        assert format_duration(ms) == expected


# * Test HMAC-SHA1 webhook signatures
class TestSignature:

    def test_valid_signature(self):
        body = b'{"type": "conversation.admin.closed"}'
        signature = sign_payload(body, "secret")

        assert signature.startswith("sha1=")
        assert verify_signature(body, signature, "secret")

    def test_tampered_body_is_rejected(self):
        signature = sign_payload(b'{"a": 1}', "secret")

        assert not verify_signature(b'{"a": 2}', signature, "secret")

    def test_wrong_secret_is_rejected(self):
        body = b"{}"

        assert not verify_signature(body, sign_payload(body, "other"), "secret")

    @pytest.mark.parametrize("signature", [None, ""])
    def test_missing_signature_is_rejected(self, signature):
        assert not verify_signature(b"{}", signature, "secret")

    def test_unconfigured_secret_rejects_everything(self):
        body = b"{}"

        assert not verify_signature(body, sign_payload(body, ""), "")


# * Test Canvas Kit payloads
class TestCanvas:

    def test_timer_canvas_without_history(self):
        controller = TimerController()
        snap = controller.start("admin_1", "conv_1", 0)
        snap = controller.peek("admin_1", "conv_1", 65000)

        components = build_timer_canvas(snap, [])["canvas"]["content"]["components"]
        texts = [c.get("text") for c in components]

        assert components[0] == {"type": "text", "text": "⏱️ Time Tracker", "style": "header"}
        assert components[1] == {"type": "divider"}
        assert components[2] == {"type": "text", "text": "Status: RUNNING", "style": "success"}
        assert "Current Session: 00:01:05" in texts
        assert "Admin: admin_1 | Conv: conv_1" in texts
        assert components[-1] == {"type": "spacer", "size": "m"}

    def test_timer_canvas_lists_recent_sessions(self):
        controller = TimerController()
        controller.start("a", "c", 0)
        controller.stop_timer("a", "c", 20000)
        snap = controller.start("a", "c", 30000)
        controller.pause("a", "c", 31000)
        snap = controller.peek("a", "c", 40000)

        components = build_timer_canvas(snap, controller.get_history("a", "c"))["canvas"]["content"]["components"]

        assert components[2]["style"] == "warning"
        assert components[-2] == {"type": "text", "text": "Recent Sessions:", "style": "header"}
        assert components[-1] == {"type": "text", "text": "1. 00:00:20 - 1970-01-01", "style": "muted"}

    def test_message_canvas_with_debug_line(self):
        payload = build_message_canvas("Please open a conversation to track time.", debug="location=null")
        components = payload["canvas"]["content"]["components"]

        assert components[0]["style"] == "muted"
        assert components[1]["text"] == "Debug: location=null"

    def test_message_canvas_without_debug(self):
        components = build_message_canvas("oops", style="error")["canvas"]["content"]["components"]

        assert components == [{"type": "text", "text": "oops", "style": "error"}]
