"""Intercom webhook signature check.

Intercom signs each notification body with the app's client secret and sends
the result as ``X-Hub-Signature: sha1=<hexdigest>``.
"""
from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha1="


def sign_payload(payload: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha1).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(payload: bytes, signature: str | None, secret: str) -> bool:
    """Return True when ``signature`` matches the HMAC-SHA1 of the raw ``payload``."""
    if not signature:
        return False
    if not secret:
        logger.warning("INTERCOM_SECRET is not configured; rejecting webhook")
        return False
    return hmac.compare_digest(signature, sign_payload(payload, secret))
