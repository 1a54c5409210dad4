"""CSRF token helpers for session-authenticated, state-changing requests."""

import hashlib
import hmac
import secrets
import time

from src.marketplace.runtime.context import get_config


def generate_session_id() -> str:
    """Return a URL-safe random session identifier."""
    return secrets.token_urlsafe(32)


def _csrf_secret() -> bytes:
    secret = get_config().app.csrf_signing_secret
    return secret.encode() if secret else b"dev-secret"


def generate_csrf_token(session_id: str, timestamp: int | None = None) -> str:
    """Generate an HMAC CSRF token bound to the session and the current hour.

    Returns:
        ``"<hour>:<hexdigest>"``
    """
    if timestamp is None:
        timestamp = int(time.time() // 3600)

    message = f"{session_id}:{timestamp}"
    digest = hmac.new(_csrf_secret(), message.encode(), hashlib.sha256).hexdigest()
    return f"{timestamp}:{digest}"


def validate_csrf_token(
    session_id: str, csrf_token: str | None, max_age_hours: int = 12
) -> bool:
    """Check a CSRF token against the session it was issued for."""
    if not csrf_token:
        return False

    parts = csrf_token.split(":", 1)
    if len(parts) != 2:
        return False

    token_timestamp, token_value = parts
    try:
        timestamp = int(token_timestamp)
    except ValueError:
        return False

    if int(time.time() // 3600) - timestamp > max_age_hours:
        return False

    expected_value = generate_csrf_token(session_id, timestamp).split(":", 1)[1]
    return hmac.compare_digest(expected_value, token_value)


def is_trusted_issuer(presented: str | None, issuer_key: str) -> bool:
    """Check the key a session issuer presented; an empty ``issuer_key`` trusts nobody."""
    if not issuer_key or not presented:
        return False
    return hmac.compare_digest(presented.encode(), issuer_key.encode())
