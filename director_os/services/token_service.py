"""
Token Service — session token issue and verification for dashboard logins.

Algorithm: HS256
Lifetime:  12 hours (configurable via JWT_ACCESS_EXPIRES)

Token payload:
{
    "sub": <user_id>,
    "username": <username>,
    "role": "DIRECTOR" | "PM",
    "iat": <issued_at>,
    "exp": <expires_at>,
    "jti": <unique_id>
}
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app

DEFAULT_ACCESS_EXPIRES = 43200     # 12 hours
ALGORITHM = "HS256"


def _get_secret():
    return current_app.config.get("JWT_SECRET_KEY") or current_app.config["SECRET_KEY"]


def _get_access_expires():
    return current_app.config.get("JWT_ACCESS_EXPIRES", DEFAULT_ACCESS_EXPIRES)


def generate_session_token(user) -> str:
    """Issue a signed session token for a ``User`` row."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(seconds=_get_access_expires()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _get_secret(), algorithm=ALGORITHM)


def decode_session_token(token: str) -> dict:
    """
    Decode and verify a session token.

    Raises jwt.exceptions on failure (ExpiredSignatureError, InvalidTokenError, etc.)
    """
    return jwt.decode(token, _get_secret(), algorithms=[ALGORITHM])


def username_from_request_headers(headers) -> str | None:
    """Resolve the caller's username from a bearer token or the x-user-name header.

    A valid bearer token wins. An invalid or expired one is ignored and the
    plain header is used instead, so a stale token never locks a client out
    of its own (unscoped) view.
    """
    auth = headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        try:
            return decode_session_token(auth[7:]).get("username")
        except jwt.PyJWTError:
            pass
    return headers.get("x-user-name") or None
