"""
Session token authentication.

Identity is owned by the external provider; the identity bridge hands the
frontend a signed session token:

    base64url(json claims) + "." + hex(HMAC-SHA256(SESSION_SECRET, payload))

Claims: {"sub": str, "email": str | None, "name": str | None, "exp": int}
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from dailyfive.config import config
from dailyfive.database.models import User
from dailyfive.storage import user_repo


@dataclass
class SessionIdentity:
    """Validated identity from a session token."""

    sub: str
    email: str | None = None
    name: str | None = None


def _sign(payload: str, secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def issue_session_token(
    sub: str,
    email: str | None = None,
    name: str | None = None,
    ttl_hours: int | None = None,
    secret: str | None = None,
    now: float | None = None,
) -> str:
    """Sign a session token for the given identity subject."""
    if secret is None:
        secret = config.SESSION_SECRET.get_secret_value()
    if ttl_hours is None:
        ttl_hours = config.SESSION_TTL_HOURS
    if now is None:
        now = time.time()

    claims = {"sub": sub, "email": email, "name": name, "exp": int(now + ttl_hours * 3600)}
    payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    return f"{payload}.{_sign(payload, secret)}"


def validate_session_token(
    token: str, secret: str, now: float | None = None
) -> dict | None:
    """
    Validate signature and expiry.

    Returns:
        Claims dict if valid, None otherwise
    """
    if not token or token.count(".") != 1:
        return None

    payload, received_signature = token.split(".")

    # Constant-time comparison
    if not hmac.compare_digest(_sign(payload, secret), received_signature):
        return None

    try:
        claims = json.loads(_b64decode(payload))
    except (ValueError, json.JSONDecodeError):
        return None

    if not isinstance(claims, dict):
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp < (now if now is not None else time.time()):
        return None

    return claims


def parse_identity(claims: dict) -> SessionIdentity | None:
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        return None
    return SessionIdentity(sub=sub, email=claims.get("email"), name=claims.get("name"))


async def get_current_identity(request: Request) -> SessionIdentity:
    """
    FastAPI dependency for authenticated endpoints.

    Raises:
        HTTPException 401 if auth fails
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing",
        )

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization format. Expected: Bearer <token>",
        )

    claims = validate_session_token(parts[1], config.SESSION_SECRET.get_secret_value())
    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session token",
        )

    identity = parse_identity(claims)
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Subject not found in session token",
        )

    return identity


async def get_current_user(
    identity: SessionIdentity = Depends(get_current_identity),
) -> User:
    """Authenticated user row. 404 until the profile was created via /api/me."""
    user = await user_repo.get_user_by_auth_id(identity.sub)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user
