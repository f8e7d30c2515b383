# app/core/auth.py
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import get_settings
from app.core.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => a missing or non-Bearer Authorization header yields
#   None instead of FastAPI's stock 403, so we can answer 401 ourselves.
bearer_scheme = HTTPBearer(auto_error=False)


def issue_access_token(now: datetime | None = None) -> str:
    """
    Issue a stateless session token for an anonymous client.

    Claims:
      - clientId: fresh random 128-bit hex identifier
      - iat / exp: issue time and issue time + JWT_EXPIRY_MINUTES

    No server-side record is kept; the signature is the only proof.

    Args:
        now: issue time override (defaults to the current UTC time).

    Returns:
        Encoded JWT (HS256 using JWT_SECRET by default).
    """
    settings = get_settings()
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    client_id = secrets.token_hex(16)

    claims = {
        "clientId": client_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    logger.info("Issued session token for client %s", client_id)
    return jwt.encode(
        claims,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALG,
    )


def decode_access_token(token: str, secret: str | None = None) -> dict[str, Any]:
    """
    Decode and verify a session token.

    Verification:
      - token must parse as a JWT at all (else 401)
      - signature (JWT_SECRET unless `secret` is given) and expiration
        time (exp) must hold (else 403)
      - clientId claim must be present (else 403)

    Args:
        token: raw JWT from the Authorization header.
        secret: verification key override.

    Returns:
        Decoded JWT claims.

    Raises:
        Unauthenticated(401): token is unparseable.
        Forbidden(403): bad signature, expired, or missing clientId.
    """
    settings = get_settings()

    try:
        jwt.get_unverified_claims(token)
    except JWTError:
        raise Unauthenticated("Malformed token") from None

    key = secret if secret is not None else settings.JWT_SECRET.get_secret_value()
    try:
        claims = jwt.decode(token, key, algorithms=[settings.JWT_ALG])
    except JWTError:
        raise Forbidden() from None

    client_id = claims.get("clientId")
    if not isinstance(client_id, str) or not client_id:
        raise Forbidden()
    return claims


def require_client(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Enforce a valid session token on a route.

    Returns:
        The token's clientId (used for log correlation only).

    Raises:
        Unauthenticated(401): no bearer credential, or it is unparseable.
        Forbidden(403): invalid signature or expired token.
    """
    if credentials is None or not credentials.credentials.strip():
        raise Unauthenticated("Authorization header missing")

    claims = decode_access_token(credentials.credentials.strip())
    return claims["clientId"]
