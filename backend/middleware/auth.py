"""
Steam ID authentication helpers.

The Steam OpenID handshake happens upstream (login gateway or the dev-login
endpoint); it ends by minting a short-lived JWT whose subject is the
player's 64-bit Steam ID. This module only issues and checks those tokens.

A token is accepted from either:
    - Authorization: Bearer <jwt>   (API clients)
    - the access_token cookie       (browser front end, httpOnly)
"""
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional

import jwt
from fastapi import Header, HTTPException, Request

from config import settings
from domain.errors import UnauthorizedError, ValidationError
from utils.validators import validate_steam_id

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def _require_secret() -> str:
    if not settings.jwt_secret:
        raise HTTPException(
            status_code=500,
            detail="Server auth misconfigured (JWT secret missing).",
        )
    return settings.jwt_secret


def decode_access_token(token: str) -> dict:
    secret = _require_secret()
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "iat", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Access token expired.")
    except jwt.InvalidTokenError as e:
        logger.warning(f"[SECURITY] rejected access token: {e}")
        raise UnauthorizedError("Invalid access token.")


def issue_access_token(*, steam_id: str, persona_name: Optional[str] = None) -> str:
    validate_steam_id(steam_id)
    now = _now_utc()
    exp = now.replace(microsecond=0) + timedelta(minutes=settings.jwt_access_ttl_minutes)
    payload = {
        "iss": settings.jwt_issuer,
        "sub": steam_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if persona_name:
        payload["name"] = persona_name
    return jwt.encode(payload, _require_secret(), algorithm="HS256")


def token_from_request(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Bearer header wins over the cookie."""
    return _parse_bearer_token(authorization) or cookie_token or None


async def get_token_payload(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[dict]:
    """Decoded token claims, or None when the request carries no token."""
    token = token_from_request(authorization, request.cookies.get(settings.auth_cookie_name))
    if not token:
        return None
    return decode_access_token(token)


async def require_steam_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """
    Dependency for /api/player/* routes: the caller's own Steam ID.

    Player routes never take a Steam ID from the path or body; the token
    subject is the only identity they act on.
    """
    payload = await get_token_payload(request, authorization)
    if payload is None:
        raise UnauthorizedError("Authentication required. You must be logged in to access this resource.")

    steam_id = payload.get("sub")
    try:
        validate_steam_id(steam_id)
    except ValidationError:
        logger.warning(f"[SECURITY] token with malformed subject on {request.url.path}")
        raise UnauthorizedError("Invalid access token.")
    return steam_id
