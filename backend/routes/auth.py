"""
Auth endpoints - current user, logout, development login.

Flow (production):
  1) The Steam OpenID gateway verifies the player and mints an access token
     with middleware.auth.issue_access_token (shared JWT secret)
  2) The browser carries it in the access_token cookie or a Bearer header
  3) GET /api/auth/user reports who the token belongs to

Flow (development):
  POST /api/auth/dev-login {steamId} issues the same token directly, so the
  front end can run without a Steam round trip.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from config import settings
from domain.errors import NotFoundError, UnauthorizedError
from middleware.auth import get_token_payload, issue_access_token
from middleware.rate_limit import rate_limit
from models import DevLoginRequest, TokenResponse
from utils.validators import validate_steam_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user")
async def get_current_user(payload: Optional[dict] = Depends(get_token_payload)):
    if payload is None:
        raise UnauthorizedError("Not authenticated")
    return {
        "user": {
            "steamId": payload["sub"],
            "personaName": payload.get("name"),
        }
    }


@router.post("/logout")
async def logout(response: Response):
    """Tokens are stateless; logging out clears the browser cookie."""
    response.delete_cookie(settings.auth_cookie_name)
    return {"message": "Logged out successfully"}


@router.post("/dev-login", response_model=TokenResponse)
async def dev_login(
    request: DevLoginRequest,
    response: Response,
    _rate=Depends(rate_limit(max_requests=10, window_seconds=60)),
):
    if not settings.dev_login_enabled:
        raise NotFoundError("Not found")

    validate_steam_id(request.steam_id)
    token = issue_access_token(steam_id=request.steam_id, persona_name=request.persona_name)

    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.jwt_access_ttl_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    logger.info(f"[AUTH] dev login for {request.steam_id}")

    return TokenResponse(
        steam_id=request.steam_id,
        access_token=token,
        expires_in_seconds=settings.jwt_access_ttl_minutes * 60,
    )
