"""
Shared FastAPI dependencies.

Routers import from here so the DB session and the auth guard have a
single place to be overridden in tests.
"""

from __future__ import annotations

from fastapi import Path

from database import get_db
from middleware.auth import require_steam_id
from utils.validators import validate_team

__all__ = ["get_db", "require_steam_id", "team_param"]


def team_param(team: int = Path(..., description="2 = Terrorist, 3 = Counter-Terrorist")) -> int:
    """`{team}` path parameter, checked with the same rule as request bodies."""
    validate_team(team)
    return team
