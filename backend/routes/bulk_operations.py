"""
Bulk loadout endpoints.

Endpoints:
    POST /api/player/copy-team  - Copy T → CT (or CT → T) for chosen categories
    POST /api/player/reset      - Delete chosen categories for one team or both
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deps import get_db, require_steam_id
from models import CopyTeamRequest, ResetRequest
from services import loadout_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/player", tags=["bulk"])


@router.post("/copy-team")
async def copy_team(
    request: CopyTeamRequest,
    steam_id: str = Depends(require_steam_id),
    db: AsyncSession = Depends(get_db),
):
    copied = await loadout_service.copy_team(
        db,
        steam_id,
        source_team=request.source_team,
        target_team=request.target_team,
        categories=request.categories,
    )
    await db.commit()
    return {
        "message": "Configuration copied successfully",
        "copiedCategories": copied,
        "sourceTeam": request.source_team,
        "targetTeam": request.target_team,
    }


@router.post("/reset")
async def reset_configuration(
    request: ResetRequest,
    steam_id: str = Depends(require_steam_id),
    db: AsyncSession = Depends(get_db),
):
    reset = await loadout_service.reset(db, steam_id, request.categories, team=request.team)
    await db.commit()
    return {
        "message": "Configuration reset successfully",
        "resetCategories": reset,
        "team": request.team if request.team is not None else "all",
    }
