"""
Weapon skin endpoints - paint, wear, seed, nametag, StatTrak, stickers, keychain.

Endpoints:
    GET    /api/player/weapons                       - All weapon configs
    GET    /api/player/weapons/{team}/{defindex}     - One weapon config
    PUT    /api/player/weapons/{team}/{defindex}     - Create/replace
    DELETE /api/player/weapons/{team}/{defindex}     - Remove
"""
import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from deps import get_db, require_steam_id, team_param
from domain.errors import NotFoundError
from models import WeaponUpdateRequest
from services import loadout_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/player/weapons", tags=["weapons"])


@router.get("")
async def list_weapons(
    steam_id: str = Depends(require_steam_id),
    db: AsyncSession = Depends(get_db),
):
    weapons = await loadout_service.list_weapons(db, steam_id)
    return {"weapons": [w.model_dump(by_alias=True) for w in weapons]}


@router.get("/{team}/{defindex}")
async def get_weapon(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    defindex: int = Path(...),
    db: AsyncSession = Depends(get_db),
):
    weapon = await loadout_service.get_weapon(db, steam_id, team, defindex)
    return {"weapon": weapon.model_dump(by_alias=True) if weapon else None}


@router.put("/{team}/{defindex}")
async def save_weapon(
    payload: WeaponUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    defindex: int = Path(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a weapon configuration.

    Every field is validated before anything is written; the first failure is
    returned as a 400 with the validator's message.
    """
    weapon = await loadout_service.save_weapon(db, steam_id, team, defindex, payload)
    await db.commit()
    return {
        "message": "Weapon configuration saved successfully",
        "weapon": weapon.model_dump(by_alias=True),
    }


@router.delete("/{team}/{defindex}")
async def delete_weapon(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    defindex: int = Path(...),
    db: AsyncSession = Depends(get_db),
):
    deleted = await loadout_service.delete_weapon(db, steam_id, team, defindex)
    if not deleted:
        raise NotFoundError("Weapon configuration not found")
    await db.commit()
    return {"message": "Weapon configuration deleted successfully"}
