"""
Per-team item endpoints - knife, gloves, agents, music kits, pins.

Endpoints:
    GET|PUT|DELETE /api/player/knife/{team}
    GET|PUT|DELETE /api/player/gloves/{team}
    GET            /api/player/agents
    PUT|DELETE     /api/player/agents/{team}
    GET|PUT|DELETE /api/player/music/{team}
    GET|PUT|DELETE /api/player/pins/{team}

Response keys follow the front end: {"knife": ...}, {"gloves": ...},
{"music": ...}, {"pin": ...}, {"agents": ...}.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deps import get_db, require_steam_id, team_param
from domain.errors import NotFoundError
from models import (
    AgentUpdateRequest, GlovesUpdateRequest, KnifeUpdateRequest,
    MusicUpdateRequest, PinUpdateRequest,
)
from services import loadout_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/player", tags=["team-config"])


async def _get(db, category: str, key: str, steam_id: str, team: int) -> dict:
    item = await loadout_service.get_team_item(db, category, steam_id, team)
    return {key: item.model_dump(by_alias=True) if item else None}


async def _set(db, category: str, key: str, label: str, steam_id: str, team: int, value) -> dict:
    item = await loadout_service.set_team_item(db, category, steam_id, team, value)
    await db.commit()
    return {
        "message": f"{label} configuration saved successfully",
        key: item.model_dump(by_alias=True),
    }


async def _delete(db, category: str, label: str, steam_id: str, team: int) -> dict:
    deleted = await loadout_service.delete_team_item(db, category, steam_id, team)
    if not deleted:
        raise NotFoundError(f"{label} configuration not found")
    await db.commit()
    return {"message": f"{label} configuration deleted successfully"}


# ── Knife ───────────────────────────────────────────────────────────

@router.get("/knife/{team}")
async def get_knife(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _get(db, "knife", "knife", steam_id, team)


@router.put("/knife/{team}")
async def save_knife(
    payload: KnifeUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _set(db, "knife", "knife", "Knife", steam_id, team, payload.knife)


@router.delete("/knife/{team}")
async def delete_knife(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _delete(db, "knife", "Knife", steam_id, team)


# ── Gloves ──────────────────────────────────────────────────────────

@router.get("/gloves/{team}")
async def get_gloves(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _get(db, "gloves", "gloves", steam_id, team)


@router.put("/gloves/{team}")
async def save_gloves(
    payload: GlovesUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _set(db, "gloves", "gloves", "Gloves", steam_id, team, payload.defindex)


@router.delete("/gloves/{team}")
async def delete_gloves(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _delete(db, "gloves", "Gloves", steam_id, team)


# ── Agents ──────────────────────────────────────────────────────────

@router.get("/agents")
async def get_agents(
    steam_id: str = Depends(require_steam_id),
    db: AsyncSession = Depends(get_db),
):
    agents = await loadout_service.get_agents(db, steam_id)
    return {"agents": agents.model_dump(by_alias=True)}


@router.put("/agents/{team}")
async def save_agent(
    payload: AgentUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    await loadout_service.set_agent(db, steam_id, team, payload.agent)
    await db.commit()
    return {
        "message": "Agent configuration saved successfully",
        "agent": {"steamid": steam_id, "team": team, "agent": payload.agent},
    }


@router.delete("/agents/{team}")
async def delete_agent(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    cleared = await loadout_service.clear_agent(db, steam_id, team)
    if not cleared:
        raise NotFoundError("Agent configuration not found")
    await db.commit()
    return {"message": "Agent configuration deleted successfully"}


# ── Music kits ──────────────────────────────────────────────────────

@router.get("/music/{team}")
async def get_music(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _get(db, "music", "music", steam_id, team)


@router.put("/music/{team}")
async def save_music(
    payload: MusicUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _set(db, "music", "music", "Music", steam_id, team, payload.music_id)


@router.delete("/music/{team}")
async def delete_music(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _delete(db, "music", "Music", steam_id, team)


# ── Pins ────────────────────────────────────────────────────────────

@router.get("/pins/{team}")
async def get_pin(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _get(db, "pins", "pin", steam_id, team)


@router.put("/pins/{team}")
async def save_pin(
    payload: PinUpdateRequest,
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _set(db, "pins", "pin", "Pin", steam_id, team, payload.pin_id)


@router.delete("/pins/{team}")
async def delete_pin(
    steam_id: str = Depends(require_steam_id),
    team: int = Depends(team_param),
    db: AsyncSession = Depends(get_db),
):
    return await _delete(db, "pins", "Pin", steam_id, team)
