"""
Item catalog endpoints (read-only, no auth).

Endpoints:
    GET /api/items/{skins|gloves|agents|music|pins}  - Full catalog list
    GET /api/items/status                            - Cache state per catalog
"""
import logging

from fastapi import APIRouter, HTTPException, status

from services.item_catalog import CatalogError, catalog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/items", tags=["items"])

_LABELS = {
    "skins": "weapon skins",
    "gloves": "gloves",
    "agents": "agents",
    "music": "music kits",
    "pins": "pins",
}


async def _catalog_response(kind: str) -> dict:
    try:
        items = await catalog.get(kind)
    except CatalogError as e:
        logger.error(f"Error fetching {kind}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to fetch {_LABELS[kind]}",
        )
    return {kind: items}


@router.get("/status")
async def get_catalog_status():
    return catalog.status()


@router.get("/skins")
async def get_skins():
    return await _catalog_response("skins")


@router.get("/gloves")
async def get_gloves():
    return await _catalog_response("gloves")


@router.get("/agents")
async def get_agents():
    return await _catalog_response("agents")


@router.get("/music")
async def get_music():
    return await _catalog_response("music")


@router.get("/pins")
async def get_pins():
    return await _catalog_response("pins")
