"""
Item Catalog - static CS2 item lists (skins, gloves, agents, music, pins).

The JSON files are exported from the game data and change only between
deploys, so each kind is loaded once and cached on an ItemCatalog object
owned by the process (module-level `catalog`). Kinds load independently:
one missing or broken file never blocks the others.

Cache rules:
    - get(kind)     loads lazily, then serves the cached list
    - reload(kind)  forces a fresh read; on failure keeps the previous copy
    - invalidate()  drops one kind (or all) so the next get() re-reads
"""
import asyncio
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config import settings

logger = logging.getLogger(__name__)

CATALOG_FILES = {
    "skins": "skins_en.json",
    "gloves": "gloves_en.json",
    "agents": "agents_en.json",
    "music": "music_en.json",
    "pins": "collectibles_en.json",
}


class CatalogError(Exception):
    """Raised when a catalog file cannot be read or parsed."""
    pass


@dataclass
class _Entry:
    items: List[Dict[str, Any]]
    loaded_at: datetime


def _read_catalog_file(path: str, filename: str) -> List[Dict[str, Any]]:
    """Blocking file read + parse; run in a worker thread."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CatalogError(f"Item data file not found: {filename}")
    except json.JSONDecodeError:
        raise CatalogError(f"Invalid JSON in file: {filename}")
    except OSError as e:
        raise CatalogError(f"Failed to load item data file {filename}: {e}")

    if not isinstance(data, list):
        raise CatalogError(f"Item data file {filename} must contain a list")
    return data


class ItemCatalog:
    """Per-kind cache of item catalog lists."""

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir or settings.item_data_dir
        self._entries: Dict[str, _Entry] = {}
        self._locks = {kind: asyncio.Lock() for kind in CATALOG_FILES}

    def _check_kind(self, kind: str) -> str:
        if kind not in CATALOG_FILES:
            raise KeyError(f"Unknown item catalog: {kind}")
        return kind

    async def _load(self, kind: str) -> List[Dict[str, Any]]:
        filename = CATALOG_FILES[kind]
        path = os.path.join(self.data_dir, filename)
        items = await asyncio.to_thread(_read_catalog_file, path, filename)
        self._entries[kind] = _Entry(items=items, loaded_at=datetime.now(timezone.utc))
        logger.info(f"Loaded {len(items)} {kind} from {filename}")
        return items

    async def get(self, kind: str) -> List[Dict[str, Any]]:
        """Cached list for `kind`, loading it on first use."""
        self._check_kind(kind)
        entry = self._entries.get(kind)
        if entry is not None:
            return entry.items
        async with self._locks[kind]:
            # Another request may have loaded it while we waited.
            entry = self._entries.get(kind)
            if entry is not None:
                return entry.items
            return await self._load(kind)

    async def reload(self, kind: str) -> List[Dict[str, Any]]:
        """
        Re-read `kind` from disk.

        If the read fails and an older copy is cached, the old copy is kept
        and returned; with nothing cached the CatalogError propagates.
        """
        self._check_kind(kind)
        async with self._locks[kind]:
            try:
                return await self._load(kind)
            except CatalogError as e:
                entry = self._entries.get(kind)
                if entry is None:
                    raise
                logger.warning(f"Reload of {kind} failed ({e}); keeping cached copy")
                return entry.items

    async def load_all(self) -> Dict[str, str]:
        """
        Reload every kind. Failures are collected, not raised.

        Returns:
            {kind: error message} for each kind that failed (empty if all loaded)
        """
        kinds = list(CATALOG_FILES)
        results = await asyncio.gather(
            *(self.reload(kind) for kind in kinds), return_exceptions=True
        )

        failures = {}
        for kind, result in zip(kinds, results):
            if isinstance(result, CatalogError):
                failures[kind] = str(result)
            elif isinstance(result, BaseException):
                raise result

        for kind, message in failures.items():
            logger.error(f"Item catalog {kind} unavailable: {message}")
        logger.info(f"Loaded {len(kinds) - len(failures)}/{len(kinds)} item catalogs")
        return failures

    def invalidate(self, kind: Optional[str] = None) -> None:
        """Drop one cached kind, or every kind when `kind` is None."""
        if kind is None:
            self._entries.clear()
            logger.info("Item catalog cache cleared")
            return
        self._entries.pop(self._check_kind(kind), None)

    def status(self) -> Dict[str, Dict[str, Any]]:
        status = {}
        for kind in CATALOG_FILES:
            entry = self._entries.get(kind)
            status[kind] = {
                "cached": entry is not None,
                "count": len(entry.items) if entry else 0,
                "lastLoaded": entry.loaded_at.isoformat() if entry else None,
            }
        return status


# Process-wide catalog used by routes/items.py
catalog = ItemCatalog()
