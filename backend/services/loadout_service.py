"""
Loadout Service - read/write a player's cosmetic configuration.

Every write validates its raw inputs first (utils.validators), then encodes
stickers/keychains into the string columns (utils.serialization). Reads go the
other way: the 5 sticker columns through the lenient slot decoder, the
keychain column through the strict decoder.

Functions take the session first and only flush; the calling route commits.
"""
import logging
from typing import Any, Callable, Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import (
    PlayerAgents, PlayerGloves, PlayerKnife, PlayerMusic, PlayerPins, PlayerSkin,
)
from domain.errors import ValidationError
from models import (
    AgentConfig, GloveConfig, Keychain, KnifeConfig, MusicConfig, PinConfig,
    Sticker, WeaponConfig, WeaponUpdateRequest,
)
from utils.serialization import (
    deserialize_keychain, deserialize_sticker_slots,
    serialize_keychain, serialize_sticker_slots,
)
from utils.validators import (
    TEAM_COUNTER_TERRORIST,
    validate_categories, validate_item_name, validate_keychain,
    validate_nametag, validate_non_negative_id, validate_paint_id,
    validate_seed, validate_stattrak_counter, validate_stickers,
    validate_team, validate_wear, validate_weapon_defindex,
)

logger = logging.getLogger(__name__)


# ── Weapons ─────────────────────────────────────────────────────────

def to_weapon_config(row: PlayerSkin) -> WeaponConfig:
    """Build the API view of a wp_player_skins row."""
    try:
        keychain = deserialize_keychain(row.weapon_keychain)
    except ValueError as e:
        logger.warning(
            f"Unreadable keychain for {row.steamid}/{row.weapon_team}/{row.weapon_defindex}: {e}"
        )
        keychain = None

    return WeaponConfig(
        steamid=row.steamid,
        weapon_team=row.weapon_team,
        weapon_defindex=row.weapon_defindex,
        paint_id=row.weapon_paint_id,
        wear=row.weapon_wear,
        seed=row.weapon_seed,
        nametag=row.weapon_nametag,
        stattrak=bool(row.weapon_stattrak),
        stattrak_count=row.weapon_stattrak_count,
        stickers=deserialize_sticker_slots(row.sticker_slots),
        keychain=keychain,
    )


async def list_weapons(db: AsyncSession, steam_id: str) -> List[WeaponConfig]:
    result = await db.execute(
        select(PlayerSkin)
        .where(PlayerSkin.steamid == steam_id)
        .order_by(PlayerSkin.weapon_team, PlayerSkin.weapon_defindex)
    )
    return [to_weapon_config(row) for row in result.scalars().all()]


async def get_weapon(
    db: AsyncSession, steam_id: str, team: Any, defindex: Any,
) -> Optional[WeaponConfig]:
    validate_team(team)
    validate_weapon_defindex(defindex)
    row = await db.get(PlayerSkin, (steam_id, int(team), int(defindex)))
    return to_weapon_config(row) if row else None


def validate_weapon_update(payload: WeaponUpdateRequest) -> None:
    """Run every weapon field through its validator, in column order."""
    validate_paint_id(payload.paint_id)
    validate_wear(payload.wear)
    validate_seed(payload.seed)
    validate_nametag(payload.nametag)
    if not isinstance(payload.stattrak, bool):
        raise ValidationError("StatTrak flag must be a boolean")
    validate_stattrak_counter(payload.stattrak_count)
    validate_stickers(payload.stickers)
    validate_keychain(payload.keychain)


async def save_weapon(
    db: AsyncSession,
    steam_id: str,
    team: Any,
    defindex: Any,
    payload: WeaponUpdateRequest,
) -> WeaponConfig:
    """
    Insert or replace a weapon configuration.

    Raises:
        ValidationError on the first invalid field; nothing is written.
    """
    validate_team(team)
    validate_weapon_defindex(defindex)
    validate_weapon_update(payload)

    stickers = [Sticker.model_validate(s) for s in payload.stickers]
    keychain = Keychain.model_validate(payload.keychain) if payload.keychain is not None else None

    key = (steam_id, int(team), int(defindex))
    row = await db.get(PlayerSkin, key)
    if row is None:
        row = PlayerSkin(steamid=key[0], weapon_team=key[1], weapon_defindex=key[2])
        db.add(row)

    row.weapon_paint_id = int(payload.paint_id)
    row.weapon_wear = float(payload.wear)
    row.weapon_seed = int(payload.seed)
    row.weapon_nametag = payload.nametag
    row.weapon_stattrak = payload.stattrak
    row.weapon_stattrak_count = int(payload.stattrak_count)
    row.sticker_slots = serialize_sticker_slots(stickers)
    row.weapon_keychain = serialize_keychain(keychain)
    await db.flush()

    logger.info(
        f"Saved weapon {key[2]} (team {key[1]}) for {steam_id}: "
        f"paint={row.weapon_paint_id} stickers={len(stickers)}"
    )
    return to_weapon_config(row)


async def delete_weapon(db: AsyncSession, steam_id: str, team: Any, defindex: Any) -> bool:
    validate_team(team)
    validate_weapon_defindex(defindex)
    result = await db.execute(
        delete(PlayerSkin).where(
            PlayerSkin.steamid == steam_id,
            PlayerSkin.weapon_team == int(team),
            PlayerSkin.weapon_defindex == int(defindex),
        )
    )
    return result.rowcount > 0


# ── Team-scoped items (knife, gloves, music, pins) ──────────────────

class _TeamItem:
    """How one single-value, per-team table maps to the API."""

    def __init__(self, model, column: str, validate: Callable[[Any], Any], view: Callable):
        self.model = model
        self.column = column
        self.validate = validate
        self.view = view


TEAM_ITEMS = {
    "knife": _TeamItem(
        PlayerKnife, "knife",
        lambda v: validate_item_name(v, "Knife"),
        lambda row: KnifeConfig(steamid=row.steamid, team=row.weapon_team, knife=row.knife),
    ),
    "gloves": _TeamItem(
        PlayerGloves, "weapon_defindex",
        lambda v: validate_non_negative_id(v, "Defindex"),
        lambda row: GloveConfig(steamid=row.steamid, team=row.weapon_team, defindex=row.weapon_defindex),
    ),
    "music": _TeamItem(
        PlayerMusic, "music_id",
        lambda v: validate_non_negative_id(v, "Music ID"),
        lambda row: MusicConfig(steamid=row.steamid, team=row.weapon_team, music_id=row.music_id),
    ),
    "pins": _TeamItem(
        PlayerPins, "id",
        lambda v: validate_non_negative_id(v, "Pin ID"),
        lambda row: PinConfig(steamid=row.steamid, team=row.weapon_team, pin_id=row.id),
    ),
}


async def get_team_item(db: AsyncSession, category: str, steam_id: str, team: Any):
    """Return the API view for a knife/gloves/music/pins row, or None."""
    item = TEAM_ITEMS[category]
    validate_team(team)
    row = await db.get(item.model, (steam_id, int(team)))
    return item.view(row) if row else None


async def set_team_item(db: AsyncSession, category: str, steam_id: str, team: Any, value: Any):
    item = TEAM_ITEMS[category]
    validate_team(team)
    item.validate(value)

    row = await db.get(item.model, (steam_id, int(team)))
    if row is None:
        row = item.model(steamid=steam_id, weapon_team=int(team))
        db.add(row)
    setattr(row, item.column, value if isinstance(value, str) else int(value))
    await db.flush()

    logger.info(f"Saved {category} for {steam_id} (team {team}): {value}")
    return item.view(row)


async def delete_team_item(db: AsyncSession, category: str, steam_id: str, team: Any) -> bool:
    item = TEAM_ITEMS[category]
    validate_team(team)
    result = await db.execute(
        delete(item.model).where(
            item.model.steamid == steam_id,
            item.model.weapon_team == int(team),
        )
    )
    return result.rowcount > 0


# ── Agents ──────────────────────────────────────────────────────────

def _agent_column(team: Any) -> str:
    return "agent_ct" if team == TEAM_COUNTER_TERRORIST else "agent_t"


async def get_agents(db: AsyncSession, steam_id: str) -> AgentConfig:
    row = await db.get(PlayerAgents, steam_id)
    if row is None:
        return AgentConfig()
    return AgentConfig(steamid=row.steamid, agent_ct=row.agent_ct, agent_t=row.agent_t)


async def set_agent(db: AsyncSession, steam_id: str, team: Any, agent: Any) -> AgentConfig:
    validate_team(team)
    validate_item_name(agent, "Agent")

    row = await db.get(PlayerAgents, steam_id)
    if row is None:
        row = PlayerAgents(steamid=steam_id)
        db.add(row)
    setattr(row, _agent_column(team), agent)
    await db.flush()

    logger.info(f"Saved agent for {steam_id} (team {team}): {agent}")
    return AgentConfig(steamid=row.steamid, agent_ct=row.agent_ct, agent_t=row.agent_t)


async def clear_agent(db: AsyncSession, steam_id: str, team: Any) -> bool:
    """Null one side's agent. False if the player has no agents row."""
    validate_team(team)
    result = await db.execute(
        update(PlayerAgents)
        .where(PlayerAgents.steamid == steam_id)
        .values({_agent_column(team): None})
    )
    return result.rowcount > 0


# ── Bulk operations ─────────────────────────────────────────────────

_SKIN_COPY_COLUMNS = (
    "weapon_paint_id", "weapon_wear", "weapon_seed", "weapon_nametag",
    "weapon_stattrak", "weapon_stattrak_count",
    "weapon_sticker_0", "weapon_sticker_1", "weapon_sticker_2",
    "weapon_sticker_3", "weapon_sticker_4", "weapon_keychain",
)


async def _copy_weapons(db: AsyncSession, steam_id: str, source: int, target: int) -> None:
    result = await db.execute(
        select(PlayerSkin).where(
            PlayerSkin.steamid == steam_id,
            PlayerSkin.weapon_team == source,
        )
    )
    for weapon in result.scalars().all():
        key = (steam_id, target, weapon.weapon_defindex)
        row = await db.get(PlayerSkin, key)
        if row is None:
            row = PlayerSkin(steamid=key[0], weapon_team=key[1], weapon_defindex=key[2])
            db.add(row)
        for column in _SKIN_COPY_COLUMNS:
            setattr(row, column, getattr(weapon, column))


async def copy_team(
    db: AsyncSession,
    steam_id: str,
    source_team: Any,
    target_team: Any,
    categories: Iterable[str],
) -> List[str]:
    """
    Copy one side's configuration onto the other side.

    Returns the categories that were actually copied. Team items the player
    never set on the source side are skipped; agents are per side by nature
    and are never copied.
    """
    validate_team(source_team)
    validate_team(target_team)
    if source_team == target_team:
        raise ValidationError("Source and target teams must be different")
    validate_categories(categories)

    source, target = int(source_team), int(target_team)
    copied = []

    if "weapons" in categories:
        await _copy_weapons(db, steam_id, source, target)
        copied.append("weapons")

    for category, item in TEAM_ITEMS.items():
        if category not in categories:
            continue
        source_row = await db.get(item.model, (steam_id, source))
        if source_row is None:
            continue
        target_row = await db.get(item.model, (steam_id, target))
        if target_row is None:
            target_row = item.model(steamid=steam_id, weapon_team=target)
            db.add(target_row)
        setattr(target_row, item.column, getattr(source_row, item.column))
        copied.append(category)

    await db.flush()
    logger.info(f"Copied {copied} from team {source} to team {target} for {steam_id}")
    return copied


async def reset(
    db: AsyncSession,
    steam_id: str,
    categories: Iterable[str],
    team: Optional[Any] = None,
) -> List[str]:
    """Delete the given categories for one team, or for both when team is None."""
    validate_categories(categories)
    if team is not None:
        validate_team(team)
        team = int(team)

    reset_categories = []

    if "weapons" in categories:
        stmt = delete(PlayerSkin).where(PlayerSkin.steamid == steam_id)
        if team is not None:
            stmt = stmt.where(PlayerSkin.weapon_team == team)
        await db.execute(stmt)
        reset_categories.append("weapons")

    for category, item in TEAM_ITEMS.items():
        if category not in categories:
            continue
        stmt = delete(item.model).where(item.model.steamid == steam_id)
        if team is not None:
            stmt = stmt.where(item.model.weapon_team == team)
        await db.execute(stmt)
        reset_categories.append(category)

    if "agents" in categories:
        if team is not None:
            await db.execute(
                update(PlayerAgents)
                .where(PlayerAgents.steamid == steam_id)
                .values({_agent_column(team): None})
            )
        else:
            await db.execute(delete(PlayerAgents).where(PlayerAgents.steamid == steam_id))
        reset_categories.append("agents")

    logger.info(f"Reset {reset_categories} (team={team if team is not None else 'all'}) for {steam_id}")
    return reset_categories
