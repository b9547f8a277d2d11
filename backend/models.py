"""
Pydantic models for records, requests and responses.

Sticker and Keychain are the structured forms of the delimited strings stored
in the wp_player_skins columns (see utils/serialization.py). Request models
keep their fields loosely typed: utils/validators.py owns the rules and the
error messages, pydantic only handles aliases and shape.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiBase(BaseModel):
    """Shared base - allows construction by Python name or camelCase alias."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ── Records ─────────────────────────────────────────────────────────

class Sticker(ApiBase):
    """One decal on a weapon. Format: id;schema;x;y;wear;scale;rotation"""
    id: int
    schema_id: int = Field(..., alias="schema")
    x: float
    y: float
    wear: float
    scale: float
    rotation: float


class Keychain(ApiBase):
    """A charm attached to a weapon. Format: id;x;y;z;seed"""
    id: int
    x: float
    y: float
    z: float
    seed: int


# ── Weapon Models ───────────────────────────────────────────────────

class WeaponUpdateRequest(ApiBase):
    """PUT /api/player/weapons/{team}/{defindex} body. Absent fields take defaults."""
    paint_id: Any = Field(default=0, alias="paintId")
    wear: Any = 0.0
    seed: Any = 0
    nametag: Any = None
    stattrak: Any = False
    stattrak_count: Any = Field(default=0, alias="stattrakCount")
    stickers: Any = Field(default_factory=list)
    keychain: Any = None


class WeaponConfig(ApiBase):
    """API view of one wp_player_skins row with parsed stickers/keychain."""
    steamid: str
    weapon_team: int = Field(..., alias="weaponTeam")
    weapon_defindex: int = Field(..., alias="weaponDefindex")
    paint_id: int = Field(..., alias="paintId")
    wear: float
    seed: int
    nametag: Optional[str] = None
    stattrak: bool = False
    stattrak_count: int = Field(0, alias="stattrakCount")
    stickers: List[Sticker] = Field(default_factory=list)
    keychain: Optional[Keychain] = None


# ── Team-scoped Item Models ─────────────────────────────────────────

class KnifeUpdateRequest(ApiBase):
    knife: Any = None


class GlovesUpdateRequest(ApiBase):
    defindex: Any = None


class AgentUpdateRequest(ApiBase):
    agent: Any = None


class MusicUpdateRequest(ApiBase):
    music_id: Any = Field(default=None, alias="musicId")


class PinUpdateRequest(ApiBase):
    pin_id: Any = Field(default=None, alias="pinId")


class KnifeConfig(ApiBase):
    steamid: str
    team: int
    knife: str


class GloveConfig(ApiBase):
    steamid: str
    team: int
    defindex: int


class AgentConfig(ApiBase):
    steamid: Optional[str] = None
    agent_ct: Optional[str] = Field(None, alias="agentCT")
    agent_t: Optional[str] = Field(None, alias="agentT")


class MusicConfig(ApiBase):
    steamid: str
    team: int
    music_id: int = Field(..., alias="musicId")


class PinConfig(ApiBase):
    steamid: str
    team: int
    pin_id: int = Field(..., alias="pinId")


# ── Bulk Operation Models ───────────────────────────────────────────

class CopyTeamRequest(ApiBase):
    source_team: Any = Field(default=None, alias="sourceTeam")
    target_team: Any = Field(default=None, alias="targetTeam")
    categories: Any = Field(default_factory=list)


class ResetRequest(ApiBase):
    categories: Any = Field(default_factory=list)
    team: Any = None


# ── Auth Models ─────────────────────────────────────────────────────

class DevLoginRequest(ApiBase):
    steam_id: Any = Field(default=None, alias="steamId")
    persona_name: Optional[str] = Field(default=None, alias="personaName", max_length=64)


class TokenResponse(ApiBase):
    steam_id: str = Field(..., alias="steamId")
    access_token: str = Field(..., alias="accessToken")
    token_type: str = Field("Bearer", alias="tokenType")
    expires_in_seconds: int = Field(..., alias="expiresInSeconds")
