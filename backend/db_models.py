"""
SQLAlchemy ORM models for the CS2 loadout API.

Table and column names match the WeaponPaints game-server plugin, which reads
the same database:

    wp_player_skins   - per-weapon skin config (stickers/keychain as strings)
    wp_player_knife   - knife classname per team
    wp_player_gloves  - glove defindex per team
    wp_player_agents  - agent model per side (one row per player)
    wp_player_music   - music kit per team
    wp_player_pins    - pin per team
"""
from sqlalchemy import Column, Integer, BigInteger, String, Float, Boolean

from database import Base
from utils.serialization import EMPTY_KEYCHAIN, EMPTY_STICKER


class PlayerSkin(Base):
    """One weapon configuration; keyed by player, team and weapon defindex."""
    __tablename__ = "wp_player_skins"

    steamid = Column(String(18), primary_key=True)
    weapon_team = Column(Integer, primary_key=True)  # 2 = T, 3 = CT
    weapon_defindex = Column(Integer, primary_key=True)
    weapon_paint_id = Column(Integer, nullable=False, default=0)
    weapon_wear = Column(Float, nullable=False, default=0.000001)
    weapon_seed = Column(Integer, nullable=False, default=0)
    weapon_nametag = Column(String(128), nullable=True)
    weapon_stattrak = Column(Boolean, nullable=False, default=False)
    weapon_stattrak_count = Column(BigInteger, nullable=False, default=0)
    # One "id;schema;x;y;wear;scale;rotation" string per slot
    weapon_sticker_0 = Column(String(128), nullable=False, default=EMPTY_STICKER)
    weapon_sticker_1 = Column(String(128), nullable=False, default=EMPTY_STICKER)
    weapon_sticker_2 = Column(String(128), nullable=False, default=EMPTY_STICKER)
    weapon_sticker_3 = Column(String(128), nullable=False, default=EMPTY_STICKER)
    weapon_sticker_4 = Column(String(128), nullable=False, default=EMPTY_STICKER)
    # "id;x;y;z;seed"
    weapon_keychain = Column(String(128), nullable=False, default=EMPTY_KEYCHAIN)

    @property
    def sticker_slots(self) -> list[str]:
        return [
            self.weapon_sticker_0,
            self.weapon_sticker_1,
            self.weapon_sticker_2,
            self.weapon_sticker_3,
            self.weapon_sticker_4,
        ]

    @sticker_slots.setter
    def sticker_slots(self, slots: list[str]) -> None:
        (
            self.weapon_sticker_0,
            self.weapon_sticker_1,
            self.weapon_sticker_2,
            self.weapon_sticker_3,
            self.weapon_sticker_4,
        ) = slots


class PlayerKnife(Base):
    __tablename__ = "wp_player_knife"

    steamid = Column(String(18), primary_key=True)
    weapon_team = Column(Integer, primary_key=True)
    knife = Column(String(64), nullable=False)  # e.g. "weapon_knife_butterfly"


class PlayerGloves(Base):
    __tablename__ = "wp_player_gloves"

    steamid = Column(String(18), primary_key=True)
    weapon_team = Column(Integer, primary_key=True)
    weapon_defindex = Column(Integer, nullable=False)


class PlayerAgents(Base):
    """Agent models for both sides in one row; null means game default."""
    __tablename__ = "wp_player_agents"

    steamid = Column(String(18), primary_key=True)
    agent_ct = Column(String(64), nullable=True)
    agent_t = Column(String(64), nullable=True)


class PlayerMusic(Base):
    __tablename__ = "wp_player_music"

    steamid = Column(String(18), primary_key=True)
    weapon_team = Column(Integer, primary_key=True)
    music_id = Column(Integer, nullable=False)


class PlayerPins(Base):
    __tablename__ = "wp_player_pins"

    steamid = Column(String(18), primary_key=True)
    weapon_team = Column(Integer, primary_key=True)
    id = Column(Integer, nullable=False)
