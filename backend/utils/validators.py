"""
Input validation utilities for the CS2 loadout API.

Every write path runs its raw request fields through these functions before
anything is serialized or stored. Each validator returns True on success and
raises domain.errors.ValidationError on the first failed rule. Checks run in a
fixed order (type, then integrality, then range) so the same bad input always
surfaces the same message.
"""
import math
import re
from collections.abc import Mapping
from typing import Any

from domain.errors import ValidationError

MAX_STICKERS = 5
MAX_NAMETAG_LENGTH = 128
MAX_ITEM_NAME_LENGTH = 64
TEAM_TERRORIST = 2
TEAM_COUNTER_TERRORIST = 3

LOADOUT_CATEGORIES = ("weapons", "knife", "gloves", "agents", "music", "pins")

_STEAM_ID_PATTERN = re.compile(r"[0-9]{17}")
_NAMETAG_PATTERN = re.compile(r"""[a-zA-Z0-9\s\-_!@#$%^&*()\[\]{}+=|\\:;"'<>,.?/~`]*""")


def _is_number(value: Any) -> bool:
    """True for int/float values that are not NaN. bool is not a number here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _is_integer(value: Any) -> bool:
    if isinstance(value, int):
        return True
    return value.is_integer()


def _fits_float(value: Any) -> bool:
    """False for infinities and for ints too large to store as a float."""
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _field(record: Any, name: str) -> Any:
    """Read a field from a mapping (raw JSON) or a pydantic record, by wire name."""
    if isinstance(record, Mapping):
        return record.get(name)
    return record.model_dump(by_alias=True).get(name)


def _is_record(value: Any) -> bool:
    return isinstance(value, Mapping) or hasattr(value, "model_dump")


def validate_wear(wear: Any) -> bool:
    """Wear must be a number in [0.00, 1.00]."""
    if not _is_number(wear):
        raise ValidationError("Wear value must be a number")

    if wear < 0.0 or wear > 1.0:
        raise ValidationError("Wear value must be between 0.00 and 1.00")

    return True


def validate_seed(seed: Any) -> bool:
    """Pattern seed must be an integer in [0, 1000]."""
    if not _is_number(seed):
        raise ValidationError("Seed value must be a number")

    if not _is_integer(seed):
        raise ValidationError("Seed value must be an integer")

    if seed < 0 or seed > 1000:
        raise ValidationError("Seed value must be between 0 and 1000")

    return True


def validate_stattrak_counter(counter: Any) -> bool:
    message = "StatTrak counter must be a non-negative integer"

    if not _is_number(counter):
        raise ValidationError(message)

    if not _is_integer(counter):
        raise ValidationError(message)

    if counter < 0:
        raise ValidationError(message)

    return True


def validate_nametag(nametag: Any) -> bool:
    """
    Validate nametag text.

    None means "no nametag" and is always valid. Otherwise the text must fit
    the 128-character column and use letters, digits, whitespace and common
    punctuation only.
    """
    if nametag is None:
        return True

    if not isinstance(nametag, str):
        raise ValidationError("Nametag must be a string")

    if len(nametag) > MAX_NAMETAG_LENGTH or not _NAMETAG_PATTERN.fullmatch(nametag):
        raise ValidationError("Nametag contains invalid characters or exceeds length limit")

    return True


def validate_sticker(sticker: Any) -> bool:
    """
    Validate a single sticker (raw mapping or Sticker record).

    Bounds: id integer >= 0, schema integer, x/y/wear in [0, 1],
    scale in [0.1, 5], rotation in [0, 360].
    """
    if not _is_record(sticker):
        raise ValidationError("Sticker must be an object")

    sticker_id = _field(sticker, "id")
    if not _is_number(sticker_id) or not _is_integer(sticker_id):
        raise ValidationError("Sticker id must be an integer")
    if sticker_id < 0:
        raise ValidationError("Sticker id must be non-negative")

    schema = _field(sticker, "schema")
    if not _is_number(schema) or not _is_integer(schema):
        raise ValidationError("Sticker schema must be an integer")

    for axis in ("x", "y"):
        value = _field(sticker, axis)
        if not _is_number(value) or value < 0 or value > 1:
            raise ValidationError(f"Sticker {axis} position must be between 0 and 1")

    wear = _field(sticker, "wear")
    if not _is_number(wear) or wear < 0 or wear > 1:
        raise ValidationError("Sticker wear must be between 0 and 1")

    scale = _field(sticker, "scale")
    if not _is_number(scale) or scale < 0.1 or scale > 5:
        raise ValidationError("Sticker scale must be between 0.1 and 5")

    rotation = _field(sticker, "rotation")
    if not _is_number(rotation) or rotation < 0 or rotation > 360:
        raise ValidationError("Sticker rotation must be between 0 and 360")

    return True


def validate_stickers(stickers: Any) -> bool:
    """Validate a weapon's sticker list: at most 5, each individually valid."""
    if not isinstance(stickers, (list, tuple)):
        raise ValidationError("Stickers must be an array")

    if len(stickers) > MAX_STICKERS:
        raise ValidationError(f"Maximum {MAX_STICKERS} stickers allowed per weapon")

    for index, sticker in enumerate(stickers, start=1):
        try:
            validate_sticker(sticker)
        except ValidationError as e:
            raise ValidationError(f"Sticker {index}: {e.message}") from e

    return True


def validate_keychain(keychain: Any) -> bool:
    """
    Validate a keychain (charm). None means "no keychain".

    Offsets are free-form numbers; id and seed must be non-negative integers.
    """
    if keychain is None:
        return True

    if not _is_record(keychain):
        raise ValidationError("Keychain must be an object")

    keychain_id = _field(keychain, "id")
    if not _is_number(keychain_id) or not _is_integer(keychain_id) or keychain_id < 0:
        raise ValidationError("Keychain id must be a non-negative integer")

    for axis in ("x", "y", "z"):
        value = _field(keychain, axis)
        if not _is_number(value) or not _fits_float(value):
            raise ValidationError(f"Keychain {axis} offset must be a number")

    seed = _field(keychain, "seed")
    if not _is_number(seed) or not _is_integer(seed) or seed < 0:
        raise ValidationError("Keychain seed must be a non-negative integer")

    return True


def validate_team(team: Any) -> bool:
    """Team must be 2 (Terrorist) or 3 (Counter-Terrorist)."""
    if not _is_number(team):
        raise ValidationError("Team value must be a number")

    if not _is_integer(team):
        raise ValidationError("Team value must be an integer")

    if team not in (TEAM_TERRORIST, TEAM_COUNTER_TERRORIST):
        raise ValidationError("Team value must be 2 (Terrorist) or 3 (Counter-Terrorist)")

    return True


def validate_steam_id(steam_id: Any) -> bool:
    """Steam ID must be a 64-bit ID written as exactly 17 decimal digits."""
    if not isinstance(steam_id, str):
        raise ValidationError("Steam ID must be a string")

    if not _STEAM_ID_PATTERN.fullmatch(steam_id):
        raise ValidationError("Steam ID must be a 17-digit string")

    return True


def validate_weapon_defindex(defindex: Any) -> bool:
    if not _is_number(defindex):
        raise ValidationError("Weapon defindex must be a number")

    if not _is_integer(defindex):
        raise ValidationError("Weapon defindex must be an integer")

    if defindex < 0:
        raise ValidationError("Weapon defindex must be non-negative")

    return True


def validate_paint_id(paint_id: Any) -> bool:
    if not _is_number(paint_id):
        raise ValidationError("Paint ID must be a number")

    if not _is_integer(paint_id):
        raise ValidationError("Paint ID must be an integer")

    if paint_id < 0:
        raise ValidationError("Paint ID must be non-negative")

    return True


def validate_non_negative_id(value: Any, label: str) -> bool:
    """Generic catalog id check (glove defindex, music kit id, pin id)."""
    if not _is_number(value) or not _is_integer(value) or value < 0:
        raise ValidationError(f"{label} must be a non-negative integer")
    return True


def validate_item_name(value: Any, label: str) -> bool:
    """Item names such as knife classnames and agent model paths."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a string")
    if len(value) > MAX_ITEM_NAME_LENGTH:
        raise ValidationError(f"{label} must be at most {MAX_ITEM_NAME_LENGTH} characters")
    return True


def validate_categories(categories: Any) -> bool:
    """Bulk operations take a non-empty list of known loadout categories."""
    if not isinstance(categories, (list, tuple)) or len(categories) == 0:
        raise ValidationError("Categories must be a non-empty array")

    for category in categories:
        if category not in LOADOUT_CATEGORIES:
            raise ValidationError(f"Unknown category: {category}")

    return True
