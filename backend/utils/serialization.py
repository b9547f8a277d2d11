"""
Sticker/keychain codec for the wp_player_skins string columns.

Formats:
    sticker   id;schema;x;y;wear;scale;rotation   (7 fields)
    stickers  sticker,sticker,...                  (empty -> "0;0;0;0;0;0;0")
    keychain  id;x;y;z;seed                         (None  -> "0;0;0;0;0")
    slots     exactly 5 sticker strings, one per weapon_sticker_N column

Two read modes:
    strict   deserialize_stickers / deserialize_keychain raise ValueError on
             malformed text ("Invalid ... format" / "Invalid ... values").
    lenient  deserialize_sticker_slots skips bad or empty slots so one
             corrupt column never fails a whole weapon read.

Integral numbers render without a fractional part ("1", not "1.0"); the
plugin reading these columns expects that. Other numbers use plain decimal
notation down to 1e-6 ("0.00001"), smaller magnitudes use exponent form.
"""
import logging
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

from models import Keychain, Sticker

logger = logging.getLogger(__name__)

EMPTY_STICKER = "0;0;0;0;0;0;0"
EMPTY_KEYCHAIN = "0;0;0;0;0"
STICKER_SLOTS = 5

# (wire name, model field name, cast)
_STICKER_FIELDS = (
    ("id", "id", None),
    ("schema", "schema_id", None),
    ("x", "x", float),
    ("y", "y", float),
    ("wear", "wear", float),
    ("scale", "scale", float),
    ("rotation", "rotation", float),
)
_KEYCHAIN_FIELDS = (
    ("id", "id", None),
    ("x", "x", float),
    ("y", "y", float),
    ("z", "z", float),
    ("seed", "seed", None),
)

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    # Plain decimal notation down to 1e-6 ("0.00001", not "1e-05")
    if isinstance(value, float) and math.isfinite(value) and abs(value) >= 1e-6:
        return format(Decimal(repr(value)), "f")
    return str(value)


def _wire_values(record: Any, fields: Sequence[tuple]) -> List[Any]:
    if isinstance(record, Mapping):
        return [record[wire] for wire, _, _ in fields]
    data = record.model_dump(by_alias=True)
    return [data[wire] for wire, _, _ in fields]


def _encode(record: Any, fields: Sequence[tuple]) -> str:
    return ";".join(_format_number(v) for v in _wire_values(record, fields))


def _parse_number(text: str) -> Optional[float]:
    """Parse one field. Returns None if it is not a finite number."""
    stripped = text.strip()
    if _INT_LITERAL.fullmatch(stripped):
        try:
            return int(stripped)
        except ValueError:
            # past the interpreter's int digit limit
            return None
    if not stripped or "_" in stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def _parse_fields(parts: Sequence[str], fields: Sequence[tuple]) -> Optional[dict]:
    """Map split text onto model field names; None if any part is unparseable."""
    values = {}
    for part, (_, name, cast) in zip(parts, fields):
        number = _parse_number(part)
        if number is None:
            return None
        try:
            values[name] = cast(number) if cast else number
        except OverflowError:
            return None
    return values


def _sticker_from_text(text: str) -> Sticker:
    parts = text.split(";")
    if len(parts) != len(_STICKER_FIELDS):
        raise ValueError(f"Invalid sticker format: {text}")

    values = _parse_fields(parts, _STICKER_FIELDS)
    if values is None:
        raise ValueError(f"Invalid sticker values: {text}")

    # Bounds are the validator's job; construct without re-checking.
    return Sticker.model_construct(**values)


# ── Stickers ────────────────────────────────────────────────────────

def serialize_stickers(stickers: Optional[Iterable[Any]]) -> str:
    """Join stickers as 7-field strings with ','. Empty/None -> EMPTY_STICKER."""
    if not stickers:
        return EMPTY_STICKER
    return ",".join(_encode(s, _STICKER_FIELDS) for s in stickers)


def deserialize_stickers(sticker_string: Optional[str]) -> List[Sticker]:
    """
    Strict inverse of serialize_stickers.

    Raises:
        ValueError("Invalid sticker format: ...") if a segment is not 7 fields
        ValueError("Invalid sticker values: ...") if a field is not a number
    """
    if not sticker_string or sticker_string == EMPTY_STICKER:
        return []
    return [_sticker_from_text(segment) for segment in sticker_string.split(",")]


# ── Keychain ────────────────────────────────────────────────────────

def serialize_keychain(keychain: Optional[Any]) -> str:
    if not keychain:
        return EMPTY_KEYCHAIN
    return _encode(keychain, _KEYCHAIN_FIELDS)


def deserialize_keychain(keychain_string: Optional[str]) -> Optional[Keychain]:
    """
    Strict inverse of serialize_keychain.

    Returns None for the sentinel and for any string whose id is 0, whatever
    the other fields hold.
    """
    if not keychain_string or keychain_string == EMPTY_KEYCHAIN:
        return None

    parts = keychain_string.split(";")
    if len(parts) != len(_KEYCHAIN_FIELDS):
        raise ValueError(f"Invalid keychain format: {keychain_string}")

    values = _parse_fields(parts, _KEYCHAIN_FIELDS)
    if values is None:
        raise ValueError(f"Invalid keychain values: {keychain_string}")

    if values["id"] == 0:
        return None

    return Keychain.model_construct(**values)


# ── Fixed 5-slot columns ────────────────────────────────────────────

def serialize_sticker_slots(stickers: Optional[Sequence[Any]]) -> List[str]:
    """Always 5 strings: slot i holds stickers[i] or EMPTY_STICKER."""
    stickers = stickers or []
    return [
        _encode(stickers[i], _STICKER_FIELDS) if i < len(stickers) else EMPTY_STICKER
        for i in range(STICKER_SLOTS)
    ]


def deserialize_sticker_slots(slots: Optional[Sequence[Optional[str]]]) -> List[Sticker]:
    """
    Lenient read of the 5 weapon_sticker_N columns.

    Anything other than exactly 5 slots yields []. Empty slots, slots with
    id 0 and malformed slots are skipped; malformed ones are logged.
    """
    if not slots or len(slots) != STICKER_SLOTS:
        return []

    stickers = []
    for index, slot in enumerate(slots):
        if not slot or slot == EMPTY_STICKER:
            continue
        try:
            sticker = _sticker_from_text(slot)
        except ValueError as e:
            logger.warning(f"Skipping unreadable sticker slot {index}: {e}")
            continue
        if sticker.id == 0:
            continue
        stickers.append(sticker)

    return stickers
