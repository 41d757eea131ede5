"""
Room Descriptor Decoder
=======================

Unpacks the integers the engine sends for every room into a RoomRecord.

flag1 Layout (bit 0 = LSB):
    bits 0-2   room X - 1
    bits 3-5   room Y - 1
    bits 6-7   level
    bits 8-9   rotation
    bits 10-15 room type id

``bitpacked`` (door info) and ``flag2`` (furniture flags) are kept verbatim.
Masking keeps every field in range, so decoding has no error path; signed
32-bit inputs decode the same as their unsigned bit patterns.
"""

import logging
from collections.abc import Mapping
from typing import NamedTuple, Optional, Sequence

from pohlayout.core.config import NameLookup
from pohlayout.core.definitions import (
    FLAG1_FIELDS,
    MAX_LEVEL,
    MAX_ROOM_ID,
    MAX_ROTATION,
    ROOM_SCRIPT_ARG_COUNT,
    ROOM_SCRIPT_ID,
    ZONE_MAX,
    ZONE_MIN,
)
from pohlayout.data.room_records import RoomRecord

logger = logging.getLogger(__name__)


class RoomEvent(NamedTuple):
    """The five raw integers delivered per room."""
    index: int
    db_row_id: int
    bitpacked: int
    flag1: int
    flag2: int


def _field(flag1: int, name: str) -> int:
    shift, mask = FLAG1_FIELDS[name]
    return (flag1 >> shift) & mask


def resolve_room_name(db_row_id: int, name_lookup: Optional[NameLookup]) -> Optional[str]:
    """Look up a display name; any miss degrades to None."""
    if name_lookup is None:
        return None
    try:
        if isinstance(name_lookup, Mapping):
            name = name_lookup.get(db_row_id)
        else:
            name = name_lookup(db_row_id)
    except LookupError:
        name = None
    if name is None:
        logger.debug(f"No room name for dbRowId {db_row_id}")
        return None
    return str(name)


def decode_room(
    index: int,
    db_row_id: int,
    bitpacked: int,
    flag1: int,
    flag2: int,
    name_lookup: Optional[NameLookup] = None,
) -> RoomRecord:
    """
    Decode one room descriptor.

    Args:
        index: Engine slot id (not stable across reloads)
        db_row_id: Room definition row
        bitpacked: Door/room info, kept verbatim
        flag1: Position flags (see module docstring)
        flag2: Furniture flags, kept verbatim
        name_lookup: Mapping or callable dbRowId -> display name

    Returns:
        RoomRecord with ``objects`` unset
    """
    return RoomRecord(
        index=index,
        db_row_id=db_row_id,
        x=_field(flag1, 'x') + 1,
        y=_field(flag1, 'y') + 1,
        level=_field(flag1, 'level'),
        rotation=_field(flag1, 'rotation'),
        room_id=_field(flag1, 'room_id'),
        bitpacked=bitpacked,
        flag1=flag1,
        flag2=flag2,
        name=resolve_room_name(db_row_id, name_lookup),
    )


def decode_event(event: RoomEvent, name_lookup: Optional[NameLookup] = None) -> RoomRecord:
    return decode_room(*event, name_lookup=name_lookup)


def encode_flag1(x: int, y: int, level: int = 0, rotation: int = 0, room_id: int = 0) -> int:
    """Pack room fields back into a flag1 value (x, y are 1-based)."""
    if not (ZONE_MIN <= x <= ZONE_MAX and ZONE_MIN <= y <= ZONE_MAX):
        raise ValueError(f"room position ({x}, {y}) outside {ZONE_MIN}-{ZONE_MAX}")
    if not 0 <= level <= MAX_LEVEL:
        raise ValueError(f"level {level} outside 0-{MAX_LEVEL}")
    if not 0 <= rotation <= MAX_ROTATION:
        raise ValueError(f"rotation {rotation} outside 0-{MAX_ROTATION}")
    if not 0 <= room_id <= MAX_ROOM_ID:
        raise ValueError(f"room_id {room_id} outside 0-{MAX_ROOM_ID}")

    values = {'x': x - 1, 'y': y - 1, 'level': level, 'rotation': rotation, 'room_id': room_id}
    flag1 = 0
    for name, (shift, _mask) in FLAG1_FIELDS.items():
        flag1 |= values[name] << shift
    return flag1


def parse_room_script_args(script_id: int, args: Optional[Sequence]) -> Optional[RoomEvent]:
    """
    Extract a RoomEvent from the room script's arguments.

    The engine fires script 1376 with ``(widget, index, dbRowId, roomInfo,
    flag1, flag2)``. Other scripts return None silently; a 1376 payload of the
    wrong shape is logged and dropped.
    """
    if script_id != ROOM_SCRIPT_ID:
        return None
    if args is None or len(args) != ROOM_SCRIPT_ARG_COUNT:
        logger.warning(f"Room script fired with unexpected args: {args!r}")
        return None
    try:
        return RoomEvent(*(int(a) for a in args[1:]))
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to parse room script arguments {args!r}: {e}")
        return None


__all__ = [
    'RoomEvent',
    'decode_room',
    'decode_event',
    'encode_flag1',
    'parse_room_script_args',
    'resolve_room_name',
]
