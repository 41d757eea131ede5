"""
POH Layout Data Module
======================

Room and object records plus the room descriptor decoder.

Usage:
    from pohlayout.data import decode_room, RoomRecord
    room = decode_room(index, db_row_id, bitpacked, flag1, flag2)
"""

from pohlayout.data.room_records import (
    LocalPoint,
    ObjectSpawn,
    RoomRecord,
    next_orientation,
)
from pohlayout.data.room_decoder import (
    RoomEvent,
    decode_room,
    decode_event,
    encode_flag1,
    parse_room_script_args,
    resolve_room_name,
)

__all__ = [
    # Records
    'LocalPoint',
    'ObjectSpawn',
    'RoomRecord',
    'next_orientation',

    # Decoder
    'RoomEvent',
    'decode_room',
    'decode_event',
    'encode_flag1',
    'parse_room_script_args',
    'resolve_room_name',
]
