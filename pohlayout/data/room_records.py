"""
Room & Object Records
=====================

Plain data carried between the decoder, the reconciler, the state holder and
storage.

Serialized Form:
    ``to_dict``/``from_dict`` use the field names of the plugin's existing
    save files (``dbRowId``, ``roomName``, ``tileX``...), so saves written by
    earlier versions load unchanged.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pohlayout.core.definitions import (
    ORIENTATION_FULL,
    ORIENTATION_STEP,
    ZONE_TILES,
)


def next_orientation(orientation: int) -> int:
    """Rotate one facing (an eighth of a turn) clockwise."""
    return (orientation + ORIENTATION_STEP) % ORIENTATION_FULL


# ==========================================
# DATA CLASSES
# ==========================================
@dataclass(frozen=True)
class LocalPoint:
    """A point in world-local units (128 per tile)."""
    x: int
    y: int


@dataclass
class ObjectSpawn:
    """One placed decoration inside a room's 8x8 tile grid."""
    gameval: str
    tile_x: int           # 0-7 within the zone
    tile_y: int           # 0-7 within the zone
    orientation: int = 0  # 0-2047, steps of 256

    @property
    def tile_index(self) -> int:
        return self.tile_y * ZONE_TILES + self.tile_x

    @property
    def facing(self) -> int:
        """Which of the 8 facings the orientation falls in."""
        return (self.orientation % ORIENTATION_FULL) // ORIENTATION_STEP

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gameval': self.gameval,
            'tileX': self.tile_x,
            'tileY': self.tile_y,
            'orientation': self.orientation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ObjectSpawn':
        return cls(
            gameval=data['gameval'],
            tile_x=int(data.get('tileX', 0)),
            tile_y=int(data.get('tileY', 0)),
            orientation=int(data.get('orientation', 0)),
        )


@dataclass
class RoomRecord:
    """
    One room instance as currently known.

    ``x``, ``y``, ``level``, ``rotation`` and ``room_id`` are decoded from
    ``flag1``; ``bitpacked`` and ``flag2`` are opaque engine payload kept for
    identity matching. ``index`` is the engine slot and is NOT stable across
    reloads, which is why matching ignores it.
    """
    index: int
    db_row_id: int
    x: int                # 1-8
    y: int                # 1-8
    level: int            # 0-3
    rotation: int         # 0-3
    room_id: int
    bitpacked: int
    flag1: int
    flag2: int
    name: Optional[str] = None
    objects: Optional[List[ObjectSpawn]] = None

    @property
    def position(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.level)

    def matches_for_remapping(self, other: Optional['RoomRecord']) -> bool:
        """
        True if ``other`` is the same physical room, possibly relocated or
        re-indexed.

        Compares rotation, db row, bitpacked door info, flag2 and name.
        Position and index are left out on purpose: they are exactly what
        changes across a move or a reload.
        """
        if other is None:
            return False
        return (self.rotation == other.rotation and
                self.db_row_id == other.db_row_id and
                self.bitpacked == other.bitpacked and
                self.flag2 == other.flag2 and
                self.name == other.name)

    def add_object(self, spawn: ObjectSpawn) -> None:
        if self.objects is None:
            self.objects = []
        self.objects.append(spawn)

    def object_count(self) -> int:
        return len(self.objects) if self.objects else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'dbRowId': self.db_row_id,
            'x': self.x,
            'y': self.y,
            'level': self.level,
            'rotation': self.rotation,
            'roomId': self.room_id,
            'bitpacked': self.bitpacked,
            'flag1': self.flag1,
            'flag2': self.flag2,
            'roomName': self.name,
            'objects': None if self.objects is None else [o.to_dict() for o in self.objects],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoomRecord':
        objects = data.get('objects')
        return cls(
            index=int(data['index']),
            db_row_id=int(data['dbRowId']),
            x=int(data['x']),
            y=int(data['y']),
            level=int(data.get('level', 0)),
            rotation=int(data.get('rotation', 0)),
            room_id=int(data.get('roomId', 0)),
            bitpacked=int(data.get('bitpacked', 0)),
            flag1=int(data.get('flag1', 0)),
            flag2=int(data.get('flag2', 0)),
            name=data.get('roomName'),
            objects=None if objects is None else [ObjectSpawn.from_dict(o) for o in objects],
        )

    def __str__(self) -> str:
        return (f"Room[index={self.index}, id={self.room_id}, x={self.x}, y={self.y}, "
                f"level={self.level}, rotation={self.rotation}, dbRowId={self.db_row_id}, "
                f"name={self.name}]")


__all__ = ['LocalPoint', 'ObjectSpawn', 'RoomRecord', 'next_orientation']
