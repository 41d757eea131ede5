"""
Zone/Tile Coordinate Mapper
===========================

Converts between the editor's room-relative addressing and the engine's
world-local coordinates.

Addressing:
    zone (x, y)   1-based room cell, counted from the usable bounding box
    tile (x, y)   0-7 inside the zone, or the row-major index y * 8 + x
    local (x, y)  world-local units, 128 per tile

Forward mapping, for an origin ``(min_usable_x, min_usable_z)``:

    chunk      = origin + (zone - 1)
    scene_tile = 8 + chunk * 8 + tile
    local      = scene_tile << LOCAL_COORD_BITS

The reverse mapping inverts it exactly. Everything is integer arithmetic, so
zone/tile -> local -> zone/tile is lossless for every in-range input. Any
out-of-range input or an invalid region yields None rather than raising.
Zones and chunks are both 8x8 tiles; the mapping has no other chunk size.
"""

from typing import Optional, Tuple

from pohlayout.core.definitions import (
    SCENE_MARGIN,
    LOCAL_COORD_BITS,
    TILES_PER_ZONE,
    ZONE_MAX,
    ZONE_MIN,
    ZONE_TILES,
)
from pohlayout.data.room_records import LocalPoint
from pohlayout.geometry.usable_region import UsableRegionMap

Origin = Tuple[int, int]


# ==========================================
# TILE INDEX HELPERS
# ==========================================
def tile_index_to_coords(tile_index: int) -> Optional[Tuple[int, int]]:
    if not 0 <= tile_index < TILES_PER_ZONE:
        return None
    return (tile_index % ZONE_TILES, tile_index // ZONE_TILES)


def tile_coords_to_index(tile_x: int, tile_y: int) -> Optional[int]:
    if not (0 <= tile_x < ZONE_TILES and 0 <= tile_y < ZONE_TILES):
        return None
    return tile_y * ZONE_TILES + tile_x


def _zone_in_range(zone_x: int, zone_y: int) -> bool:
    return ZONE_MIN <= zone_x <= ZONE_MAX and ZONE_MIN <= zone_y <= ZONE_MAX


# ==========================================
# ZONE/TILE -> LOCAL
# ==========================================
def zone_tile_to_local(
    zone_x: int,
    zone_y: int,
    tile_x: int,
    tile_y: int,
    origin: Origin,
) -> Optional[LocalPoint]:
    """
    Map a zone and a tile inside it to a local point.

    Args:
        zone_x, zone_y: Zone, 1-8
        tile_x, tile_y: Tile inside the zone, 0-7
        origin: (min_usable_x, min_usable_z) chunk-grid coordinate of zone (1, 1)

    Returns:
        LocalPoint, or None if any input is out of range
    """
    if not _zone_in_range(zone_x, zone_y):
        return None
    if tile_coords_to_index(tile_x, tile_y) is None:
        return None

    min_x, min_z = origin
    chunk_x = min_x + (zone_x - 1)
    chunk_z = min_z + (zone_y - 1)
    scene_x = SCENE_MARGIN + chunk_x * ZONE_TILES + tile_x
    scene_y = SCENE_MARGIN + chunk_z * ZONE_TILES + tile_y
    return LocalPoint(scene_x << LOCAL_COORD_BITS, scene_y << LOCAL_COORD_BITS)


def zone_tile_index_to_local(
    zone_x: int,
    zone_y: int,
    tile_index: int,
    origin: Origin,
) -> Optional[LocalPoint]:
    coords = tile_index_to_coords(tile_index)
    if coords is None:
        return None
    return zone_tile_to_local(zone_x, zone_y, coords[0], coords[1], origin)


def zone_anchor(zone_x: int, zone_y: int, origin: Origin) -> Optional[LocalPoint]:
    """Local point of tile (0, 0) of a zone."""
    return zone_tile_to_local(zone_x, zone_y, 0, 0, origin)


# ==========================================
# LOCAL -> ZONE/TILE
# ==========================================
def local_to_zone_tile_coords(
    point: LocalPoint,
    origin: Origin,
) -> Optional[Tuple[int, int, int, int]]:
    """
    Locate the zone and tile containing a local point.

    Returns:
        (zone_x, zone_y, tile_x, tile_y), or None if the point lies before the
        scene margin or outside the 8x8 zone grid
    """
    offset_x = (point.x >> LOCAL_COORD_BITS) - SCENE_MARGIN
    offset_y = (point.y >> LOCAL_COORD_BITS) - SCENE_MARGIN
    if offset_x < 0 or offset_y < 0:
        return None

    min_x, min_z = origin
    zone_x = offset_x // ZONE_TILES - min_x + 1
    zone_y = offset_y // ZONE_TILES - min_z + 1
    if not _zone_in_range(zone_x, zone_y):
        return None

    return (zone_x, zone_y, offset_x % ZONE_TILES, offset_y % ZONE_TILES)


def local_to_zone_tile(
    point: LocalPoint,
    origin: Origin,
) -> Optional[Tuple[int, int, int]]:
    """Same as local_to_zone_tile_coords, with the tile as a 0-63 index."""
    coords = local_to_zone_tile_coords(point, origin)
    if coords is None:
        return None
    zone_x, zone_y, tile_x, tile_y = coords
    return (zone_x, zone_y, tile_coords_to_index(tile_x, tile_y))


# ==========================================
# REGION-BOUND MAPPER
# ==========================================
class ZoneTileMapper:
    """
    Mapper bound to one UsableRegionMap.

    Every call against a missing or invalid region returns None, so callers
    need no separate validity check. A region scanned with chunks that are
    not zone-sized cannot anchor zones and counts as invalid.
    """

    def __init__(self, region: Optional[UsableRegionMap]):
        self.region = region

    @property
    def is_ready(self) -> bool:
        return (self.region is not None and self.region.is_valid
                and self.region.chunk_size == ZONE_TILES)

    @property
    def origin(self) -> Optional[Origin]:
        if self.region is None:
            return None
        return self.region.origin

    def to_local(self, zone_x: int, zone_y: int, tile_x: int, tile_y: int) -> Optional[LocalPoint]:
        if not self.is_ready:
            return None
        return zone_tile_to_local(zone_x, zone_y, tile_x, tile_y, self.origin)

    def index_to_local(self, zone_x: int, zone_y: int, tile_index: int) -> Optional[LocalPoint]:
        if not self.is_ready:
            return None
        return zone_tile_index_to_local(zone_x, zone_y, tile_index, self.origin)

    def anchor(self, zone_x: int, zone_y: int) -> Optional[LocalPoint]:
        if not self.is_ready:
            return None
        return zone_anchor(zone_x, zone_y, self.origin)

    def to_zone_tile(self, point: LocalPoint) -> Optional[Tuple[int, int, int]]:
        if not self.is_ready:
            return None
        return local_to_zone_tile(point, self.origin)

    def to_zone_tile_coords(self, point: LocalPoint) -> Optional[Tuple[int, int, int, int]]:
        if not self.is_ready:
            return None
        return local_to_zone_tile_coords(point, self.origin)


__all__ = [
    'Origin',
    'ZoneTileMapper',
    'local_to_zone_tile',
    'local_to_zone_tile_coords',
    'tile_coords_to_index',
    'tile_index_to_coords',
    'zone_anchor',
    'zone_tile_index_to_local',
    'zone_tile_to_local',
]
