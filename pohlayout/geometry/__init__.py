"""
POH Layout Geometry Module
==========================

Usable-region scanning and zone/tile <-> local coordinate mapping.

Usage:
    from pohlayout.geometry import scan_usable_region, ZoneTileMapper
    region = scan_usable_region(104, 104, 8, height_at, plane)
    mapper = ZoneTileMapper(region)
    point = mapper.to_local(1, 1, 3, 4)
"""

from pohlayout.geometry.usable_region import (
    HeightQuery,
    UsableRegionMap,
    scan_height_grid,
    scan_usable_region,
)
from pohlayout.geometry.zone_tiles import (
    ZoneTileMapper,
    local_to_zone_tile,
    local_to_zone_tile_coords,
    tile_coords_to_index,
    tile_index_to_coords,
    zone_anchor,
    zone_tile_index_to_local,
    zone_tile_to_local,
)

__all__ = [
    # Scanning
    'HeightQuery',
    'UsableRegionMap',
    'scan_height_grid',
    'scan_usable_region',

    # Mapping
    'ZoneTileMapper',
    'local_to_zone_tile',
    'local_to_zone_tile_coords',
    'tile_coords_to_index',
    'tile_index_to_coords',
    'zone_anchor',
    'zone_tile_index_to_local',
    'zone_tile_to_local',
]
