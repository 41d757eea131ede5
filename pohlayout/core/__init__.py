"""
POH Layout Core Module
======================

Engine constants and configuration shared by every other submodule.

Usage:
    from pohlayout.core import CHUNK_SIZE, LOCAL_COORD_BITS
    from pohlayout.core.config import HouseEditorConfig
"""

from pohlayout.core.definitions import (
    CHUNK_SIZE,
    SCENE_SIZE,
    SCENE_MARGIN,
    LOCAL_COORD_BITS,
    LOCAL_TILE_SIZE,
    ZONE_MIN,
    ZONE_MAX,
    ZONE_TILES,
    TILES_PER_ZONE,
    FLAG1_FIELDS,
    ORIENTATION_FULL,
    ORIENTATION_STEP,
    ROOM_SCRIPT_ID,
    POH_REGIONS,
)
from pohlayout.core.config import HouseEditorConfig

__all__ = [
    'CHUNK_SIZE',
    'SCENE_SIZE',
    'SCENE_MARGIN',
    'LOCAL_COORD_BITS',
    'LOCAL_TILE_SIZE',
    'ZONE_MIN',
    'ZONE_MAX',
    'ZONE_TILES',
    'TILES_PER_ZONE',
    'FLAG1_FIELDS',
    'ORIENTATION_FULL',
    'ORIENTATION_STEP',
    'ROOM_SCRIPT_ID',
    'POH_REGIONS',
    'HouseEditorConfig',
]
