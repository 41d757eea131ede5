"""
POH LAYOUT DEFINITIONS
======================
Central constants for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Scene and chunk dimensions
- Local coordinate precision
- Zone and tile ranges
- Room descriptor bit layout
- Object orientation units
- Engine script / region identifiers

Import from here instead of duplicating constants across modules.

"""

from typing import Dict, Tuple, FrozenSet

# ==========================================
# SCENE DIMENSIONS (Engine Standard)
# ==========================================

# Tiles per chunk edge; a chunk is one room-sized terrain unit
CHUNK_SIZE: int = 8

# Tiles per scene edge (13 chunks)
SCENE_SIZE: int = 104

# The scan and the zone grid both start one chunk in from the scene edge
SCENE_MARGIN: int = CHUNK_SIZE

# Local coordinates carry 7 bits of sub-tile precision (128 units per tile)
LOCAL_COORD_BITS: int = 7
LOCAL_TILE_SIZE: int = 1 << LOCAL_COORD_BITS

# ==========================================
# ZONES & TILES
# ==========================================

# Zones are 1-based room coordinates counted from the usable bounding box
ZONE_MIN: int = 1
ZONE_MAX: int = 8

# Tiles inside a zone: (x, y) in [0, 7] or row-major index in [0, 63]
ZONE_TILES: int = CHUNK_SIZE
TILES_PER_ZONE: int = ZONE_TILES * ZONE_TILES

# Sentinels for an empty bounding box (no usable chunks)
INVALID_MIN_BOUND: int = 2 ** 31 - 1
INVALID_MAX_BOUND: int = -1

# ==========================================
# ROOM DESCRIPTOR BIT LAYOUT (flag1)
# ==========================================
# field name -> (shift, mask); bit 0 is the LSB

FLAG1_FIELDS: Dict[str, Tuple[int, int]] = {
    'x': (0, 0x7),          # room X - 1
    'y': (3, 0x7),          # room Y - 1
    'level': (6, 0x3),      # floor level 0-3
    'rotation': (8, 0x3),   # quarter turns 0-3
    'room_id': (10, 0x3F),  # room type id
}

MAX_LEVEL: int = 3
MAX_ROTATION: int = 3
MAX_ROOM_ID: int = 0x3F

# ==========================================
# OBJECT ORIENTATION (Engine Units)
# ==========================================

# A full turn is 2048 units; the editor rotates in eighths
ORIENTATION_FULL: int = 2048
ORIENTATION_STEP: int = 256
FACINGS: int = ORIENTATION_FULL // ORIENTATION_STEP

# ==========================================
# ENGINE IDENTIFIERS
# ==========================================

# Script fired once per room when the house layout is (re)sent
ROOM_SCRIPT_ID: int = 1376
ROOM_SCRIPT_ARG_COUNT: int = 6

# Map regions that host a player-owned house instance
POH_REGIONS: FrozenSet[int] = frozenset({7257, 7513, 7514, 7769, 7770, 8025, 8026})


# ==========================================
# EXPORTS
# ==========================================

__all__ = [
    # Scene
    'CHUNK_SIZE',
    'SCENE_SIZE',
    'SCENE_MARGIN',
    'LOCAL_COORD_BITS',
    'LOCAL_TILE_SIZE',

    # Zones
    'ZONE_MIN',
    'ZONE_MAX',
    'ZONE_TILES',
    'TILES_PER_ZONE',
    'INVALID_MIN_BOUND',
    'INVALID_MAX_BOUND',

    # Descriptor layout
    'FLAG1_FIELDS',
    'MAX_LEVEL',
    'MAX_ROTATION',
    'MAX_ROOM_ID',

    # Orientation
    'ORIENTATION_FULL',
    'ORIENTATION_STEP',
    'FACINGS',

    # Engine identifiers
    'ROOM_SCRIPT_ID',
    'ROOM_SCRIPT_ARG_COUNT',
    'POH_REGIONS',
]
