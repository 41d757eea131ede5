"""
Usable-Region Scanner
=====================

Decides which chunks of the loaded scene belong to the house.

The house instance is built on terrain that has real height everywhere a room
can be; empty plots and the void around the house report height 0. A chunk is
USABLE only if every one of its tiles has non-zero height. One zero tile
rejects the whole chunk: missing a usable chunk only hides a room, while a
false positive would anchor objects on the wrong tiles.

Grid Layout:
    Scanning starts one chunk in from the scene's low edge and steps in
    whole chunks up to ``scene_size - chunk_size``. For the 104-tile scene
    that is a 12x12 grid covering scene tiles 8-103. A trailing chunk that
    would extend past the scene edge reads as zero height.

The result is an immutable UsableRegionMap. Whoever owns the house lifecycle
holds it and replaces it wholesale on every house load.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from pohlayout.core.definitions import (
    CHUNK_SIZE,
    INVALID_MAX_BOUND,
    INVALID_MIN_BOUND,
)

logger = logging.getLogger(__name__)

# (scene_x, scene_y, plane) -> terrain height, 0 = no terrain
HeightQuery = Callable[[int, int, int], int]


# ==========================================
# REGION MAP
# ==========================================
@dataclass(frozen=True, eq=False)
class UsableRegionMap:
    """Which chunks are usable, and the bounding box around them."""
    grid_width: int
    grid_height: int
    usable_grid: np.ndarray  # bool [grid_width, grid_height], read-only
    min_usable_x: int
    min_usable_z: int
    max_usable_x: int
    max_usable_z: int
    usable_count: int
    chunk_size: int = CHUNK_SIZE

    @classmethod
    def empty(cls, chunk_size: int = CHUNK_SIZE) -> 'UsableRegionMap':
        """The cleared map: no grid, no usable chunks, invalid bounds."""
        grid = np.zeros((0, 0), dtype=bool)
        grid.setflags(write=False)
        return cls(
            grid_width=0,
            grid_height=0,
            usable_grid=grid,
            min_usable_x=INVALID_MIN_BOUND,
            min_usable_z=INVALID_MIN_BOUND,
            max_usable_x=INVALID_MAX_BOUND,
            max_usable_z=INVALID_MAX_BOUND,
            usable_count=0,
            chunk_size=chunk_size,
        )

    @property
    def is_valid(self) -> bool:
        """Bounds are only meaningful when at least one chunk is usable."""
        return self.usable_count > 0

    @property
    def total_chunks(self) -> int:
        return self.grid_width * self.grid_height

    @property
    def unusable_count(self) -> int:
        return self.total_chunks - self.usable_count

    @property
    def origin(self) -> Optional[Tuple[int, int]]:
        """Chunk-grid coordinate of zone (1, 1), or None for an invalid map."""
        if not self.is_valid:
            return None
        return (self.min_usable_x, self.min_usable_z)

    @property
    def bounding_size(self) -> Optional[Tuple[int, int]]:
        if not self.is_valid:
            return None
        return (self.max_usable_x - self.min_usable_x + 1,
                self.max_usable_z - self.min_usable_z + 1)

    def is_usable(self, chunk_x: int, chunk_z: int) -> bool:
        if not (0 <= chunk_x < self.grid_width and 0 <= chunk_z < self.grid_height):
            return False
        return bool(self.usable_grid[chunk_x, chunk_z])


# ==========================================
# SCANNING
# ==========================================
def _chunk_count(scene_extent: int, chunk_size: int) -> int:
    start = chunk_size
    end = scene_extent - chunk_size
    if end < start:
        return 0
    return (end - start) // chunk_size + 1


def scan_height_grid(heights: np.ndarray, chunk_size: int = CHUNK_SIZE) -> UsableRegionMap:
    """
    Classify chunks from a full-scene height table.

    Args:
        heights: 2-D array indexed [scene_x, scene_y]; 0 means no terrain
        chunk_size: Tiles per chunk edge

    Returns:
        A new UsableRegionMap
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    heights = np.asarray(heights)
    if heights.ndim != 2:
        raise ValueError(f"heights must be 2-D, got shape {heights.shape}")

    scene_w, scene_h = heights.shape
    grid_w = _chunk_count(scene_w, chunk_size)
    grid_h = _chunk_count(scene_h, chunk_size)

    # Tiles past the scene edge stay zero and so count as unusable
    span = np.zeros((grid_w * chunk_size, grid_h * chunk_size), dtype=heights.dtype)
    start = chunk_size
    src = heights[start:start + span.shape[0], start:start + span.shape[1]]
    span[:src.shape[0], :src.shape[1]] = src

    usable = (span != 0).reshape(grid_w, chunk_size, grid_h, chunk_size).all(axis=(1, 3))
    usable.setflags(write=False)

    coords = np.argwhere(usable)
    usable_count = int(len(coords))
    if usable_count:
        min_x, min_z = (int(v) for v in coords.min(axis=0))
        max_x, max_z = (int(v) for v in coords.max(axis=0))
    else:
        min_x = min_z = INVALID_MIN_BOUND
        max_x = max_z = INVALID_MAX_BOUND

    region = UsableRegionMap(
        grid_width=grid_w,
        grid_height=grid_h,
        usable_grid=usable,
        min_usable_x=min_x,
        min_usable_z=min_z,
        max_usable_x=max_x,
        max_usable_z=max_z,
        usable_count=usable_count,
        chunk_size=chunk_size,
    )
    _log_region(region)
    return region


def scan_usable_region(
    scene_width: int,
    scene_height: int,
    chunk_size: int,
    height_at: HeightQuery,
    plane: int,
) -> UsableRegionMap:
    """
    Classify chunks by querying terrain height tile by tile.

    Only tiles inside the scanned grid are queried; the result is identical
    to ``scan_height_grid`` over the same heights.

    Args:
        scene_width: Scene tiles along X
        scene_height: Scene tiles along Y
        chunk_size: Tiles per chunk edge
        height_at: (scene_x, scene_y, plane) -> height
        plane: Plane to sample

    Returns:
        A new UsableRegionMap
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    heights = np.zeros((max(scene_width, 0), max(scene_height, 0)), dtype=np.int64)
    start = chunk_size
    end_x = min(scene_width, start + _chunk_count(scene_width, chunk_size) * chunk_size)
    end_y = min(scene_height, start + _chunk_count(scene_height, chunk_size) * chunk_size)
    for x in range(start, end_x):
        for y in range(start, end_y):
            heights[x, y] = height_at(x, y, plane)

    return scan_height_grid(heights, chunk_size)


def _log_region(region: UsableRegionMap) -> None:
    logger.info(f"Grid Size: {region.grid_width}x{region.grid_height}")
    logger.info(f"Total Chunks: {region.total_chunks}")
    logger.info(f"Usable Chunks: {region.usable_count}")
    logger.info(f"Unusable Chunks: {region.unusable_count}")
    if region.is_valid:
        w, h = region.bounding_size
        logger.info(
            f"Usable Chunks Bounding Box: {w}x{h} "
            f"(from {region.min_usable_x},{region.min_usable_z} "
            f"to {region.max_usable_x},{region.max_usable_z})"
        )
    else:
        logger.warning("No usable chunks found; region bounds are invalid")


__all__ = [
    'HeightQuery',
    'UsableRegionMap',
    'scan_height_grid',
    'scan_usable_region',
]
