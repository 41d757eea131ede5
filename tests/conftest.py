"""
Shared fixtures for the POH layout tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from pohlayout.core.definitions import CHUNK_SIZE, SCENE_SIZE
from pohlayout.data.room_decoder import encode_flag1
from pohlayout.data.room_records import RoomRecord


def build_room(index, x, y, level=0, rotation=0, db_row_id=12, room_id=1,
               bitpacked=0, flag2=0, name='Parlour', objects=None):
    """RoomRecord whose flag1 agrees with its decoded fields."""
    return RoomRecord(
        index=index,
        db_row_id=db_row_id,
        x=x,
        y=y,
        level=level,
        rotation=rotation,
        room_id=room_id,
        bitpacked=bitpacked,
        flag1=encode_flag1(x, y, level, rotation, room_id),
        flag2=flag2,
        name=name,
        objects=objects,
    )


def house_heights(chunks_x, chunks_z, scene_size=SCENE_SIZE, chunk_size=CHUNK_SIZE):
    """
    Height table (indexed [x, y]) that is flat ground over the given chunk
    ranges and void everywhere else.
    """
    heights = np.zeros((scene_size, scene_size), dtype=np.int32)
    x0 = chunk_size + chunks_x[0] * chunk_size
    x1 = chunk_size + (chunks_x[1] + 1) * chunk_size
    z0 = chunk_size + chunks_z[0] * chunk_size
    z1 = chunk_size + (chunks_z[1] + 1) * chunk_size
    heights[x0:x1, z0:z1] = -240
    return heights


@pytest.fixture
def make_room():
    return build_room


@pytest.fixture
def house_terrain():
    """Usable chunks x in [2, 4], z in [3, 5]: origin (2, 3)."""
    return house_heights((2, 4), (3, 5))


@pytest.fixture
def height_query(house_terrain):
    def height_at(x, y, plane):
        return int(house_terrain[x, y])
    return height_at
