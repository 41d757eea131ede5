"""
Tests for zone/tile <-> local coordinate mapping.
"""

import pytest

from pohlayout.core.definitions import LOCAL_TILE_SIZE
from pohlayout.data.room_records import LocalPoint
from pohlayout.geometry.usable_region import UsableRegionMap, scan_height_grid
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

ORIGIN = (2, 3)


class TestForwardMapping:

    def test_known_point(self):
        # scene tile x = 8 + 2*8 + 3 = 27, y = 8 + 3*8 + 4 = 36
        assert zone_tile_to_local(1, 1, 3, 4, ORIGIN) == LocalPoint(27 * 128, 36 * 128)

    def test_zone_anchor(self):
        assert zone_anchor(2, 1, ORIGIN) == LocalPoint(32 * 128, 32 * 128)

    def test_index_addressing(self):
        assert zone_tile_index_to_local(1, 1, 35, ORIGIN) == zone_tile_to_local(1, 1, 3, 4, ORIGIN)

    @pytest.mark.parametrize("zone_x,zone_y,tile_x,tile_y", [
        (0, 1, 0, 0),
        (9, 1, 0, 0),
        (1, 0, 0, 0),
        (1, 9, 0, 0),
        (1, 1, 8, 0),
        (1, 1, 0, -1),
    ])
    def test_out_of_range(self, zone_x, zone_y, tile_x, tile_y):
        assert zone_tile_to_local(zone_x, zone_y, tile_x, tile_y, ORIGIN) is None

    def test_bad_tile_index(self):
        assert zone_tile_index_to_local(1, 1, 64, ORIGIN) is None
        assert zone_tile_index_to_local(1, 1, -1, ORIGIN) is None


class TestReverseMapping:

    def test_every_zone_tile_round_trips(self):
        for zone_x in range(1, 9):
            for zone_y in range(1, 9):
                for tile_index in range(64):
                    point = zone_tile_index_to_local(zone_x, zone_y, tile_index, ORIGIN)
                    assert local_to_zone_tile(point, ORIGIN) == (zone_x, zone_y, tile_index)

    def test_sub_tile_offset_stays_in_tile(self):
        point = zone_tile_to_local(4, 2, 7, 0, ORIGIN)
        inner = LocalPoint(point.x + LOCAL_TILE_SIZE - 1, point.y + 64)
        assert local_to_zone_tile_coords(inner, ORIGIN) == (4, 2, 7, 0)

    def test_point_before_margin(self):
        assert local_to_zone_tile(LocalPoint(7 * 128, 40 * 128), (0, 0)) is None
        assert local_to_zone_tile(LocalPoint(-1, 40 * 128), (0, 0)) is None

    def test_zone_before_origin(self):
        # chunk 1 is left of the origin chunk 2
        assert local_to_zone_tile(LocalPoint(16 * 128, 40 * 128), ORIGIN) is None

    def test_zone_past_eight(self):
        # scene tile 72 is chunk 8 -> zone 9 for origin 0
        assert local_to_zone_tile(LocalPoint(72 * 128, 8 * 128), (0, 0)) is None
        assert local_to_zone_tile(LocalPoint(71 * 128, 8 * 128), (0, 0)) == (8, 1, 7)

    def test_zones_are_eight_tiles_wide(self):
        # scene tile (26, 16) is 18, 8 past the margin: zone (3, 2), tile (2, 1)
        assert local_to_zone_tile(LocalPoint(26 << 7, 16 << 7), (0, 0)) == (3, 2, 10)
        point = zone_tile_to_local(1, 1, 6, 0, (0, 0))
        assert local_to_zone_tile_coords(point, (0, 0)) == (1, 1, 6, 0)


def test_tile_index_helpers():
    assert tile_index_to_coords(35) == (3, 4)
    assert tile_coords_to_index(3, 4) == 35
    assert tile_index_to_coords(64) is None
    assert tile_coords_to_index(8, 0) is None


class TestZoneTileMapper:

    def test_no_region(self):
        mapper = ZoneTileMapper(None)
        assert not mapper.is_ready
        assert mapper.origin is None
        assert mapper.to_local(1, 1, 0, 0) is None
        assert mapper.to_zone_tile(LocalPoint(2048, 2048)) is None

    def test_invalid_region(self):
        mapper = ZoneTileMapper(UsableRegionMap.empty())
        assert mapper.to_local(1, 1, 0, 0) is None
        assert mapper.index_to_local(1, 1, 0) is None
        assert mapper.anchor(1, 1) is None
        assert mapper.to_zone_tile_coords(LocalPoint(2048, 2048)) is None

    def test_region_with_other_chunk_size_not_ready(self, house_terrain):
        region = scan_height_grid(house_terrain, chunk_size=4)
        mapper = ZoneTileMapper(region)

        assert region.is_valid
        assert not mapper.is_ready
        assert mapper.to_local(1, 1, 0, 0) is None
        assert mapper.to_zone_tile(LocalPoint(26 << 7, 16 << 7)) is None

    def test_bound_to_region_origin(self, house_terrain):
        mapper = ZoneTileMapper(scan_height_grid(house_terrain))

        assert mapper.is_ready
        assert mapper.origin == ORIGIN
        point = mapper.to_local(1, 1, 3, 4)
        assert point == zone_tile_to_local(1, 1, 3, 4, ORIGIN)
        assert mapper.to_zone_tile(point) == (1, 1, 35)
        assert mapper.to_zone_tile_coords(point) == (1, 1, 3, 4)
        assert mapper.index_to_local(1, 1, 35) == point
        assert mapper.anchor(1, 1) == zone_anchor(1, 1, ORIGIN)
