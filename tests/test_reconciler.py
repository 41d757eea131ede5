"""
Tests for room batch reconciliation.
"""

import pytest

from pohlayout.data.room_records import ObjectSpawn
from pohlayout.state.reconciler import (
    ReconciliationResult,
    find_matching_old_room,
    reconcile_rooms,
)


@pytest.fixture
def furnished(make_room):
    """Old snapshot: a furnished parlour at index 3 and a bare kitchen at 5."""
    parlour = make_room(3, 1, 1, objects=[ObjectSpawn('chair', 1, 1), ObjectSpawn('rug', 2, 3, 256)])
    kitchen = make_room(5, 2, 1, db_row_id=20, name='Kitchen')
    return {3: parlour, 5: kitchen}


class TestReconcileRooms:

    def test_identical_batch_changes_nothing(self, furnished, make_room):
        batch = {3: make_room(3, 1, 1), 5: make_room(5, 2, 1, db_row_id=20, name='Kitchen')}
        result = reconcile_rooms(furnished, batch)

        assert not result.has_changes
        assert result.moved_rooms == []
        assert (result.added_count, result.removed_count, result.remapped_count) == (0, 0, 0)
        assert result.updated_rooms[3].objects == furnished[3].objects
        assert result.updated_rooms[5].objects is None

    def test_reindexed_room_keeps_objects(self, furnished, make_room):
        batch = {7: make_room(7, 1, 1), 5: make_room(5, 2, 1, db_row_id=20, name='Kitchen')}
        result = reconcile_rooms(furnished, batch)

        assert result.remapped_count == 1
        assert result.remapped_indices == [(3, 7)]
        assert result.moved_rooms == []
        moved = result.updated_rooms[7]
        assert [o.gameval for o in moved.objects] == ['chair', 'rug']
        assert moved.objects is not furnished[3].objects

    def test_relocated_room_is_a_move(self, furnished, make_room):
        batch = {3: make_room(3, 4, 6, level=1), 5: make_room(5, 2, 1, db_row_id=20, name='Kitchen')}
        result = reconcile_rooms(furnished, batch)

        assert len(result.moved_rooms) == 1
        move = result.moved_rooms[0]
        assert (move.old_index, move.new_index) == (3, 3)
        assert move.old_room.position == (1, 1, 0)
        assert move.new_room.position == (4, 6, 1)
        assert move.new_room.object_count() == 2
        assert result.remapped_count == 0

    def test_reindexed_and_relocated_room(self, furnished, make_room):
        batch = {7: make_room(7, 4, 6, level=1), 5: make_room(5, 2, 1, db_row_id=20, name='Kitchen')}
        result = reconcile_rooms(furnished, batch)

        assert len(result.moved_rooms) == 1
        move = result.moved_rooms[0]
        assert (move.old_index, move.new_index) == (3, 7)
        assert move.new_room.position == (4, 6, 1)
        assert result.updated_rooms[7].object_count() == 2
        assert 3 not in result.updated_rooms
        assert result.remapped_indices == [(3, 7)]

    def test_additions_and_removals(self, furnished, make_room):
        batch = {
            3: make_room(3, 1, 1),
            8: make_room(8, 3, 3, db_row_id=31, name='Study'),
        }
        result = reconcile_rooms(furnished, batch)

        assert result.added_count == 1
        assert result.added_indices == [8]
        assert result.removed_count == 1
        assert result.removed_indices == [5]
        assert set(result.updated_rooms) == {3, 8}
        assert result.updated_rooms[8].objects is None

    def test_identical_rooms_pick_lowest_old_index(self, make_room):
        old = {
            4: make_room(4, 2, 2, objects=[ObjectSpawn('plant', 0, 0)]),
            2: make_room(2, 1, 1, objects=[ObjectSpawn('lamp', 0, 0)]),
        }
        result = reconcile_rooms(old, {9: make_room(9, 5, 5)})

        assert [o.gameval for o in result.updated_rooms[9].objects] == ['lamp']
        assert result.removed_indices == [4]
        assert result.moved_rooms[0].old_index == 2

    def test_each_old_room_matched_once(self, make_room):
        old = {1: make_room(1, 1, 1, objects=[ObjectSpawn('lamp', 0, 0)])}
        batch = {1: make_room(1, 1, 1), 2: make_room(2, 2, 2)}
        result = reconcile_rooms(old, batch)

        assert result.updated_rooms[1].object_count() == 1
        assert result.updated_rooms[2].objects is None
        assert result.added_count == 1

    def test_empty_batch_is_noop(self, furnished):
        result = reconcile_rooms(furnished, {})

        assert not result.has_changes
        assert result.updated_rooms == furnished
        assert result.updated_rooms is not furnished

    def test_inputs_not_mutated(self, furnished, make_room):
        batch = {7: make_room(7, 1, 1)}
        reconcile_rooms(furnished, batch)

        assert batch[7].objects is None
        assert set(furnished) == {3, 5}
        assert furnished[3].object_count() == 2

    def test_name_none_does_not_match_named(self, make_room):
        old = {1: make_room(1, 1, 1, name=None, objects=[ObjectSpawn('lamp', 0, 0)])}
        result = reconcile_rooms(old, {1: make_room(1, 1, 1)})
        assert result.added_count == 1
        assert result.removed_count == 1

    def test_cleanup_indices(self, make_room):
        old = {
            1: make_room(1, 1, 1),
            2: make_room(2, 2, 1, db_row_id=20),
            3: make_room(3, 3, 1, db_row_id=30),
            4: make_room(4, 4, 1, db_row_id=40),
        }
        batch = {
            1: make_room(1, 1, 1),                  # unchanged
            2: make_room(2, 5, 5, db_row_id=20),    # moved
            6: make_room(6, 3, 1, db_row_id=30),    # remapped
        }
        result = reconcile_rooms(old, batch)
        assert result.cleanup_indices() == [2, 3, 4]


def test_find_matching_old_room(make_room):
    old = {5: make_room(5, 1, 1), 2: make_room(2, 3, 3)}
    assert find_matching_old_room(make_room(9, 8, 8), old)[0] == 2
    assert find_matching_old_room(make_room(9, 8, 8, db_row_id=1), old) is None


def test_result_without_changes():
    result = ReconciliationResult([], 0, 0, 0, {})
    assert not result.has_changes
    assert result.cleanup_indices() == []
