"""
Room Batch Reconciler
=====================

Matches a freshly received batch of rooms against the previous snapshot so
placed objects follow their room when the engine relocates or re-indexes it.

Matching:
    Two records describe the same room when rotation, db row, bitpacked door
    info, flag2 and name are all equal (RoomRecord.matches_for_remapping).
    Index and position are ignored; those are what change across a move or
    a reload.

Algorithm (greedy, deterministic):
    1. Walk the batch in ascending new index.
    2. Take the first unconsumed old room, in ascending old index, that
       matches. Mark it consumed.
    3. Matched rooms inherit a copy of the old objects list. A changed index
       counts as a remap, a changed (x, y, level) records a RoomMove.
    4. Unmatched new rooms are additions; unconsumed old rooms are removals.

Identical rooms (same type, rotation and doors) are interchangeable to the
predicate, so the lowest-index rule decides which one keeps its objects.

Pure function: inputs are never mutated and no exception is raised.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple

from pohlayout.data.room_records import RoomRecord

logger = logging.getLogger(__name__)


# ==========================================
# RESULT TYPES
# ==========================================
@dataclass(frozen=True)
class RoomMove:
    """A matched room whose (x, y, level) changed."""
    old_room: RoomRecord
    new_room: RoomRecord
    old_index: int
    new_index: int


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of reconciling one batch against the previous snapshot."""
    moved_rooms: List[RoomMove]
    added_count: int
    removed_count: int
    remapped_count: int
    updated_rooms: Dict[int, RoomRecord]
    added_indices: List[int] = field(default_factory=list)
    removed_indices: List[int] = field(default_factory=list)
    remapped_indices: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.moved_rooms or self.added_count
                    or self.removed_count or self.remapped_count)

    def cleanup_indices(self) -> List[int]:
        """Old indices whose spawned objects must be despawned."""
        stale = {move.old_index for move in self.moved_rooms}
        stale.update(old for old, _new in self.remapped_indices)
        stale.update(self.removed_indices)
        return sorted(stale)


# ==========================================
# MATCHING
# ==========================================
def find_matching_old_room(
    new_room: RoomRecord,
    old_state: Mapping[int, RoomRecord],
    consumed: Optional[set] = None,
) -> Optional[Tuple[int, RoomRecord]]:
    """First (old_index, old_room) matching ``new_room``, lowest index first."""
    for old_index in sorted(old_state):
        if consumed is not None and old_index in consumed:
            continue
        old_room = old_state[old_index]
        if old_room.matches_for_remapping(new_room):
            return old_index, old_room
    return None


def reconcile_rooms(
    old_state: Mapping[int, RoomRecord],
    batch: Mapping[int, RoomRecord],
) -> ReconciliationResult:
    """
    Reconcile a batch of rooms against the previous snapshot.

    Args:
        old_state: Previous snapshot, index -> RoomRecord
        batch: Rooms received this frame, index -> RoomRecord

    Returns:
        ReconciliationResult whose ``updated_rooms`` is the new snapshot
    """
    if not batch:
        return ReconciliationResult(
            moved_rooms=[],
            added_count=0,
            removed_count=0,
            remapped_count=0,
            updated_rooms=dict(old_state),
        )

    consumed = set()
    updated: Dict[int, RoomRecord] = {}
    moves: List[RoomMove] = []
    added: List[int] = []
    remapped: List[Tuple[int, int]] = []

    for new_index in sorted(batch):
        new_room = batch[new_index]
        match = find_matching_old_room(new_room, old_state, consumed)
        if match is None:
            added.append(new_index)
            updated[new_index] = replace(new_room)
            continue

        old_index, old_room = match
        consumed.add(old_index)
        objects = None if old_room.objects is None else list(old_room.objects)
        merged = replace(new_room, objects=objects)
        updated[new_index] = merged

        if old_index != new_index:
            remapped.append((old_index, new_index))
        if old_room.position != new_room.position:
            moves.append(RoomMove(old_room, merged, old_index, new_index))

    removed = sorted(i for i in old_state if i not in consumed)

    logger.debug(
        "Reconciled %d rooms: %d moved, %d added, %d remapped, %d removed",
        len(batch), len(moves), len(added), len(remapped), len(removed)
    )

    return ReconciliationResult(
        moved_rooms=moves,
        added_count=len(added),
        removed_count=len(removed),
        remapped_count=len(remapped),
        updated_rooms=updated,
        added_indices=added,
        removed_indices=removed,
        remapped_indices=remapped,
    )


__all__ = [
    'ReconciliationResult',
    'RoomMove',
    'find_matching_old_room',
    'reconcile_rooms',
]
