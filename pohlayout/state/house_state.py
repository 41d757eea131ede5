"""
House State Service
===================

The single long-lived holder of everything the editor knows about the house
the player is standing in:

- the authoritative room snapshot (index -> RoomRecord)
- the current UsableRegionMap and a ZoneTileMapper over it
- the username whose save file backs the snapshot

Lifecycle:
    enter_house()    rescan the terrain, then load the user's saved rooms
    room events      decoded and coalesced by RoomBatchScheduler
    run_pending()    host tick; flushes the batch into process_room_batch()
    leave_house()    clear the region (the snapshot stays for the next visit)

Listeners registered with ``add_listener`` receive every
ReconciliationResult; the object renderer uses ``cleanup_indices()`` and
``object_placements()`` from there to despawn and respawn objects.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pohlayout.core.config import HouseEditorConfig
from pohlayout.core.definitions import POH_REGIONS
from pohlayout.data.room_decoder import decode_room, parse_room_script_args
from pohlayout.data.room_records import LocalPoint, ObjectSpawn, RoomRecord
from pohlayout.geometry.usable_region import HeightQuery, UsableRegionMap, scan_usable_region
from pohlayout.geometry.zone_tiles import ZoneTileMapper
from pohlayout.state.reconciler import ReconciliationResult, find_matching_old_room, reconcile_rooms
from pohlayout.state.scheduler import RoomBatchScheduler
from pohlayout.storage.house_storage import HouseStorageStrategy, LocalFileStorageStrategy

logger = logging.getLogger(__name__)

ResultListener = Callable[[ReconciliationResult], None]


def is_in_house(map_regions: Optional[Iterable[int]]) -> bool:
    """True if any of the loaded map regions hosts a house instance."""
    if not map_regions:
        return False
    return any(region in POH_REGIONS for region in map_regions)


class HouseStateService:
    """
    Owns the room snapshot, the usable region and their persistence.

    Args:
        storage: Where snapshots are saved; defaults to a
            LocalFileStorageStrategy in ``config.save_dir``
        config: HouseEditorConfig (validated on construction)
    """

    def __init__(self, storage: Optional[HouseStorageStrategy] = None,
                 config: Optional[HouseEditorConfig] = None):
        self.config = (config or HouseEditorConfig()).validate()
        if storage is None:
            storage = LocalFileStorageStrategy(self.config.save_dir, self.config.save_file_suffix)
        self.storage = storage

        self._rooms_by_index: Dict[int, RoomRecord] = {}
        self._region = UsableRegionMap.empty(self.config.chunk_size)
        self._mapper = ZoneTileMapper(self._region)
        self._listeners: List[ResultListener] = []
        self.username: Optional[str] = None
        self.scheduler = RoomBatchScheduler(self.process_room_batch)

    # ==========================================
    # ACCESSORS
    # ==========================================
    @property
    def rooms_by_index(self) -> Mapping[int, RoomRecord]:
        return MappingProxyType(self._rooms_by_index)

    @property
    def region(self) -> UsableRegionMap:
        return self._region

    @property
    def mapper(self) -> ZoneTileMapper:
        return self._mapper

    def add_listener(self, callback: ResultListener) -> None:
        self._listeners.append(callback)

    def get_room_at(self, x: int, y: int, level: Optional[int] = None) -> Optional[RoomRecord]:
        """First room (lowest index) at zone (x, y), optionally on one level."""
        found = self._find_room_at(x, y, level)
        return None if found is None else found[1]

    def _find_room_at(self, x: int, y: int,
                      level: Optional[int] = None) -> Optional[Tuple[int, RoomRecord]]:
        for index in sorted(self._rooms_by_index):
            room = self._rooms_by_index[index]
            if room.x == x and room.y == y and (level is None or room.level == level):
                return index, room
        return None

    # ==========================================
    # HOUSE LIFECYCLE
    # ==========================================
    def enter_house(self, height_at: HeightQuery, plane: int,
                    username: Optional[str] = None) -> UsableRegionMap:
        """Rescan the usable region; load the saved layout when it is valid."""
        if username is not None:
            self.username = username

        size = self.config.scene_size
        self._set_region(scan_usable_region(size, size, self.config.chunk_size, height_at, plane))

        if not self._region.is_valid:
            logger.warning("Usable region is not valid after calculation")
            return self._region

        if self.username is not None:
            self.load_rooms(self.username)
        return self._region

    def leave_house(self) -> None:
        self._set_region(UsableRegionMap.empty(self.config.chunk_size))

    def _set_region(self, region: UsableRegionMap) -> None:
        self._region = region
        self._mapper = ZoneTileMapper(region)

    # ==========================================
    # ROOM EVENTS
    # ==========================================
    def handle_room_event(self, index: int, db_row_id: int, bitpacked: int,
                          flag1: int, flag2: int) -> RoomRecord:
        room = decode_room(index, db_row_id, bitpacked, flag1, flag2, self.config.name_lookup)
        self.scheduler.submit(index, room)
        return room

    def handle_script_event(self, script_id: int, args: Optional[Sequence]) -> Optional[RoomRecord]:
        event = parse_room_script_args(script_id, args)
        if event is None:
            return None
        return self.handle_room_event(*event)

    def run_pending(self) -> int:
        return self.scheduler.run_pending()

    def process_room_batch(self, batch: Mapping[int, RoomRecord]) -> ReconciliationResult:
        """Reconcile a batch, swap in the new snapshot, save and notify."""
        old_state = dict(self._rooms_by_index)
        result = reconcile_rooms(old_state, batch)

        self._rooms_by_index = dict(result.updated_rooms)
        self.save_rooms()
        self._log_room_changes(result, old_state)

        for listener in self._listeners:
            listener(result)
        return result

    def _log_room_changes(self, result: ReconciliationResult,
                          old_state: Mapping[int, RoomRecord]) -> None:
        if result.moved_rooms:
            for move in result.moved_rooms:
                old, new = move.old_room, move.new_room
                logger.info(
                    "Room Moved -> %s (Old: (%d, %d, %d) -> New: (%d, %d, %d))",
                    new.name, old.x, old.y, old.level, new.x, new.y, new.level
                )

            logger.info("All rooms positions (Before -> After):")
            for new_index in sorted(self._rooms_by_index):
                new_room = self._rooms_by_index[new_index]
                match = find_matching_old_room(new_room, old_state)
                if match is None:
                    logger.info("  Index %d: %s at (%d, %d, %d) [new]",
                                new_index, new_room.name, *new_room.position)
                    continue

                old_index, old_room = match
                if old_room.position != new_room.position:
                    logger.info("  Index %d (was %d): %s (%d, %d, %d) -> (%d, %d, %d)",
                                new_index, old_index, new_room.name,
                                *old_room.position, *new_room.position)
                elif old_index != new_index:
                    logger.info("  Index %d (was %d): %s at (%d, %d, %d) [index changed]",
                                new_index, old_index, new_room.name, *new_room.position)
                else:
                    logger.info("  Index %d: %s at (%d, %d, %d) [unchanged]",
                                new_index, new_room.name, *new_room.position)

        if result.added_count > 0 or result.remapped_count > 0:
            logger.info("Room Added -> %d new, %d remapped",
                        result.added_count, result.remapped_count)
        if result.removed_count > 0:
            logger.info("Room Removed -> %d removed", result.removed_count)

    # ==========================================
    # PERSISTENCE
    # ==========================================
    def load_rooms(self, username: str) -> int:
        """Replace the snapshot with the user's save, if one exists."""
        if not self.storage.exists(username):
            logger.info(f"No save file for {username}")
            return 0
        loaded = self.storage.load(username)
        self._rooms_by_index = dict(loaded)
        logger.info(f"Loaded {len(loaded)} rooms from save file")
        return len(loaded)

    def save_rooms(self) -> bool:
        if self.username is None:
            logger.debug("No username yet; skipping save")
            return False
        return self.storage.save(self.username, self._rooms_by_index)

    def has_save_file(self, username: str) -> bool:
        return self.storage.exists(username)

    # ==========================================
    # OBJECTS
    # ==========================================
    def place_object(self, point: LocalPoint, gameval: str,
                     orientation: int = 0) -> Optional[ObjectSpawn]:
        """
        Record an object placed at a local point in the room underneath it.

        Returns:
            The new ObjectSpawn, or None if the point is outside the zone grid
            or no room occupies that zone
        """
        coords = self._mapper.to_zone_tile_coords(point)
        if coords is None:
            logger.warning(
                f"Failed to convert local point to zone/tile coordinates. "
                f"LocalPoint: ({point.x}, {point.y})"
            )
            return None

        zone_x, zone_y, tile_x, tile_y = coords
        found = self._find_room_at(zone_x, zone_y)
        if found is None:
            logger.error(
                f"No room found at zone ({zone_x}, {zone_y}). Cannot save object. "
                f"Available rooms: {len(self._rooms_by_index)}"
            )
            return None

        index, current = found
        spawn = ObjectSpawn(gameval, tile_x, tile_y, orientation)
        # Swap in a copy; earlier ReconciliationResults still hold the old record
        room = replace(current, objects=list(current.objects or []))
        room.add_object(spawn)
        self._rooms_by_index[index] = room
        logger.debug(
            f"Added object {gameval} to room {room.name} at zone ({zone_x}, {zone_y}), "
            f"tile ({tile_x}, {tile_y}). Total objects in room: {room.object_count()}"
        )
        self.save_rooms()
        return spawn

    def object_placements(
        self, indices: Optional[Iterable[int]] = None
    ) -> Dict[int, List[Tuple[ObjectSpawn, LocalPoint]]]:
        """Local point of every placed object, per room index."""
        if indices is None:
            indices = sorted(self._rooms_by_index)

        placements: Dict[int, List[Tuple[ObjectSpawn, LocalPoint]]] = {}
        for index in indices:
            room = self._rooms_by_index.get(index)
            if room is None or not room.objects:
                continue
            points = []
            for spawn in room.objects:
                point = self._mapper.to_local(room.x, room.y, spawn.tile_x, spawn.tile_y)
                if point is None:
                    logger.warning(
                        f"Failed to convert zone/tile to local point for {spawn.gameval} "
                        f"in room {index} at zone ({room.x}, {room.y}), "
                        f"tile ({spawn.tile_x}, {spawn.tile_y})"
                    )
                    continue
                points.append((spawn, point))
            if points:
                placements[index] = points
        return placements


__all__ = ['HouseStateService', 'ResultListener', 'is_in_house']
