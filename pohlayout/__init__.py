"""
POH Layout Package - Room Geometry & State Reconciliation
=========================================================

Core logic for a player-owned-house (POH) editor: everything between the raw
integers the game engine emits for each room and the room records that object
placement and rendering consume.

Submodules:
- core: Engine constants and configuration
- data: Room/object records and the bitpacked room descriptor decoder
- geometry: Usable-region scanning and zone/tile <-> local coordinate mapping
- state: Batch reconciliation, per-frame coalescing and the house state holder
- storage: Per-user persistence strategies

Data Flow:
    raw room event -> decode_room -> RoomBatchScheduler (one flush per frame)
        -> reconcile_rooms -> HouseStateService (swap, save, notify)
    terrain heights -> scan_usable_region -> ZoneTileMapper (object placement)
"""

__version__ = "1.0.0"

__all__ = ['core', 'data', 'geometry', 'state', 'storage']
