"""
POH Layout State Module
=======================

Batch reconciliation, per-frame coalescing and the house state holder.

Usage:
    from pohlayout.state import HouseStateService
    service = HouseStateService()
    service.enter_house(height_at, plane=0, username='player')
    service.handle_room_event(index, db_row_id, bitpacked, flag1, flag2)
    service.run_pending()
"""

from pohlayout.state.reconciler import (
    ReconciliationResult,
    RoomMove,
    find_matching_old_room,
    reconcile_rooms,
)
from pohlayout.state.scheduler import (
    FrameQueue,
    RoomBatchScheduler,
    SchedulerState,
)
from pohlayout.state.house_state import (
    HouseStateService,
    is_in_house,
)

__all__ = [
    # Reconciliation
    'ReconciliationResult',
    'RoomMove',
    'find_matching_old_room',
    'reconcile_rooms',

    # Scheduling
    'FrameQueue',
    'RoomBatchScheduler',
    'SchedulerState',

    # Service
    'HouseStateService',
    'is_in_house',
]
