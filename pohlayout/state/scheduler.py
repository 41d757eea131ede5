"""
Batch Coalescing Scheduler
==========================

The engine sends one room event per room, all inside the same frame, whenever
the house layout is (re)sent. Reconciling after every single event would see
partial batches and report every other room as removed. The scheduler
collects the events and flushes them together exactly once, later in the
same frame.

States:
    IDLE             no flush queued; the next submit queues one
    SCHEDULED_FLUSH  a flush is queued; further submits only merge

Host integration:
    By default deferred work goes to a FrameQueue owned by the scheduler and
    the host calls ``run_pending()`` once per tick. Any ``invoke_later``-style
    callable can be injected through ``defer`` instead.
"""

import logging
import threading
from collections import deque
from enum import Enum
from typing import Callable, Deque, Dict, Optional

from pohlayout.data.room_records import RoomRecord

logger = logging.getLogger(__name__)

FlushCallback = Callable[[Dict[int, RoomRecord]], None]
Defer = Callable[[Callable[[], None]], None]


class SchedulerState(Enum):
    IDLE = "idle"
    SCHEDULED_FLUSH = "scheduled_flush"


# ==========================================
# FRAME QUEUE
# ==========================================
class FrameQueue:
    """Callbacks to run later in the current frame, drained by the host."""

    def __init__(self):
        self._lock = threading.Lock()
        self._queue: Deque[Callable[[], None]] = deque()

    def __call__(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._queue.append(callback)

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def run_pending(self) -> int:
        """Run everything queued so far; returns how many callbacks ran."""
        with self._lock:
            callbacks = list(self._queue)
            self._queue.clear()
        for callback in callbacks:
            callback()
        return len(callbacks)


# ==========================================
# SCHEDULER
# ==========================================
class RoomBatchScheduler:
    """
    Coalesces room events into one batch per frame.

    Args:
        flush_callback: Receives the coalesced batch, index -> RoomRecord
        defer: Callable that queues a zero-arg callback for later in the
            frame. Defaults to an internal FrameQueue.
    """

    def __init__(self, flush_callback: FlushCallback, defer: Optional[Defer] = None):
        self._flush_callback = flush_callback
        self.frame_queue: Optional[FrameQueue] = None
        if defer is None:
            self.frame_queue = FrameQueue()
            defer = self.frame_queue
        self._defer = defer
        self._lock = threading.Lock()
        self._pending: Dict[int, RoomRecord] = {}
        self._state = SchedulerState.IDLE

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, index: int, room: RoomRecord) -> None:
        """Merge a room into the pending batch; last write per index wins."""
        with self._lock:
            self._pending[index] = room
            if self._state is not SchedulerState.IDLE:
                return
            self._state = SchedulerState.SCHEDULED_FLUSH

        logger.debug("Scheduled room batch flush (first index %d)", index)
        self._defer(self._flush)

    def run_pending(self) -> int:
        """Drain the internal frame queue; no-op when ``defer`` was injected."""
        if self.frame_queue is None:
            return 0
        return self.frame_queue.run_pending()

    def flush_now(self) -> bool:
        """
        Flush immediately.

        A flush already queued stays in charge of the frame: the state is left
        at SCHEDULED_FLUSH, so later submits merge into the batch that queued
        flush will deliver instead of queueing a second one.
        """
        return self._flush(from_queue=False)

    def _flush(self, from_queue: bool = True) -> bool:
        with self._lock:
            batch = self._pending
            self._pending = {}
            if from_queue:
                self._state = SchedulerState.IDLE

        if not batch:
            return False

        logger.debug("Flushing room batch of %d rooms", len(batch))
        self._flush_callback(batch)
        return True


__all__ = ['FrameQueue', 'RoomBatchScheduler', 'SchedulerState']
