"""
POH Layout Storage Module
=========================

Per-user persistence of room snapshots.

Usage:
    from pohlayout.storage import LocalFileStorageStrategy
    storage = LocalFileStorageStrategy('~/.runelite/pimp-my-poh')
    rooms = storage.load('player')
"""

from pohlayout.storage.house_storage import (
    HouseStorageStrategy,
    InMemoryStorageStrategy,
    LocalFileStorageStrategy,
    rooms_from_document,
    rooms_to_document,
)

__all__ = [
    'HouseStorageStrategy',
    'InMemoryStorageStrategy',
    'LocalFileStorageStrategy',
    'rooms_from_document',
    'rooms_to_document',
]
