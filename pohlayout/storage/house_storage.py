"""
House Layout Storage
====================

Per-user persistence of the room snapshot, including every placed object.

Strategies:
- LocalFileStorageStrategy: one JSON document per user on disk
- InMemoryStorageStrategy: dict-backed, for tests and headless hosts

File Format:
    ``<save_dir>/<username>-room-positions.json`` holds an object keyed by
    room index (as a string), each value a RoomRecord.to_dict(). This is the
    layout the plugin has always written, so existing saves keep loading.

Storage problems never end the session: a missing or unreadable save loads
as an empty snapshot and a failed write is logged.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Union

from pohlayout.core.config import DEFAULT_SAVE_DIR, DEFAULT_SAVE_SUFFIX
from pohlayout.data.room_records import RoomRecord

logger = logging.getLogger(__name__)


class HouseStorageStrategy(ABC):
    """Where a user's room snapshot lives."""

    @abstractmethod
    def exists(self, username: str) -> bool:
        ...

    @abstractmethod
    def load(self, username: str) -> Dict[int, RoomRecord]:
        ...

    @abstractmethod
    def save(self, username: str, rooms_by_index: Mapping[int, RoomRecord]) -> bool:
        ...


def rooms_to_document(rooms_by_index: Mapping[int, RoomRecord]) -> Dict[str, dict]:
    return {str(index): room.to_dict() for index, room in sorted(rooms_by_index.items())}


def rooms_from_document(document: Mapping[str, dict]) -> Dict[int, RoomRecord]:
    return {int(key): RoomRecord.from_dict(value) for key, value in document.items()}


# ==========================================
# LOCAL FILE
# ==========================================
class LocalFileStorageStrategy(HouseStorageStrategy):
    """
    JSON file per user.

    Args:
        save_dir: Directory holding the save files (created on first save)
        suffix: File name suffix appended to the username
    """

    def __init__(self, save_dir: Union[str, Path] = DEFAULT_SAVE_DIR,
                 suffix: str = DEFAULT_SAVE_SUFFIX):
        self.save_dir = Path(save_dir).expanduser()
        self.suffix = suffix

    def path_for(self, username: str) -> Path:
        return self.save_dir / f"{username}{self.suffix}"

    def exists(self, username: str) -> bool:
        return self.path_for(username).is_file()

    def load(self, username: str) -> Dict[int, RoomRecord]:
        filepath = self.path_for(username)
        if not filepath.is_file():
            logger.warning(f"No saved room positions at {filepath}")
            return {}

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                document = json.load(f)
            if not isinstance(document, dict):
                raise ValueError(f"expected a JSON object, got {type(document).__name__}")
            rooms = rooms_from_document(document)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Failed to load room positions from {filepath}: {e}")
            return {}

        logger.info(f"Loaded {len(rooms)} rooms from {filepath}")
        return rooms

    def save(self, username: str, rooms_by_index: Mapping[int, RoomRecord]) -> bool:
        filepath = self.path_for(username)
        try:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(rooms_to_document(rooms_by_index), f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save room positions to {filepath}: {e}")
            return False

        logger.debug(f"Saved {len(rooms_by_index)} rooms to {filepath}")
        return True


# ==========================================
# IN MEMORY
# ==========================================
class InMemoryStorageStrategy(HouseStorageStrategy):
    """Keeps serialized snapshots in a dict, so loads never alias live records."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, dict]] = {}

    def exists(self, username: str) -> bool:
        return username in self.documents

    def load(self, username: str) -> Dict[int, RoomRecord]:
        document = self.documents.get(username)
        if document is None:
            return {}
        return rooms_from_document(document)

    def save(self, username: str, rooms_by_index: Mapping[int, RoomRecord]) -> bool:
        self.documents[username] = rooms_to_document(rooms_by_index)
        return True


__all__ = [
    'HouseStorageStrategy',
    'InMemoryStorageStrategy',
    'LocalFileStorageStrategy',
    'rooms_from_document',
    'rooms_to_document',
]
