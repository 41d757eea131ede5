"""
House Editor Configuration
==========================

Tunable parameters for the layout core. Defaults match the live engine
(104-tile scene, 8-tile chunks) and the plugin's on-disk save location.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pohlayout.core.definitions import CHUNK_SIZE, SCENE_SIZE, ZONE_TILES

logger = logging.getLogger(__name__)

# db_row_id -> display name; a plain mapping works too
NameLookup = Union[Callable[[int], Optional[str]], Mapping[int, str]]

DEFAULT_SAVE_DIR = Path.home() / ".runelite" / "pimp-my-poh"
DEFAULT_SAVE_SUFFIX = "-room-positions.json"


@dataclass
class HouseEditorConfig:
    """Configuration for the house state service and its collaborators."""
    scene_size: int = SCENE_SIZE
    chunk_size: int = CHUNK_SIZE
    save_dir: Path = field(default_factory=lambda: DEFAULT_SAVE_DIR)
    save_file_suffix: str = DEFAULT_SAVE_SUFFIX
    name_lookup: Optional[NameLookup] = None
    log_level: str = "INFO"

    def __post_init__(self):
        self.save_dir = Path(self.save_dir).expanduser()

    def validate(self) -> "HouseEditorConfig":
        """Raise ValueError for a chunk that is not zone-sized or a scene too small."""
        if self.chunk_size != ZONE_TILES:
            raise ValueError(
                f"chunk_size must be {ZONE_TILES} (one zone per chunk), got {self.chunk_size}"
            )
        if self.scene_size < 3 * self.chunk_size:
            raise ValueError(
                f"scene_size {self.scene_size} too small for chunk_size {self.chunk_size}"
            )
        if not self.save_file_suffix:
            raise ValueError("save_file_suffix must not be empty")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HouseEditorConfig":
        """Build a config from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known}).validate()


__all__ = ['HouseEditorConfig', 'NameLookup', 'DEFAULT_SAVE_DIR', 'DEFAULT_SAVE_SUFFIX']
