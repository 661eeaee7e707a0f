"""Public dungeon package interface.

Typical use::

    from cryptforge.dungeon import DungeonGenerator
    dungeon = DungeonGenerator(seed="abc", width=30, height=30).generate()
    print(dungeon.to_ascii())
"""

from .cells import Corridor, Door, Feature, Marker, Room  # noqa: F401
from .checks import analyze, is_sound  # noqa: F401
from .config import (  # noqa: F401
    HALLWAY_STYLES,
    PRESETS,
    THEMES,
    GenerationParams,
    ParameterError,
    preset,
)
from .doors import DoorGenerator  # noqa: F401
from .dungeon import Dungeon  # noqa: F401
from .features import FeatureGenerator  # noqa: F401
from .generator import DungeonGenerator, generate_dungeon  # noqa: F401
from .grid import Grid  # noqa: F401
from .rng import SeededRandom  # noqa: F401
from .rooms import RoomGenerator  # noqa: F401
from .templates import RoomTemplate, RoomTemplateRegistry, TemplateRegistryError  # noqa: F401
from .tiles import TILE_CHARS, CellType  # noqa: F401
from .tunnels import CorridorGenerator  # noqa: F401

__all__ = [
    "CellType",
    "TILE_CHARS",
    "Grid",
    "SeededRandom",
    "Room",
    "Corridor",
    "Door",
    "Feature",
    "Marker",
    "RoomTemplate",
    "RoomTemplateRegistry",
    "TemplateRegistryError",
    "RoomGenerator",
    "CorridorGenerator",
    "DoorGenerator",
    "FeatureGenerator",
    "DungeonGenerator",
    "Dungeon",
    "GenerationParams",
    "ParameterError",
    "PRESETS",
    "THEMES",
    "HALLWAY_STYLES",
    "preset",
    "generate_dungeon",
    "analyze",
    "is_sound",
]
