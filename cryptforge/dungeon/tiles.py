# Cell type tags shared by every generation phase
from enum import IntEnum


class CellType(IntEnum):
    EMPTY = 0
    WALL = 1
    FLOOR = 2
    CORRIDOR = 3
    DOOR = 4
    SECRET_DOOR = 5
    ENTRANCE = 6
    EXIT = 7
    WATER = 8
    PILLAR = 9
    STATUE = 10
    ALTAR = 11
    FOUNTAIN = 12
    TRAP = 13
    TREASURE = 14
    MONSTER = 15


EMPTY = CellType.EMPTY
WALL = CellType.WALL
FLOOR = CellType.FLOOR
CORRIDOR = CellType.CORRIDOR
DOOR = CellType.DOOR
SECRET_DOOR = CellType.SECRET_DOOR
ENTRANCE = CellType.ENTRANCE
EXIT = CellType.EXIT

DOOR_KINDS = frozenset({DOOR, SECRET_DOOR})
FEATURE_KINDS = frozenset(
    {
        CellType.WATER,
        CellType.PILLAR,
        CellType.STATUE,
        CellType.ALTAR,
        CellType.FOUNTAIN,
        CellType.TRAP,
        CellType.TREASURE,
        CellType.MONSTER,
    }
)

# Single-character glyphs for the ASCII debug view
TILE_CHARS = {
    CellType.EMPTY: " ",
    CellType.WALL: "#",
    CellType.FLOOR: ".",
    CellType.CORRIDOR: ",",
    CellType.DOOR: "+",
    CellType.SECRET_DOOR: "S",
    CellType.ENTRANCE: "<",
    CellType.EXIT: ">",
    CellType.WATER: "~",
    CellType.PILLAR: "O",
    CellType.STATUE: "&",
    CellType.ALTAR: "_",
    CellType.FOUNTAIN: "{",
    CellType.TRAP: "^",
    CellType.TREASURE: "$",
    CellType.MONSTER: "M",
}

__all__ = [
    "CellType",
    "EMPTY",
    "WALL",
    "FLOOR",
    "CORRIDOR",
    "DOOR",
    "SECRET_DOOR",
    "ENTRANCE",
    "EXIT",
    "DOOR_KINDS",
    "FEATURE_KINDS",
    "TILE_CHARS",
]
