"""The immutable map value handed to every consumer.

``DungeonGenerator.generate`` builds one of these as its last step. Renderers,
the HTTP layer and the CLI only ever read it; the grid is a column-major tuple
snapshot so ``dungeon.grid[x][y]`` works like the working grid did.

Views are derived on demand:
    to_dict()   JSON-ready nested dicts/lists (CellTypes as lowercase names)
    to_ascii()  one character per cell, rows top to bottom (see TILE_CHARS)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .cells import Corridor, Door, Feature, Marker, Room
from .tiles import TILE_CHARS, CellType


@dataclass(frozen=True)
class Dungeon:
    width: int
    height: int
    grid: Tuple[Tuple[CellType, ...], ...]
    rooms: Tuple[Room, ...]
    corridors: Tuple[Corridor, ...]
    doors: Tuple[Door, ...]
    features: Tuple[Feature, ...]
    entrance: Optional[Marker]
    exit: Optional[Marker]
    seed: Union[int, str]
    theme: str
    params: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
    metrics: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        # Nested dicts go read-only as well
        object.__setattr__(self, "params", _read_only(self.params))
        object.__setattr__(self, "metrics", _read_only(self.metrics))

    def cell(self, x: int, y: int) -> Optional[CellType]:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.grid[x][y]
        return None

    def room_by_id(self, room_id: int) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def count(self, kind: CellType) -> int:
        return sum(1 for column in self.grid for value in column if value == kind)

    def rows(self):
        """Yield the grid row by row (y outer), for renderers that draw scanlines."""
        for y in range(self.height):
            yield tuple(self.grid[x][y] for x in range(self.width))

    def to_ascii(self) -> str:
        return "\n".join("".join(TILE_CHARS[v] for v in row) for row in self.rows())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "theme": self.theme,
            "grid": [[int(v) for v in row] for row in self.rows()],
            "legend": {t.name.lower(): int(t) for t in CellType},
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "doors": [d.to_dict() for d in self.doors],
            "features": [f.to_dict() for f in self.features],
            "entrance": self.entrance.to_dict() if self.entrance else None,
            "exit": self.exit.to_dict() if self.exit else None,
            "params": _plain(self.params),
            "metrics": _plain(self.metrics),
        }


def _read_only(value):
    if isinstance(value, Mapping):
        return MappingProxyType({k: _read_only(v) for k, v in value.items()})
    return value


def _plain(value):
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    return value


__all__ = ["Dungeon"]
