"""Value types produced by the generation phases.

Coordinates are plain ``(x, y)`` tuples: integers for grid cells, floats where
a template needs a curved border or an off-grid center.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .tiles import CellType

Number = Union[int, float]
Point = Tuple[Number, Number]
Cell = Tuple[int, int]


def as_cell(point: Point) -> Cell:
    """Snap a possibly fractional point to the grid cell containing it."""
    return (int(round(point[0])), int(round(point[1])))


@dataclass(frozen=True)
class Room:
    """One placed room.

    Immutable. The description and feature phases attach ``description`` and
    ``features`` by swapping in a ``dataclasses.replace`` copy.
    """

    id: int
    shape: str
    x: int
    y: int
    center: Point
    cells: Tuple[Cell, ...] = ()
    width: Optional[int] = None
    height: Optional[int] = None
    radius: Optional[int] = None
    border: Tuple[Point, ...] = ()
    features: Tuple["Feature", ...] = ()
    description: Optional[str] = None

    def cell_set(self) -> frozenset:
        return frozenset(self.cells)

    def bounds(self) -> Tuple[int, int, int, int]:
        """Return (min_x, min_y, max_x, max_y) over the room's cells."""
        xs = [c[0] for c in self.cells]
        ys = [c[1] for c in self.cells]
        return min(xs), min(ys), max(xs), max(ys)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shape": self.shape,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "radius": self.radius,
            "center": list(self.center),
            "cells": [list(c) for c in self.cells],
            "border": [list(p) for p in self.border],
            "features": [f.to_dict() for f in self.features],
            "description": self.description,
        }


@dataclass(frozen=True)
class Corridor:
    from_id: int
    to_id: int
    from_room: Room = field(repr=False)
    to_room: Room = field(repr=False)
    path: Tuple[Cell, ...]
    width: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "width": self.width,
            "path": [list(p) for p in self.path],
        }


@dataclass(frozen=True)
class Door:
    position: Cell
    kind: CellType
    connects: Tuple[int, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "kind": self.kind.name.lower(),
            "connects": list(self.connects),
        }


@dataclass(frozen=True)
class Feature:
    position: Cell
    kind: CellType
    description: str
    room_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "kind": self.kind.name.lower(),
            "description": self.description,
            "room_id": self.room_id,
        }


@dataclass(frozen=True)
class Marker:
    """Entrance or exit location plus the room that owns it."""

    position: Cell
    room_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.position[0], "y": self.position[1], "room_id": self.room_id}


RoomList = List[Room]

__all__ = ["Point", "Cell", "Room", "Corridor", "Door", "Feature", "Marker", "as_cell", "RoomList"]
