"""Room template contract and the helpers every shape shares.

A template is a record of plain functions keyed by its ``shape`` id rather
than a class to subclass. ``generate_room`` must keep every cell it emits
inside ``[x, x + bounds_w) x [y, y + bounds_h)``; placement relies on that to
keep rooms on the map. When a shape cannot fit it degrades to a small centered
square instead of failing.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..cells import Cell, Point, Room
from ..geometry import is_point_in_polygon
from ..rng import SeededRandom

Params = Dict[str, Any]
GenerateFn = Callable[[int, int, int, int, int, SeededRandom, Optional[Params]], Room]


class RoomTemplate(NamedTuple):
    shape: str
    name: str
    generate_room: GenerateFn
    find_connection_points: Callable[[Room], List[Cell]]
    calculate_connection_point: Callable[[Room, Point], Point]
    default_params: Callable[[], Params]
    footprint: Callable[[Optional[Params]], Tuple[int, int]]

    def get_default_params(self) -> Params:
        return dict(self.default_params())


def merge_params(defaults: Params, params: Optional[Params]) -> Params:
    merged = dict(defaults)
    if params:
        merged.update({k: v for k, v in params.items() if v is not None})
    return merged


def size_range(lo: int, hi: int, limit: int) -> Tuple[int, int]:
    """Clip an inclusive [lo, hi] size range so it never exceeds ``limit``."""
    hi = max(1, min(hi, limit))
    lo = max(1, min(lo, hi))
    return lo, hi


def perimeter_cells(cells: Sequence[Cell]) -> List[Cell]:
    """Cells with at least one orthogonal neighbour outside the set, in input order."""
    members = set(cells)
    return [
        (x, y)
        for x, y in cells
        if (x + 1, y) not in members
        or (x - 1, y) not in members
        or (x, y + 1) not in members
        or (x, y - 1) not in members
    ]


def nearest(points: Iterable[Point], target: Point) -> Optional[Point]:
    """Closest point to ``target``; the first one wins ties."""
    best = None
    best_d = math.inf
    tx, ty = target
    for p in points:
        d = math.hypot(p[0] - tx, p[1] - ty)
        if d < best_d:
            best_d = d
            best = p
    return best


def nearest_perimeter_cell(room: Room, target: Point) -> Point:
    if not room.cells:
        return room.center
    found = nearest(perimeter_cells(room.cells), target)
    return found if found is not None else room.center


def connection_points(room: Room) -> List[Cell]:
    return perimeter_cells(room.cells) if room.cells else []


def fill_polygon(vertices: Sequence[Point], x0: int, y0: int, w: int, h: int) -> Tuple[Cell, ...]:
    """Ray-cast every integer point of the w x h box anchored at (x0, y0)."""
    return tuple(
        (x0 + dx, y0 + dy)
        for dx in range(w)
        for dy in range(h)
        if is_point_in_polygon((x0 + dx, y0 + dy), vertices)
    )


def ordered_outline(cells: Sequence[Cell]) -> Tuple[Point, ...]:
    """Perimeter cells sorted by angle around their centroid (curve rendering)."""
    rim = perimeter_cells(cells)
    if not rim:
        return ()
    cx = sum(p[0] for p in rim) / len(rim)
    cy = sum(p[1] for p in rim) / len(rim)
    return tuple(sorted(rim, key=lambda p: math.atan2(p[1] - cy, p[0] - cx)))


def mean_center(cells: Sequence[Cell]) -> Cell:
    n = len(cells)
    return (sum(c[0] for c in cells) // n, sum(c[1] for c in cells) // n)


def square_room(
    room_id: int, shape: str, x: int, y: int, bounds_w: int, bounds_h: int, size: int = 5, outline: bool = False
) -> Room:
    """Fallback: a small square centered in the bounds box."""
    size = max(1, min(size, bounds_w, bounds_h))
    sx = x + (bounds_w - size) // 2
    sy = y + (bounds_h - size) // 2
    cells = tuple((sx + dx, sy + dy) for dx in range(size) for dy in range(size))
    return Room(
        id=room_id,
        shape=shape,
        x=sx,
        y=sy,
        width=size,
        height=size,
        center=(sx + size // 2, sy + size // 2),
        cells=cells,
        border=ordered_outline(cells) if outline else (),
    )


__all__ = [
    "Params",
    "RoomTemplate",
    "merge_params",
    "size_range",
    "perimeter_cells",
    "nearest",
    "nearest_perimeter_cell",
    "connection_points",
    "fill_polygon",
    "ordered_outline",
    "mean_center",
    "square_room",
]
