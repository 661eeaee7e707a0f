"""Organic cave rooms eroded out of a rectangular or circular seed blob.

The seed blob is speckled with a few random holes, then a cellular automaton
runs over the blob's bounding box padded by one cell:

* a living cell dies when fewer than 4 of its 8 neighbours are alive
* a dead cell comes alive when at least 5 of its 8 neighbours are alive

Only the largest 4-connected region survives, so the room is one piece and no
surviving cell is left without a living neighbour.
"""
from __future__ import annotations

from collections import deque
from typing import List, Set, Tuple

from ..cells import Cell, Room
from ..geometry import get_filled_circle_points
from .base import (
    RoomTemplate,
    connection_points,
    mean_center,
    merge_params,
    nearest_perimeter_cell,
    size_range,
    square_room,
)

SHAPE = "cave"

DEFAULTS = {
    "min_width": 6,
    "max_width": 12,
    "min_height": 6,
    "max_height": 12,
    "min_radius": 3,
    "max_radius": 5,
    "roughness": 0.2,
    "iterations": 2,
}

DEATH_LIMIT = 4
BIRTH_LIMIT = 5
MIN_CELLS = 4

_EIGHT = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
_FOUR = ((1, 0), (-1, 0), (0, 1), (0, -1))


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    d = p["max_radius"] * 2 + 1
    # one spare ring on each side for growth during erosion
    return max(p["max_width"], d) + 2, max(p["max_height"], d) + 2


def erode(alive: Set[Cell], box: Tuple[int, int, int, int]) -> Set[Cell]:
    """One synchronous automaton step over the inclusive box (x0, y0, x1, y1)."""
    x0, y0, x1, y1 = box
    out = set()
    for x in range(x0, x1 + 1):
        for y in range(y0, y1 + 1):
            n = sum((x + dx, y + dy) in alive for dx, dy in _EIGHT)
            if (x, y) in alive:
                if n >= DEATH_LIMIT:
                    out.add((x, y))
            elif n >= BIRTH_LIMIT:
                out.add((x, y))
    return out


def largest_region(alive: Set[Cell]) -> List[Cell]:
    """Largest 4-connected component; scanning in sorted order breaks ties."""
    seen: Set[Cell] = set()
    best: List[Cell] = []
    for start in sorted(alive):
        if start in seen:
            continue
        seen.add(start)
        region = [start]
        q = deque([start])
        while q:
            cx, cy = q.popleft()
            for dx, dy in _FOUR:
                n = (cx + dx, cy + dy)
                if n in alive and n not in seen:
                    seen.add(n)
                    region.append(n)
                    q.append(n)
        if len(region) > len(best):
            best = region
    return best


def _seed_blob(x, y, inner_w, inner_h, rng, p) -> List[Cell]:
    if rng.next_bool():
        w = rng.next_int(*size_range(p["min_width"], p["max_width"], inner_w))
        h = rng.next_int(*size_range(p["min_height"], p["max_height"], inner_h))
        ox = x + (inner_w - w) // 2
        oy = y + (inner_h - h) // 2
        return [(ox + dx, oy + dy) for dx in range(w) for dy in range(h)]
    limit = max(1, (min(inner_w, inner_h) - 1) // 2)
    r = rng.next_int(*size_range(p["min_radius"], p["max_radius"], limit))
    cx = x + (inner_w - (2 * r + 1)) // 2 + r
    cy = y + (inner_h - (2 * r + 1)) // 2 + r
    return get_filled_circle_points(cx, cy, r)


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    inner_w, inner_h = bounds_w - 2, bounds_h - 2
    if inner_w < 3 or inner_h < 3:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h, size=3)

    blob = _seed_blob(x + 1, y + 1, inner_w, inner_h, rng, p)
    alive = set(blob)
    for cell in blob:
        if rng.next() < p["roughness"]:
            alive.discard(cell)

    xs = [c[0] for c in blob]
    ys = [c[1] for c in blob]
    box = (min(xs) - 1, min(ys) - 1, max(xs) + 1, max(ys) + 1)
    for _ in range(int(p["iterations"])):
        alive = erode(alive, box)

    region = largest_region(alive)
    if len(region) < MIN_CELLS:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h, size=3)

    cells = tuple(sorted(region))
    min_x = min(c[0] for c in cells)
    min_y = min(c[1] for c in cells)
    max_x = max(c[0] for c in cells)
    max_y = max(c[1] for c in cells)
    return Room(
        id=room_id,
        shape=SHAPE,
        x=min_x,
        y=min_y,
        width=max_x - min_x + 1,
        height=max_y - min_y + 1,
        center=mean_center(cells),
        cells=cells,
    )


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Cave Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=nearest_perimeter_cell,
    default_params=default_params,
    footprint=footprint,
)
