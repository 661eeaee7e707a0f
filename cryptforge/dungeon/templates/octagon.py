"""Regular octagon rooms placed by polar vertices at 45 degree steps."""
from __future__ import annotations

import math

from ..cells import Point, Room
from .base import (
    RoomTemplate,
    connection_points,
    fill_polygon,
    merge_params,
    nearest,
    nearest_perimeter_cell,
    perimeter_cells,
    square_room,
)

SHAPE = "octagon-shaped"

DEFAULTS = {"min_side": 6, "max_side": 12, "rotation_offset": 0.0}


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    size = math.ceil(p["max_side"] * math.sqrt(2))
    return size, size


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    side = rng.next_int(p["min_side"], p["max_side"])
    radius = side / math.sqrt(2)
    size = math.ceil(side * math.sqrt(2))
    if size > bounds_w or size > bounds_h:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)

    sx = rng.next_int(x, x + bounds_w - size)
    sy = rng.next_int(y, y + bounds_h - size)
    cx, cy = sx + radius, sy + radius
    vertices = tuple(
        (
            cx + radius * math.cos(p["rotation_offset"] + math.pi / 8 + i * math.pi / 4),
            cy + radius * math.sin(p["rotation_offset"] + math.pi / 8 + i * math.pi / 4),
        )
        for i in range(8)
    )
    cells = fill_polygon(vertices, sx, sy, size, size)
    if not cells:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)
    return Room(
        id=room_id,
        shape=SHAPE,
        x=sx,
        y=sy,
        width=size,
        height=size,
        center=(cx, cy),
        cells=cells,
        border=vertices,
    )


def calculate_connection_point(room: Room, target: Point) -> Point:
    """Nearest outline vertex to ``target``, then the rim cell nearest that vertex."""
    if not room.cells or not room.border:
        return nearest_perimeter_cell(room, target)
    vertex = nearest(room.border, target)
    found = nearest(perimeter_cells(room.cells), vertex)
    return found if found is not None else room.center


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Octagon-Shaped Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=calculate_connection_point,
    default_params=default_params,
    footprint=footprint,
)
