"""Eight-point "north star" rooms alternating outer and inner radii."""
from __future__ import annotations

import math

from ..cells import Room
from .base import RoomTemplate, connection_points, fill_polygon, merge_params, square_room
from .octagon import calculate_connection_point

SHAPE = "north-star-shaped"

DEFAULTS = {"min_outer_radius": 4, "max_outer_radius": 8, "inner_ratio": 0.7, "rotation_offset": 0.0}


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    return 2 * p["max_outer_radius"], 2 * p["max_outer_radius"]


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    outer = rng.next_int(p["min_outer_radius"], p["max_outer_radius"])
    inner = int(outer * p["inner_ratio"])
    size = 2 * outer
    if inner < 1 or size > bounds_w or size > bounds_h:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)

    sx = rng.next_int(x, x + bounds_w - size)
    sy = rng.next_int(y, y + bounds_h - size)
    cx, cy = sx + outer, sy + outer
    vertices = []
    for i in range(8):
        angle = i * math.pi / 4 + p["rotation_offset"]
        r = outer if i % 2 == 0 else inner
        vertices.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    vertices = tuple(vertices)
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


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="North-Star-Shaped Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=calculate_connection_point,
    default_params=default_params,
    footprint=footprint,
)
