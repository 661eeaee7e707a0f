"""Filled-circle rooms with a sampled curved border."""
from __future__ import annotations

import math

from ..cells import Point, Room
from ..geometry import get_filled_circle_points
from .base import RoomTemplate, connection_points, merge_params, nearest, perimeter_cells, size_range, square_room

SHAPE = "circular"

DEFAULTS = {"min_radius": 3, "max_radius": 6}


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    d = p["max_radius"] * 2 + 1
    return d, d


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    limit = (min(bounds_w, bounds_h) - 1) // 2
    if limit < 1:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)
    radius = rng.next_int(*size_range(p["min_radius"], p["max_radius"], limit))
    cx, cy = x + radius, y + radius
    samples = max(32, radius * 4)
    border = tuple(
        (cx + radius * math.cos(2 * math.pi * i / samples), cy + radius * math.sin(2 * math.pi * i / samples))
        for i in range(samples)
    )
    diameter = radius * 2 + 1
    return Room(
        id=room_id,
        shape=SHAPE,
        x=cx - radius,
        y=cy - radius,
        width=diameter,
        height=diameter,
        radius=radius,
        center=(cx, cy),
        cells=tuple(get_filled_circle_points(cx, cy, radius)),
        border=border,
    )


def calculate_connection_point(room: Room, target: Point) -> Point:
    """Project toward ``target`` onto the circle, then take the nearest rim cell."""
    if not room.radius or not room.cells:
        return room.center
    cx, cy = room.center
    dx, dy = target[0] - cx, target[1] - cy
    length = math.hypot(dx, dy)
    if length == 0:
        aim = (cx + room.radius, cy)
    else:
        aim = (cx + dx / length * room.radius, cy + dy / length * room.radius)
    found = nearest(perimeter_cells(room.cells), aim)
    return found if found is not None else room.center


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Circular Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=calculate_connection_point,
    default_params=default_params,
    footprint=footprint,
)
