"""Star-shaped rooms traced by a turtle walking turn/move instructions.

One cycle is ``right 90, move, left 45, move, right 90, move, left 45, move``;
four cycles close the outline into a square with a pointed bump on every side.
"""
from __future__ import annotations

import math
from typing import List, Tuple

from ..cells import Point, Room
from ..geometry import polygon_bounds
from .base import RoomTemplate, connection_points, fill_polygon, merge_params, nearest_perimeter_cell, square_room

SHAPE = "star-shaped"

DEFAULTS = {
    "min_scale": 3,
    "max_scale": 6,
    "force_even_scale": True,
    "global_scale_min": 0.3,
    "global_scale_max": 0.6,
}

# (kind, amount): turns in degrees (negative is a right turn), moves in scale units
CYCLE: Tuple[Tuple[str, float], ...] = (
    ("turn", -90),
    ("move", 1),
    ("turn", 45),
    ("move", 1),
    ("turn", -90),
    ("move", 1),
    ("turn", 45),
    ("move", 1),
)
CYCLES = 4


def default_params():
    return dict(DEFAULTS)


def trace_outline(scale: float) -> List[Point]:
    """Run the instruction cycle in local space starting at the origin facing east."""
    x = y = 0.0
    heading = 0.0
    vertices = [(x, y)]
    for _ in range(CYCLES):
        for kind, amount in CYCLE:
            if kind == "turn":
                heading += amount
                continue
            rad = math.radians(heading)
            x = round(x + amount * scale * math.cos(rad), 3)
            y = round(y + amount * scale * math.sin(rad), 3)
            vertices.append((x, y))
    return vertices


def _even(scale: int, force: bool) -> int:
    return scale + 1 if force and scale % 2 else scale


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    scale = _even(p["max_scale"], p["force_even_scale"])
    x0, y0, x1, y1 = polygon_bounds(trace_outline(scale))
    g = p["global_scale_max"]
    return math.ceil((x1 - x0) * g), math.ceil((y1 - y0) * g)


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    scale = _even(rng.next_int(p["min_scale"], p["max_scale"]), p["force_even_scale"])
    factor = rng.next_float(p["global_scale_min"], p["global_scale_max"])
    outline = [(vx * factor, vy * factor) for vx, vy in trace_outline(scale)]

    min_x, min_y, max_x, max_y = polygon_bounds(outline)
    poly_w = math.ceil(max_x - min_x)
    poly_h = math.ceil(max_y - min_y)
    if poly_w > bounds_w or poly_h > bounds_h or poly_w < 1 or poly_h < 1:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)

    off_x = rng.next_int(x, x + bounds_w - poly_w)
    off_y = rng.next_int(y, y + bounds_h - poly_h)
    vertices = tuple((vx - min_x + off_x, vy - min_y + off_y) for vx, vy in outline)
    cells = fill_polygon(vertices, off_x, off_y, poly_w, poly_h)
    if not cells:
        return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h)

    return Room(
        id=room_id,
        shape=SHAPE,
        x=off_x,
        y=off_y,
        width=poly_w,
        height=poly_h,
        center=(off_x + poly_w / 2, off_y + poly_h / 2),
        cells=cells,
        border=vertices,
    )


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Star-Shaped Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=nearest_perimeter_cell,
    default_params=default_params,
    footprint=footprint,
)
