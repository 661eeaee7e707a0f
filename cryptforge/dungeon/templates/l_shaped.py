"""L-shaped rooms: a rectangle with its bottom-right block removed."""
from __future__ import annotations

from ..cells import Room
from .base import RoomTemplate, connection_points, mean_center, merge_params, nearest_perimeter_cell, size_range

SHAPE = "l-shaped"

DEFAULTS = {"min_width": 5, "max_width": 10, "min_height": 5, "max_height": 10}


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    return p["max_width"], p["max_height"]


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    w = rng.next_int(*size_range(p["min_width"], p["max_width"], bounds_w))
    h = rng.next_int(*size_range(p["min_height"], p["max_height"], bounds_h))
    # cut at 30-70% of each axis; never at 0 or the whole room would vanish
    cut_x = max(1, rng.next_int(int(w * 0.3), int(w * 0.7)))
    cut_y = max(1, rng.next_int(int(h * 0.3), int(h * 0.7)))
    cells = tuple(
        (x + dx, y + dy) for dx in range(w) for dy in range(h) if not (dx >= cut_x and dy >= cut_y)
    )
    return Room(
        id=room_id,
        shape=SHAPE,
        x=x,
        y=y,
        width=w,
        height=h,
        center=mean_center(cells),
        cells=cells,
    )


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="L-Shaped Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=nearest_perimeter_cell,
    default_params=default_params,
    footprint=footprint,
)
