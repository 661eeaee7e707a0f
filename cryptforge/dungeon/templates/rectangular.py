"""Axis-aligned rectangular rooms."""
from __future__ import annotations

from ..cells import Point, Room
from .base import RoomTemplate, connection_points, merge_params, size_range

SHAPE = "rectangular"

DEFAULTS = {"min_width": 3, "max_width": 8, "min_height": 3, "max_height": 8}


def default_params():
    return dict(DEFAULTS)


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    return p["max_width"], p["max_height"]


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    w = rng.next_int(*size_range(p["min_width"], p["max_width"], bounds_w))
    h = rng.next_int(*size_range(p["min_height"], p["max_height"], bounds_h))
    cells = tuple((x + dx, y + dy) for dx in range(w) for dy in range(h))
    return Room(
        id=room_id,
        shape=SHAPE,
        x=x,
        y=y,
        width=w,
        height=h,
        center=(x + w // 2, y + h // 2),
        cells=cells,
    )


def calculate_connection_point(room: Room, target: Point) -> Point:
    """Cell of the rectangle closest to ``target``, always on its edge."""
    if not room.width or not room.height:
        return room.center
    left, top = room.x, room.y
    right, bottom = room.x + room.width - 1, room.y + room.height - 1
    px = min(right, max(left, int(round(target[0]))))
    py = min(bottom, max(top, int(round(target[1]))))
    if left < px < right and top < py < bottom:
        # Target sits inside the room: snap to whichever edge is nearest
        gaps = (px - left, right - px, py - top, bottom - py)
        edge = gaps.index(min(gaps))
        if edge == 0:
            px = left
        elif edge == 1:
            px = right
        elif edge == 2:
            py = top
        else:
            py = bottom
    return (px, py)


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Rectangular Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=calculate_connection_point,
    default_params=default_params,
    footprint=footprint,
)
