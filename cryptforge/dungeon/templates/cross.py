"""Plus-shaped rooms: an odd-sized center square with four centered arms."""
from __future__ import annotations

from typing import Dict

from ..cells import Cell, Room
from .base import RoomTemplate, connection_points, merge_params, nearest_perimeter_cell, ordered_outline, square_room

SHAPE = "cross-shaped"

DEFAULTS = {
    "min_center_size": 5,
    "max_center_size": 9,
    "min_arm_thickness": 3,
    "max_arm_thickness": 5,
    "min_arm_length": 3,
    "max_arm_length": 8,
    "safety_margin": 2,
}


def default_params():
    return dict(DEFAULTS)


def _odd(n: int) -> int:
    return n if n % 2 else n + 1


def footprint(params=None):
    p = merge_params(DEFAULTS, params)
    side = _odd(p["max_center_size"]) + 2 * p["max_arm_length"] + 2 * p["safety_margin"]
    return side, side


def _fallback(room_id, x, y, bounds_w, bounds_h, size) -> Room:
    return square_room(room_id, SHAPE, x, y, bounds_w, bounds_h, size=size, outline=True)


def generate_room(room_id, x, y, bounds_w, bounds_h, rng, params=None) -> Room:
    p = merge_params(DEFAULTS, params)
    center_size = _odd(rng.next_int(p["min_center_size"], p["max_center_size"]))
    thickness = _odd(rng.next_int(p["min_arm_thickness"], p["max_arm_thickness"]))
    thickness = min(thickness, center_size)

    min_arm = p["min_arm_length"]
    if center_size + 2 * min_arm > min(bounds_w, bounds_h):
        return _fallback(room_id, x, y, bounds_w, bounds_h, center_size)

    margin = p["safety_margin"]
    max_arm = min(p["max_arm_length"], (min(bounds_w, bounds_h) - center_size - 2 * margin) // 2)
    if max_arm < min_arm:
        return _fallback(room_id, x, y, bounds_w, bounds_h, center_size)
    arm = rng.next_int(min_arm, max_arm)
    total = center_size + 2 * arm

    avail_w = bounds_w - total - 2 * margin
    avail_h = bounds_h - total - 2 * margin
    sx = x + (bounds_w - total) // 2 if avail_w <= 0 else x + margin + rng.next_int(0, avail_w)
    sy = y + (bounds_h - total) // 2 if avail_h <= 0 else y + margin + rng.next_int(0, avail_h)

    found: Dict[Cell, None] = {}

    def add(cx: int, cy: int) -> None:
        if x <= cx < x + bounds_w and y <= cy < y + bounds_h:
            found.setdefault((cx, cy), None)

    core_x, core_y = sx + arm, sy + arm
    for dx in range(center_size):
        for dy in range(center_size):
            add(core_x + dx, core_y + dy)
    inset = (center_size - thickness) // 2
    for step in range(arm):
        for t in range(thickness):
            add(core_x + inset + t, sy + step)  # north
            add(core_x + center_size + step, core_y + inset + t)  # east
            add(core_x + inset + t, core_y + center_size + step)  # south
            add(sx + step, core_y + inset + t)  # west

    cells = tuple(found)
    return Room(
        id=room_id,
        shape=SHAPE,
        x=sx,
        y=sy,
        width=total,
        height=total,
        center=(core_x + center_size // 2, core_y + center_size // 2),
        cells=cells,
        border=ordered_outline(cells),
    )


TEMPLATE = RoomTemplate(
    shape=SHAPE,
    name="Cross-Shaped Room",
    generate_room=generate_room,
    find_connection_points=connection_points,
    calculate_connection_point=nearest_perimeter_cell,
    default_params=default_params,
    footprint=footprint,
)
