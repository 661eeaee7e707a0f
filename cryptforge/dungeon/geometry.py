"""Rasterization and containment primitives used by templates and corridors."""
from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .cells import Cell, Point


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


def is_point_in_rect(x: float, y: float, rx: float, ry: float, rw: float, rh: float) -> bool:
    return rx <= x < rx + rw and ry <= y < ry + rh


def is_point_in_circle(x: float, y: float, cx: float, cy: float, r: float) -> bool:
    return distance_squared(x, y, cx, cy) <= r * r


def do_circles_overlap(x1: float, y1: float, r1: float, x2: float, y2: float, r2: float) -> bool:
    reach = r1 + r2
    return distance_squared(x1, y1, x2, y2) <= reach * reach


def do_rects_overlap(a: Rect, b: Rect) -> bool:
    return not (b.x >= a.x + a.w or b.x + b.w <= a.x or b.y >= a.y + a.h or b.y + b.h <= a.y)


def get_rects_intersection(a: Rect, b: Rect) -> Optional[Rect]:
    left = max(a.x, b.x)
    top = max(a.y, b.y)
    right = min(a.x + a.w, b.x + b.w)
    bottom = min(a.y + a.h, b.y + b.h)
    if right <= left or bottom <= top:
        return None
    return Rect(left, top, right - left, bottom - top)


def get_line_points(x1: int, y1: int, x2: int, y2: int) -> List[Cell]:
    """Bresenham line from (x1, y1) to (x2, y2), both endpoints included."""
    points: List[Cell] = []
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy
    x, y = x1, y1
    while True:
        points.append((x, y))
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return points


def get_circle_points(cx: int, cy: int, radius: int) -> List[Cell]:
    """Midpoint circle outline; octant mirroring may repeat a few cells."""
    points: List[Cell] = []
    x = radius
    y = 0
    err = 0
    while x >= y:
        points.extend(
            (
                (cx + x, cy + y),
                (cx + y, cy + x),
                (cx - y, cy + x),
                (cx - x, cy + y),
                (cx - x, cy - y),
                (cx - y, cy - x),
                (cx + y, cy - x),
                (cx + x, cy - y),
            )
        )
        y += 1
        if err <= 0:
            err += 2 * y + 1
        if err > 0:
            x -= 1
            err -= 2 * x + 1
    return points


def get_filled_circle_points(cx: int, cy: int, radius: int) -> List[Cell]:
    r2 = radius * radius
    return [
        (cx + dx, cy + dy)
        for dy in range(-radius, radius + 1)
        for dx in range(-radius, radius + 1)
        if dx * dx + dy * dy <= r2
    ]


def create_polygon(cx: float, cy: float, radius: float, sides: int, angle_offset: float = 0.0) -> List[Point]:
    step = 2 * math.pi / sides
    return [
        (cx + radius * math.cos(i * step + angle_offset), cy + radius * math.sin(i * step + angle_offset))
        for i in range(sides)
    ]


def is_point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting; works for concave and self-touching outlines."""
    px, py = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def polygon_bounds(polygon: Sequence[Point]) -> Tuple[float, float, float, float]:
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    return min(xs), min(ys), max(xs), max(ys)


__all__ = [
    "Rect",
    "distance",
    "distance_squared",
    "is_point_in_rect",
    "is_point_in_circle",
    "do_circles_overlap",
    "do_rects_overlap",
    "get_rects_intersection",
    "get_line_points",
    "get_circle_points",
    "get_filled_circle_points",
    "create_polygon",
    "is_point_in_polygon",
    "polygon_bounds",
]
