"""Structural checks over a finished ``Dungeon``.

``analyze`` never raises; it returns lists of offending items so scripts and
tests can report everything wrong with a seed at once. An empty list
everywhere (and ``corridor_count_ok``) means the dungeon is sound.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .dungeon import Dungeon
from .rooms import occupancy_buffer
from .tiles import FEATURE_KINDS


def _components(dungeon: Dungeon) -> List[List[int]]:
    parent = {r.id: r.id for r in dungeon.rooms}

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    for c in dungeon.corridors:
        if c.from_id in parent and c.to_id in parent:
            parent[find(c.from_id)] = find(c.to_id)
    groups: Dict[int, List[int]] = {}
    for rid in parent:
        groups.setdefault(find(rid), []).append(rid)
    return sorted(groups.values(), key=lambda g: (-len(g), g))


def find_disconnected_rooms(dungeon: Dungeon) -> List[int]:
    """Room ids outside the largest corridor-connected group."""
    groups = _components(dungeon)
    return sorted(rid for g in groups[1:] for rid in g)


def find_crowded_rooms(dungeon: Dungeon, buffer: int) -> List[tuple]:
    """Room id pairs whose cells come within ``buffer`` cells (Chebyshev)."""
    owner: Dict[tuple, int] = {}
    for room in dungeon.rooms:
        for cell in room.cells:
            owner[cell] = room.id
    pairs = set()
    for room in dungeon.rooms:
        for x, y in room.cells:
            for dx in range(-buffer, buffer + 1):
                for dy in range(-buffer, buffer + 1):
                    other = owner.get((x + dx, y + dy))
                    if other is not None and other != room.id:
                        pairs.add((min(room.id, other), max(room.id, other)))
    return sorted(pairs)


def _touches(cell, room) -> bool:
    x, y = cell
    return any(abs(x - cx) <= 1 and abs(y - cy) <= 1 for cx, cy in room.cells)


def find_detached_corridors(dungeon: Dungeon) -> List[tuple]:
    """(from_id, to_id) of corridors whose path does not start on or next to
    its first room and end on or next to its second."""
    detached = []
    for c in dungeon.corridors:
        a, b = dungeon.room_by_id(c.from_id), dungeon.room_by_id(c.to_id)
        if not c.path or a is None or b is None or not (_touches(c.path[0], a) and _touches(c.path[-1], b)):
            detached.append((c.from_id, c.to_id))
    return detached


def analyze(dungeon: Dungeon) -> Dict[str, Any]:
    columns_ok = len(dungeon.grid) == dungeon.width and all(len(col) == dungeon.height for col in dungeon.grid)
    n = len(dungeon.rooms)
    expected = max(0, n - 1)
    density = float(dungeon.params.get("room_density", 0.8))
    create_loops = bool(dungeon.params.get("create_loops", False))
    if create_loops:
        corridor_count_ok = len(dungeon.corridors) >= expected
    else:
        corridor_count_ok = len(dungeon.corridors) == expected
    return {
        "grid_shape_ok": columns_ok,
        "corridor_count_ok": corridor_count_ok,
        "disconnected_rooms": find_disconnected_rooms(dungeon),
        "crowded_rooms": find_crowded_rooms(dungeon, occupancy_buffer(density)),
        "endpoint_detached": find_detached_corridors(dungeon),
        "invalid_doors": [d.position for d in dungeon.doors if dungeon.cell(*d.position) != d.kind],
        "misplaced_features": [
            f.position
            for f in dungeon.features
            if f.kind not in FEATURE_KINDS or dungeon.cell(*f.position) != f.kind
        ],
        "rooms_off_map": [
            r.id
            for r in dungeon.rooms
            if any(not (1 <= x < dungeon.width - 1 and 1 <= y < dungeon.height - 1) for x, y in r.cells)
        ],
    }


def is_sound(report: Dict[str, Any]) -> bool:
    return bool(
        report["grid_shape_ok"]
        and report["corridor_count_ok"]
        and not report["disconnected_rooms"]
        and not report["crowded_rooms"]
        and not report["endpoint_detached"]
        and not report["invalid_doors"]
        and not report["misplaced_features"]
        and not report["rooms_off_map"]
    )


__all__ = ["analyze", "is_sound", "find_disconnected_rooms", "find_crowded_rooms", "find_detached_corridors"]
