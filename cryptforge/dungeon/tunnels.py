"""Corridor routing: Kruskal spanning tree over room centers, then path synthesis.

Edges are weighted by the euclidean distance between room centers. The tree
gives every room exactly one route to every other; ``add_loop_connections``
can optionally layer extra non-tree edges on top. Each edge becomes a cell path
between the two rooms' boundary connection points in the configured hallway
style.
"""
from __future__ import annotations

from typing import Callable, List, NamedTuple, Optional, Sequence

from ..logging_utils import get_logger
from .cells import Cell, Corridor, Point, Room, as_cell
from .config import HALLWAY_STYLES
from .geometry import distance, get_line_points
from .rng import SeededRandom, SeedLike

log = get_logger("cryptforge.tunnels")

ORGANIC_VARIANCE = 10

Connector = Callable[[Room, Point], Point]


class Edge(NamedTuple):
    source: Room
    target: Room
    weight: float

    @property
    def key(self):
        return (self.source.id, self.target.id)


def center_connector(room: Room, target: Point) -> Point:
    return room.center


class CorridorGenerator:
    def __init__(
        self,
        seed: SeedLike = None,
        corridor_width: int = 1,
        create_loops: bool = False,
        loop_chance: float = 0.0,
        hallway_style: str = "bendy",
        connector: Optional[Connector] = None,
    ):
        self.random = SeededRandom(seed)
        self.corridor_width = max(1, min(3, int(corridor_width)))
        self.create_loops = create_loops
        self.loop_chance = loop_chance
        self.hallway_style = hallway_style
        self.connector = connector or center_connector

    def reset(self) -> None:
        self.random.reset()

    def generate_corridors(self, rooms: Sequence[Room], width: int, height: int) -> List[Corridor]:
        if len(rooms) <= 1:
            return []
        edges = self.create_all_edges(rooms)
        selected = self.minimum_spanning_tree(edges, len(rooms))
        tree_size = len(selected)
        if self.create_loops:
            selected = self.add_loop_connections(edges, selected)
        corridors = [self.create_corridor(e.source, e.target, width, height) for e in selected]
        log.debug(
            event="corridors_built",
            rooms=len(rooms),
            tree_edges=tree_size,
            loop_edges=len(selected) - tree_size,
            style=self.hallway_style,
        )
        return corridors

    @staticmethod
    def create_all_edges(rooms: Sequence[Room]) -> List[Edge]:
        """Every unordered room pair once, sorted by center distance.

        ``sorted`` is stable, so equal-length edges keep pair-generation order.
        """
        edges = []
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                d = distance(a.center[0], a.center[1], b.center[0], b.center[1])
                edges.append(Edge(a, b, d))
        return sorted(edges, key=lambda e: e.weight)

    @staticmethod
    def minimum_spanning_tree(edges: Sequence[Edge], room_count: int) -> List[Edge]:
        parent = {}

        def find(a):
            parent.setdefault(a, a)
            while parent[a] != a:
                parent[a] = parent[parent[a]]
                a = parent[a]
            return a

        tree: List[Edge] = []
        for edge in edges:
            ra, rb = find(edge.source.id), find(edge.target.id)
            if ra == rb:
                continue
            tree.append(edge)
            parent[ra] = rb
            if len(tree) == room_count - 1:
                break
        return tree

    def add_loop_connections(self, all_edges: Sequence[Edge], tree_edges: Sequence[Edge]) -> List[Edge]:
        """Return ``tree_edges`` plus each other edge kept with ``loop_chance``."""
        result = list(tree_edges)
        taken = {e.key for e in tree_edges}
        for edge in all_edges:
            if edge.key in taken or edge.key[::-1] in taken:
                continue
            if self.random.next_float(0, 1) < self.loop_chance:
                result.append(edge)
                taken.add(edge.key)
        return result

    def create_corridor(self, source: Room, target: Room, width: int, height: int) -> Corridor:
        start = as_cell(self.connector(source, target.center))
        end = as_cell(self.connector(target, source.center))
        return Corridor(
            from_id=source.id,
            to_id=target.id,
            from_room=source,
            to_room=target,
            path=tuple(self.generate_path(start, end, width, height)),
            width=self.corridor_width,
        )

    def generate_path(self, start: Cell, end: Cell, width: int, height: int) -> List[Cell]:
        style = self.hallway_style if self.hallway_style in HALLWAY_STYLES else "bendy"
        if style == "straight":
            return self.straight_path(start, end)
        if style == "organic":
            return self.organic_path(start, end, width, height)
        return self.bendy_path(start, end)

    @staticmethod
    def straight_path(start: Cell, end: Cell) -> List[Cell]:
        return get_line_points(start[0], start[1], end[0], end[1])

    def bendy_path(self, start: Cell, end: Cell) -> List[Cell]:
        """Two axis-aligned legs; a coin flip decides which axis goes first."""
        if self.random.next_bool():
            corner = (end[0], start[1])
        else:
            corner = (start[0], end[1])
        return _join([start, corner, end])

    def organic_path(self, start: Cell, end: Cell, width: int, height: int) -> List[Cell]:
        bends = self.random.next_int(2, 4)
        waypoints = [start]
        for i in range(bends):
            t = (i + 1) / (bends + 1)
            tx = start[0] + (end[0] - start[0]) * t
            ty = start[1] + (end[1] - start[1]) * t
            x = tx + self.random.next_int(-ORGANIC_VARIANCE, ORGANIC_VARIANCE)
            y = ty + self.random.next_int(-ORGANIC_VARIANCE, ORGANIC_VARIANCE)
            waypoints.append((_clamp(int(round(x)), 0, width - 1), _clamp(int(round(y)), 0, height - 1)))
        waypoints.append(end)
        return _join(waypoints)


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def _join(waypoints: Sequence[Cell]) -> List[Cell]:
    """Chain Bresenham segments, dropping the repeated point at each joint."""
    path: List[Cell] = []
    for a, b in zip(waypoints, waypoints[1:]):
        segment = get_line_points(a[0], a[1], b[0], b[1])
        path.extend(segment if not path else segment[1:])
    return path


__all__ = ["CorridorGenerator", "Edge", "center_connector"]
