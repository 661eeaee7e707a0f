"""Theme-weighted feature placement plus the entrance/exit pass.

Features only land on cells that are still FLOOR when the pass reaches them,
so doors stamped earlier are never overwritten. After each pick the cells
around it are withdrawn so features never touch, diagonals included.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .cells import Cell, Feature, Marker, Room
from .geometry import distance
from .grid import Grid
from .rng import SeededRandom, SeedLike
from .tiles import ENTRANCE, EXIT, FLOOR, CellType

log = get_logger("cryptforge.features")

CROWDING_RADIUS = 1

FEATURE_WEIGHTS: Dict[str, Dict[CellType, float]] = {
    "standard": {
        CellType.PILLAR: 0.25,
        CellType.STATUE: 0.10,
        CellType.FOUNTAIN: 0.05,
        CellType.ALTAR: 0.05,
        CellType.TRAP: 0.15,
        CellType.TREASURE: 0.15,
        CellType.MONSTER: 0.25,
    },
    "cave": {
        CellType.PILLAR: 0.05,
        CellType.STATUE: 0.05,
        CellType.FOUNTAIN: 0.15,
        CellType.ALTAR: 0.05,
        CellType.TRAP: 0.20,
        CellType.TREASURE: 0.20,
        CellType.MONSTER: 0.30,
        CellType.WATER: 0.20,
    },
    "temple": {
        CellType.PILLAR: 0.30,
        CellType.STATUE: 0.25,
        CellType.FOUNTAIN: 0.10,
        CellType.ALTAR: 0.20,
        CellType.TRAP: 0.05,
        CellType.TREASURE: 0.05,
        CellType.MONSTER: 0.05,
    },
    "maze": {
        CellType.PILLAR: 0.10,
        CellType.STATUE: 0.05,
        CellType.FOUNTAIN: 0.05,
        CellType.ALTAR: 0.05,
        CellType.TRAP: 0.30,
        CellType.TREASURE: 0.15,
        CellType.MONSTER: 0.30,
    },
    "loopy": {
        CellType.PILLAR: 0.20,
        CellType.STATUE: 0.15,
        CellType.FOUNTAIN: 0.10,
        CellType.ALTAR: 0.10,
        CellType.TRAP: 0.15,
        CellType.TREASURE: 0.15,
        CellType.MONSTER: 0.15,
    },
}

FEATURE_DESCRIPTIONS: Dict[CellType, Tuple[str, ...]] = {
    CellType.PILLAR: (
        "A sturdy stone pillar supporting the ceiling.",
        "A tall column decorated with intricate carvings.",
        "A cracked pillar that looks like it might collapse.",
        "A pillar with strange symbols etched into its surface.",
    ),
    CellType.STATUE: (
        "A stone statue of a warrior with a stern expression.",
        "A weathered statue of an unknown deity.",
        "A small statuette on a pedestal.",
        "A life-sized statue of a robed figure.",
    ),
    CellType.FOUNTAIN: (
        "A small fountain with clear water bubbling up.",
        "A dry fountain basin with intricate stonework.",
        "A fountain with strange colored water.",
        "An ornate fountain with a creature sculpture at its center.",
    ),
    CellType.ALTAR: (
        "A stone altar with dark stains on its surface.",
        "A small shrine with candles and offerings.",
        "An altar carved with religious symbols.",
        "A raised dais with an altar at its center.",
    ),
    CellType.TRAP: (
        "A suspicious section of floor.",
        "A wire stretched across the path.",
        "A pressure plate barely visible in the floor.",
        "A ceiling with small holes that might release darts.",
    ),
    CellType.TREASURE: (
        "A small chest partially buried in the floor.",
        "A pile of coins glinting in the darkness.",
        "A gemstone embedded in the wall.",
        "A collection of valuable-looking objects.",
    ),
    CellType.MONSTER: (
        "Something lurks in the shadows here.",
        "Strange scratches on the floor suggest a creature's lair.",
        "The remnants of a recent meal indicate a predator.",
        "An area where a creature appears to have made its home.",
    ),
    CellType.WATER: (
        "A small pool of clear water.",
        "A puddle of stagnant water.",
        "A narrow stream flowing across the floor.",
        "A deep pool of dark water.",
    ),
}

UNKNOWN_FEATURE = ("An unknown feature.",)


def floor_cells(room: Room, grid: Grid[CellType]) -> List[Cell]:
    """The room's cells that are still plain FLOOR, in the room's cell order."""
    return [c for c in room.cells if grid.get(c[0], c[1]) == FLOOR]


class FeatureGenerator:
    def __init__(self, seed: SeedLike = None, feature_density: float = 0.5, theme: str = "standard"):
        self.random = SeededRandom(seed)
        self.feature_density = max(0.0, min(1.0, feature_density))
        self.theme = theme

    def reset(self) -> None:
        self.random.reset()

    @property
    def weights(self) -> Dict[CellType, float]:
        return FEATURE_WEIGHTS.get(self.theme) or FEATURE_WEIGHTS["standard"]

    def generate_features(self, rooms: List[Room], grid: Grid[CellType]) -> List[Feature]:
        """Place features room by room; each room in ``rooms`` is swapped for a copy listing its own."""
        placed: List[Feature] = []
        for i, room in enumerate(rooms):
            features = self._room_features(room, grid)
            rooms[i] = replace(room, features=tuple(features))
            for f in features:
                grid.set(f.position[0], f.position[1], f.kind)
            placed.extend(features)
        log.debug(event="features_placed", rooms=len(rooms), features=len(placed), theme=self.theme)
        return placed

    def _room_features(self, room: Room, grid: Grid[CellType]) -> List[Feature]:
        available = floor_cells(room, grid)
        if not available:
            return []
        budget = max(1, math.ceil(len(available) * self.feature_density / 10))
        count = self.random.next_int(0, budget)
        features = []
        for _ in range(count):
            if not available:
                break
            cell = available.pop(self.random.next_int(0, len(available) - 1))
            kind = self.select_feature_type()
            features.append(Feature(position=cell, kind=kind, description=self.describe(kind), room_id=room.id))
            available = [
                c
                for c in available
                if abs(c[0] - cell[0]) > CROWDING_RADIUS or abs(c[1] - cell[1]) > CROWDING_RADIUS
            ]
        return features

    def select_feature_type(self) -> CellType:
        """Cumulative pick over the theme table in ascending CellType order."""
        roll = self.random.next_float(0, 1)
        cumulative = 0.0
        for kind, weight in sorted(self.weights.items()):
            cumulative += weight
            if roll <= cumulative:
                return kind
        return CellType.MONSTER

    def describe(self, kind: CellType) -> str:
        return self.random.next_element(FEATURE_DESCRIPTIONS.get(kind, UNKNOWN_FEATURE))

    def place_entrance_and_exit(
        self, rooms: Sequence[Room], grid: Grid[CellType]
    ) -> Tuple[Optional[Marker], Optional[Marker]]:
        """Drop ENTRANCE and EXIT in the two rooms whose centers are farthest apart.

        The first pair found wins ties. Returns ``(None, None)`` when there are
        fewer than two rooms or either room has no plain floor left.
        """
        if len(rooms) < 2:
            return None, None
        best = 0.0
        first, second = rooms[0], rooms[1]
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                d = distance(a.center[0], a.center[1], b.center[0], b.center[1])
                if d > best:
                    best = d
                    first, second = a, b
        entrance_cells = floor_cells(first, grid)
        exit_cells = floor_cells(second, grid)
        if not entrance_cells or not exit_cells:
            return None, None
        entrance = self.random.next_element(entrance_cells)
        exit_ = self.random.next_element(exit_cells)
        grid.set(entrance[0], entrance[1], ENTRANCE)
        grid.set(exit_[0], exit_[1], EXIT)
        log.debug(event="entrance_exit", entrance_room=first.id, exit_room=second.id, span=round(best, 2))
        return Marker(entrance, first.id), Marker(exit_, second.id)


__all__ = ["FeatureGenerator", "FEATURE_WEIGHTS", "FEATURE_DESCRIPTIONS", "floor_cells"]
