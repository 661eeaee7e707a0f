"""Stochastic placement of non-overlapping rooms drawn from weighted templates."""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger
from .cells import Point, Room
from .grid import Grid
from .rng import SeededRandom, SeedLike
from .templates import (
    CAVE,
    CIRCULAR,
    DEFAULT_TEMPLATES,
    L_SHAPED,
    RECTANGULAR,
    RoomTemplate,
    RoomTemplateRegistry,
)

log = get_logger("cryptforge.rooms")

ROOM_DESCRIPTIONS: Dict[str, Tuple[str, ...]] = {
    "standard": (
        "A simple square room with stone walls.",
        "A dusty chamber with cobwebs in the corners.",
        "A room with flickering torches on the walls.",
        "A chamber with a cracked stone floor.",
        "A room with faded murals on the walls.",
    ),
    "cave": (
        "A natural cave with dripping stalactites.",
        "A damp cavern with glowing fungus.",
        "A rocky chamber with uneven ground.",
        "A wide cave with a small underground stream.",
        "A narrow cave passage that widens into a chamber.",
    ),
    "temple": (
        "A sacred chamber with ornate pillars.",
        "A room with ceremonial markings on the floor.",
        "A sanctum with religious symbols carved into the walls.",
        "A prayer chamber with stone benches.",
        "A ritual room with a raised dais.",
    ),
    "maze": (
        "A small chamber at an intersection of passages.",
        "A confusing room with multiple identical doorways.",
        "A chamber with directional markers carved into the floor.",
        "A small room serving as a waypoint in the labyrinth.",
        "A disorienting circular room with many exits.",
    ),
    "loopy": (
        "A hub room connecting several passages.",
        "A chamber that loops back on itself.",
        "A room with passages that seem to lead in circles.",
        "A crossroads chamber with worn pathways.",
        "A circular room with doorways spaced evenly around the perimeter.",
    ),
}

SHAPE_CLAUSES = {
    CIRCULAR: " It has a perfectly circular shape.",
    L_SHAPED: " It has an unusual L-shaped layout.",
    CAVE: " It has an irregular, natural formation.",
    "star-shaped": " Its walls jut outward in sharp points.",
    "cross-shaped": " Four passages branch from its center like a cross.",
    "octagon-shaped": " Its eight walls meet at even angles.",
    "north-star-shaped": " Its floor spreads out in an eight-pointed star.",
}


def occupancy_buffer(density: float) -> int:
    """Gap kept around accepted rooms; sparser maps keep rooms further apart."""
    return max(1, math.ceil(1.5 - density))


def size_params(variation: float) -> Dict[str, Dict[str, int]]:
    """Template size ranges scaled by ``room_size_variation``."""
    return {
        RECTANGULAR: {
            "min_width": 3 + int(variation * 2),
            "max_width": 8 + int(variation * 7),
            "min_height": 3 + int(variation * 2),
            "max_height": 8 + int(variation * 7),
        },
        CIRCULAR: {
            "min_radius": 3 + int(variation),
            "max_radius": 6 + int(variation * 3),
        },
        L_SHAPED: {
            "min_width": 5 + int(variation * 2),
            "max_width": 10 + int(variation * 4),
            "min_height": 5 + int(variation * 2),
            "max_height": 10 + int(variation * 4),
        },
        CAVE: {
            "min_width": 6 + int(variation * 2),
            "max_width": 10 + int(variation * 6),
            "min_height": 6 + int(variation * 2),
            "max_height": 10 + int(variation * 6),
            "min_radius": 3 + int(variation),
            "max_radius": 5 + int(variation * 3),
        },
    }


class RoomGenerator:
    def __init__(
        self,
        seed: SeedLike = None,
        room_size_variation: float = 0.5,
        special_room_chance: float = 0.2,
        shape_weights: Optional[Mapping[str, float]] = None,
        templates=DEFAULT_TEMPLATES,
    ):
        self.random = SeededRandom(seed)
        self.registry = RoomTemplateRegistry(seed)
        self.template_params: Dict[str, dict] = {}
        for template in templates:
            self.registry.register_template(template)
        self.template_params.update(size_params(room_size_variation))
        self._configure_weights(special_room_chance, shape_weights or {})

    def _configure_weights(self, special_room_chance: float, overrides: Mapping[str, float]) -> None:
        self.registry.set_weight(RECTANGULAR, 1.0 - special_room_chance)
        special = [t for t in self.registry.get_all_templates() if t.shape != RECTANGULAR]
        if special:
            share = special_room_chance / len(special)
            for t in special:
                self.registry.set_weight(t.shape, share)
        for shape, weight in overrides.items():
            self.registry.set_weight(shape, weight)

    def reset(self) -> None:
        self.random.reset()
        self.registry.random.reset()

    def register_template(self, template: RoomTemplate, weight: float = 1.0, params: Optional[dict] = None) -> None:
        self.registry.register_template(template, weight)
        if params:
            self.template_params[template.shape] = dict(params)

    def get_templates(self) -> List[RoomTemplate]:
        return self.registry.get_all_templates()

    def get_template_weight(self, shape: str) -> float:
        return self.registry.get_weight(shape)

    def set_template_weight(self, shape: str, weight: float) -> None:
        self.registry.set_weight(shape, weight)

    def params_for(self, template: RoomTemplate) -> dict:
        return self.template_params.get(template.shape) or template.get_default_params()

    def generate_rooms(self, width: int, height: int, target_count: int, density: float) -> List[Room]:
        """Place up to ``target_count`` rooms within ``10 * target_count`` attempts.

        Each accepted footprint keeps ``occupancy_buffer(density)`` cells of
        clearance (Chebyshev distance) from every earlier room, and every room
        stays off the outermost ring of the map so it is always walled in.
        Running out of attempts early is a normal outcome.
        """
        rooms: List[Room] = []
        occupied: Grid[bool] = Grid(width, height, False)
        buffer = occupancy_buffer(density)
        max_attempts = target_count * 10
        attempts = 0
        while len(rooms) < target_count and attempts < max_attempts:
            attempts += 1
            template = self.registry.select_random_template()
            params = self.params_for(template)
            fw, fh = template.footprint(params)
            fw = max(1, min(fw, width - 2))
            fh = max(1, min(fh, height - 2))
            x, y = self._placement(width, height, fw, fh, density)
            room = template.generate_room(len(rooms), x, y, fw, fh, self.random, params)
            if not room.cells or not self._inside(room, width, height):
                continue
            if not self._is_clear(room, occupied, buffer):
                continue
            for cx, cy in room.cells:
                occupied.set(cx, cy, True)
            rooms.append(room)
        log.debug(
            event="rooms_placed",
            requested=target_count,
            placed=len(rooms),
            attempts=attempts,
            buffer=buffer,
        )
        return rooms

    def _placement(self, width: int, height: int, fw: int, fh: int, density: float) -> Tuple[int, int]:
        """Anchor inside a centered cluster that shrinks as density grows."""
        return (
            self._axis_anchor(width, fw, density),
            self._axis_anchor(height, fh, density),
        )

    def _axis_anchor(self, span: int, size: int, density: float) -> int:
        cluster = int(span * (1 - density * 0.5))
        offset = (span - cluster) // 2
        last = span - 1 - size
        lo = min(max(1, offset), last)
        hi = max(lo, min(offset + cluster - size, last))
        return self.random.next_int(lo, hi)

    @staticmethod
    def _inside(room: Room, width: int, height: int) -> bool:
        return all(1 <= x < width - 1 and 1 <= y < height - 1 for x, y in room.cells)

    @staticmethod
    def _is_clear(room: Room, occupied: Grid, buffer: int) -> bool:
        for cx, cy in room.cells:
            for x in range(cx - buffer, cx + buffer + 1):
                for y in range(cy - buffer, cy + buffer + 1):
                    if occupied.get(x, y):
                        return False
        return True

    def calculate_connection_point(self, room: Room, target: Point) -> Point:
        template = self.registry.get_template(room.shape)
        if template is None:
            return room.center
        return template.calculate_connection_point(room, target)

    def generate_room_descriptions(self, rooms: List[Room], theme: str) -> None:
        """Replace each room in ``rooms`` with a copy carrying its description."""
        descriptors = ROOM_DESCRIPTIONS.get(theme) or ROOM_DESCRIPTIONS["standard"]
        for i, room in enumerate(rooms):
            text = self.random.next_element(descriptors) + SHAPE_CLAUSES.get(room.shape, "")
            rooms[i] = replace(room, description=text)


__all__ = ["RoomGenerator", "ROOM_DESCRIPTIONS", "SHAPE_CLAUSES", "occupancy_buffer", "size_params"]
