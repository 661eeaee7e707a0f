"""Door placement at corridor mouths.

Each corridor gets at most two door attempts, one per end. A door is only
emitted where the end cell and its interior neighbour straddle a floor/corridor
transition on the live grid, so doors always sit on a real room boundary.
Functions mutate the grid in place.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from ..logging_utils import get_logger
from .cells import Cell, Corridor, Door, Room
from .grid import Grid
from .rng import SeededRandom, SeedLike
from .tiles import CORRIDOR, DOOR, FLOOR, SECRET_DOOR, CellType

log = get_logger("cryptforge.doors")

_TRANSITIONS = {(FLOOR, CORRIDOR), (CORRIDOR, FLOOR)}


def is_transition(grid: Grid[CellType], point: Cell, inner: Cell) -> bool:
    return (grid.get(*point), grid.get(*inner)) in _TRANSITIONS


class DoorGenerator:
    def __init__(self, seed: SeedLike = None, door_frequency: float = 0.8, secret_door_chance: float = 0.1):
        self.random = SeededRandom(seed)
        self.door_frequency = max(0.0, min(1.0, door_frequency))
        self.secret_door_chance = max(0.0, min(1.0, secret_door_chance))

    def reset(self) -> None:
        self.random.reset()

    def place_doors(self, rooms: Sequence[Room], corridors: Sequence[Corridor], grid: Grid[CellType]) -> List[Door]:
        doors: List[Door] = []
        for corridor in corridors:
            path = corridor.path
            if len(path) < 2:
                continue
            self._try_door(doors, (corridor.from_id, corridor.to_id), path[0], path[1], grid)
            self._try_door(doors, (corridor.to_id, corridor.from_id), path[-1], path[-2], grid)
        log.debug(
            event="doors_placed",
            corridors=len(corridors),
            doors=len(doors),
            secret=sum(1 for d in doors if d.kind == SECRET_DOOR),
        )
        return doors

    def _try_door(
        self, doors: List[Door], connects: Tuple[int, int], point: Cell, inner: Cell, grid: Grid[CellType]
    ) -> None:
        # frequency roll is drawn for every corridor end, even ones that can't take a door
        if self.random.next_float(0, 1) > self.door_frequency:
            return
        if not is_transition(grid, point, inner):
            return
        kind = SECRET_DOOR if self.random.next_float(0, 1) < self.secret_door_chance else DOOR
        doors.append(Door(position=point, kind=kind, connects=connects))
        grid.set(point[0], point[1], kind)


__all__ = ["DoorGenerator", "is_transition"]
