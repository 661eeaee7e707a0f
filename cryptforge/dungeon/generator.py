"""Pipeline orchestration for dungeon generation.

One ``generate()`` call runs a strict linear sequence of phases with no
backtracking:

    rooms -> descriptions -> corridors -> rasterize -> doors -> features -> entrance/exit

The working grid only lives for the duration of the call; the result is
snapshotted into a frozen ``Dungeon``. Every sub-generator is seeded from the
same numeric seed and rewound at the start of each call, so the same
parameters always reproduce the same dungeon, however many times the
generator is reused.
"""
from __future__ import annotations

import os
import time
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..logging_utils import get_logger
from .cells import Corridor, Room
from .config import GenerationParams, preset
from .doors import DoorGenerator
from .dungeon import Dungeon
from .features import FeatureGenerator
from .grid import Grid
from .metrics import init_metrics, tile_counts
from .rng import resolve_seed
from .rooms import RoomGenerator
from .tiles import CORRIDOR, FLOOR, SECRET_DOOR, WALL, CellType
from .tunnels import CorridorGenerator

log = get_logger("cryptforge.generator")

_WIDEN_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def metrics_enabled_from_env(default: bool = True) -> bool:
    val = os.environ.get("CRYPTFORGE_ENABLE_GENERATION_METRICS")
    if val is None:
        return default
    return val.lower() not in {"0", "false", "no", ""}


class DungeonGenerator:
    def __init__(
        self,
        params: Union[GenerationParams, Mapping[str, Any], None] = None,
        *,
        enable_metrics: Optional[bool] = None,
        **overrides,
    ):
        if params is None:
            params = GenerationParams()
        elif not isinstance(params, GenerationParams):
            params = GenerationParams.from_mapping(params)
        if overrides:
            params = GenerationParams.from_mapping(overrides, base=params)
        self.params = params.normalized()
        self.enable_metrics = metrics_enabled_from_env() if enable_metrics is None else enable_metrics

        # Supplied seeds are recorded as given; when absent one is drawn here, once
        if self.params.seed is None:
            self.seed = resolve_seed(None)
        else:
            self.seed = self.params.seed
        numeric_seed = resolve_seed(self.seed)

        p = self.params
        self.room_generator = RoomGenerator(
            numeric_seed,
            room_size_variation=p.room_size_variation,
            special_room_chance=p.special_room_chance,
            shape_weights=p.shape_weights,
        )
        self.corridor_generator = CorridorGenerator(
            numeric_seed,
            corridor_width=p.corridor_width,
            create_loops=p.create_loops,
            loop_chance=p.loop_chance,
            hallway_style=p.hallway_style,
            connector=self.room_generator.calculate_connection_point,
        )
        self.door_generator = DoorGenerator(
            numeric_seed,
            door_frequency=p.door_frequency,
            secret_door_chance=p.secret_door_chance,
        )
        self.feature_generator = FeatureGenerator(
            numeric_seed,
            feature_density=p.feature_density,
            theme=p.theme,
        )

    @classmethod
    def from_preset(cls, name: str = "default", **overrides) -> "DungeonGenerator":
        return cls(preset(name, **overrides))

    def reset(self) -> None:
        self.room_generator.reset()
        self.corridor_generator.reset()
        self.door_generator.reset()
        self.feature_generator.reset()

    def generate(self) -> Dungeon:
        """Run every phase and return the frozen result.

        Adds ``phase_ms`` (phase name -> duration in ms) and ``runtime_ms`` to
        the metrics when metrics are enabled.
        """
        self.reset()
        p = self.params
        metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
                phase_times[label] = int((pe - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        rooms = _phase("rooms", self.room_generator.generate_rooms, p.width, p.height, p.num_rooms, p.room_density)
        _phase("descriptions", self.room_generator.generate_room_descriptions, rooms, p.theme)
        corridors = _phase("corridors", self.corridor_generator.generate_corridors, rooms, p.width, p.height)
        grid = _phase("rasterize", self.rasterize, rooms, corridors, p.width, p.height)
        doors = _phase("doors", self.door_generator.place_doors, rooms, corridors, grid)
        features = _phase("features", self.feature_generator.generate_features, rooms, grid)
        entrance, exit_ = _phase("entrance_exit", self.feature_generator.place_entrance_and_exit, rooms, grid)

        # Corridors still hold the rooms from before features were attached
        final = {room.id: room for room in rooms}
        corridors = [replace(c, from_room=final[c.from_id], to_room=final[c.to_id]) for c in corridors]

        if self.enable_metrics:
            metrics["rooms_requested"] = p.num_rooms
            metrics["rooms_placed"] = len(rooms)
            metrics["corridors"] = len(corridors)
            metrics["loop_corridors"] = max(0, len(corridors) - max(0, len(rooms) - 1))
            metrics["doors_created"] = len(doors)
            metrics["secret_doors"] = sum(1 for d in doors if d.kind == SECRET_DOOR)
            metrics["features_placed"] = len(features)
            metrics["entrance_placed"] = entrance is not None
            metrics["tiles"] = tile_counts(grid)
            metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            metrics["phase_ms"] = phase_times

        log.debug(
            event="dungeon_generated",
            seed=self.seed,
            width=p.width,
            height=p.height,
            rooms=len(rooms),
            corridors=len(corridors),
            doors=len(doors),
            features=len(features),
        )
        return Dungeon(
            width=p.width,
            height=p.height,
            grid=grid.to_columns(),
            rooms=tuple(rooms),
            corridors=tuple(corridors),
            doors=tuple(doors),
            features=tuple(features),
            entrance=entrance,
            exit=exit_,
            seed=self.seed,
            theme=p.theme,
            params=p.to_dict(),
            metrics=metrics,
        )

    @staticmethod
    def rasterize(rooms: Sequence[Room], corridors: Sequence[Corridor], width: int, height: int) -> Grid[CellType]:
        """WALL everywhere, room cells FLOOR, corridor cells CORRIDOR.

        Corridor paths never overwrite FLOOR, which is what leaves the
        floor/corridor transitions doors are placed on. Wide corridors also
        take over orthogonally adjacent WALL cells.
        """
        grid: Grid[CellType] = Grid(width, height, WALL)
        for room in rooms:
            for x, y in room.cells:
                grid.set(x, y, FLOOR)
        for corridor in corridors:
            for x, y in corridor.path:
                if grid.get(x, y) != FLOOR:
                    grid.set(x, y, CORRIDOR)
                if corridor.width > 1:
                    for dx, dy in _WIDEN_OFFSETS:
                        if grid.get(x + dx, y + dy) == WALL:
                            grid.set(x + dx, y + dy, CORRIDOR)
        return grid


def generate_dungeon(params: Union[GenerationParams, Mapping[str, Any], None] = None, **overrides) -> Dungeon:
    """Shorthand for ``DungeonGenerator(params, **overrides).generate()``."""
    return DungeonGenerator(params, **overrides).generate()


__all__: List[str] = ["DungeonGenerator", "generate_dungeon", "metrics_enabled_from_env"]
