"""Generation parameters, named presets and input coercion."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

from .rng import coerce_seed

HALLWAY_STYLES = ("straight", "bendy", "organic")
THEMES = ("standard", "cave", "temple", "maze", "loopy")

MIN_DIMENSION = 10
CELLS_PER_ROOM = 25


class ParameterError(ValueError):
    """Raised when loosely typed input cannot be coerced into a parameter at all."""


def _clamp01(v: float) -> float:
    return min(1.0, max(0.0, float(v)))


@dataclass
class GenerationParams:
    width: int = 50
    height: int = 50
    num_rooms: int = 15
    room_density: float = 0.8
    room_size_variation: float = 0.5
    special_room_chance: float = 0.2
    corridor_width: int = 1
    create_loops: bool = False
    loop_chance: float = 0.0
    feature_density: float = 0.5
    theme: str = "standard"
    seed: Optional[Union[int, str]] = None
    hallway_style: str = "bendy"
    door_frequency: float = 0.8
    secret_door_chance: float = 0.1
    shape_weights: Optional[Dict[str, float]] = None

    def normalized(self) -> "GenerationParams":
        """Clamp every field into its legal range; never rejects."""
        width = max(MIN_DIMENSION, int(self.width))
        height = max(MIN_DIMENSION, int(self.height))
        max_rooms = (width * height) // CELLS_PER_ROOM
        weights = None
        if self.shape_weights is not None:
            weights = {str(k): max(0.0, float(v)) for k, v in self.shape_weights.items()}
        return replace(
            self,
            width=width,
            height=height,
            num_rooms=min(max_rooms, max(1, int(self.num_rooms))),
            room_density=_clamp01(self.room_density),
            room_size_variation=_clamp01(self.room_size_variation),
            special_room_chance=_clamp01(self.special_room_chance),
            corridor_width=max(1, min(3, int(self.corridor_width))),
            create_loops=bool(self.create_loops),
            loop_chance=_clamp01(self.loop_chance),
            feature_density=_clamp01(self.feature_density),
            theme=str(self.theme or "standard"),
            hallway_style=str(self.hallway_style or "bendy").lower(),
            door_frequency=_clamp01(self.door_frequency),
            secret_door_chance=_clamp01(self.secret_door_chance),
            shape_weights=weights,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def cache_key(self) -> tuple:
        d = self.to_dict()
        weights = d.pop("shape_weights")
        return tuple(sorted(d.items())) + (tuple(sorted((weights or {}).items())),)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["GenerationParams"] = None) -> "GenerationParams":
        """Build params from JSON, query strings or CLI values.

        Accepts snake_case names and their camelCase spellings (``numRooms``);
        unknown keys are ignored. Values are coerced, not range-checked, so call
        ``normalized()`` before generating.
        """
        params = base if base is not None else cls()
        updates: Dict[str, Any] = {}
        for key, raw in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name not in _COERCERS or raw is None:
                continue
            try:
                updates[name] = _COERCERS[name](raw)
            except (TypeError, ValueError, OverflowError) as e:
                raise ParameterError(f"invalid value for {name}: {raw!r}") from e
        return replace(params, **updates)


def _to_int(v) -> int:
    if isinstance(v, bool):
        raise TypeError("boolean is not a number")
    f = float(v)
    if not math.isfinite(f):
        raise ValueError(f"not a finite number: {v!r}")
    return int(f)


def _to_bool(v) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {v!r}")


def _to_weights(v) -> Dict[str, float]:
    if not isinstance(v, Mapping):
        raise TypeError("shape_weights must be a mapping")
    return {str(k): float(w) for k, w in v.items()}


_COERCERS = {
    "width": _to_int,
    "height": _to_int,
    "num_rooms": _to_int,
    "room_density": float,
    "room_size_variation": float,
    "special_room_chance": float,
    "corridor_width": _to_int,
    "create_loops": _to_bool,
    "loop_chance": float,
    "feature_density": float,
    "theme": str,
    "seed": coerce_seed,
    "hallway_style": str,
    "door_frequency": float,
    "secret_door_chance": float,
    "shape_weights": _to_weights,
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


_FIELD_ALIASES = {_camel(f.name): f.name for f in fields(GenerationParams)}


PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {},
    "small": {"width": 30, "height": 30, "num_rooms": 5, "room_density": 0.8},
    "large": {"width": 80, "height": 80, "num_rooms": 30, "room_density": 0.8},
    "cave": {
        "room_density": 0.7,
        "room_size_variation": 0.8,
        "special_room_chance": 0.4,
        "hallway_style": "organic",
        "theme": "cave",
    },
    "maze": {
        "num_rooms": 10,
        "room_density": 0.3,
        "room_size_variation": 0.3,
        "create_loops": False,
        "hallway_style": "bendy",
        "theme": "maze",
    },
    "loopy": {"create_loops": False, "loop_chance": 0.0, "hallway_style": "straight", "theme": "loopy"},
    "temple": {
        "special_room_chance": 0.4,
        "feature_density": 0.8,
        "door_frequency": 1.0,
        "secret_door_chance": 0.2,
        "theme": "temple",
    },
}


def preset(name: str = "default", **overrides) -> GenerationParams:
    """Return the named preset with ``overrides`` applied on top."""
    key = (name or "default").lower()
    if key not in PRESETS:
        raise ParameterError(f"unknown preset {name!r}; choose from {', '.join(PRESETS)}")
    values = dict(PRESETS[key])
    values.update(overrides)
    return replace(GenerationParams(), **values)


__all__ = [
    "GenerationParams",
    "ParameterError",
    "PRESETS",
    "HALLWAY_STYLES",
    "THEMES",
    "MIN_DIMENSION",
    "preset",
]
