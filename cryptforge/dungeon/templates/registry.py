"""Weighted lookup table of room templates keyed by shape id."""
from __future__ import annotations

from typing import Dict, List, Optional

from ..rng import SeededRandom, SeedLike
from .base import RoomTemplate


class TemplateRegistryError(RuntimeError):
    """Raised when a template is requested from an empty registry."""


class RoomTemplateRegistry:
    def __init__(self, seed: SeedLike = None, rng: Optional[SeededRandom] = None):
        self.random = rng if rng is not None else SeededRandom(seed)
        self._templates: Dict[str, RoomTemplate] = {}
        self._weights: Dict[str, float] = {}

    def register_template(self, template: RoomTemplate, weight: float = 1.0) -> None:
        self._templates[template.shape] = template
        self._weights[template.shape] = max(0.0, float(weight))

    def unregister_template(self, shape: str) -> bool:
        if shape not in self._templates:
            return False
        del self._templates[shape]
        del self._weights[shape]
        return True

    def get_template(self, shape: str) -> Optional[RoomTemplate]:
        return self._templates.get(shape)

    def get_all_templates(self) -> List[RoomTemplate]:
        return list(self._templates.values())

    def set_weight(self, shape: str, weight: float) -> None:
        """Update a registered template's weight; unknown shapes are ignored."""
        if shape in self._templates:
            self._weights[shape] = max(0.0, float(weight))

    def get_weight(self, shape: str) -> float:
        return self._weights.get(shape, 0.0)

    def select_random_template(self) -> RoomTemplate:
        """Roulette-wheel pick proportional to weight.

        Draws once over the total weight and subtracts entries in registration
        order until the roll drops to zero or below.
        """
        if not self._templates:
            raise TemplateRegistryError("No room templates registered")
        total = sum(self._weights.values())
        roll = self.random.next_float(0, total)
        for shape, weight in self._weights.items():
            roll -= weight
            if roll <= 0:
                return self._templates[shape]
        # float drift can leave a sliver of roll behind
        return next(iter(self._templates.values()))

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, shape: str) -> bool:
        return shape in self._templates


__all__ = ["RoomTemplateRegistry", "TemplateRegistryError"]
