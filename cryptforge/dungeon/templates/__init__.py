"""Room shape templates and the weighted registry that picks between them."""

from . import cave, circular, cross, l_shaped, north_star, octagon, rectangular, star
from .base import RoomTemplate, perimeter_cells  # noqa: F401
from .registry import RoomTemplateRegistry, TemplateRegistryError  # noqa: F401

RECTANGULAR = rectangular.SHAPE
CIRCULAR = circular.SHAPE
L_SHAPED = l_shaped.SHAPE
CAVE = cave.SHAPE
STAR = star.SHAPE
CROSS = cross.SHAPE
OCTAGON = octagon.SHAPE
NORTH_STAR = north_star.SHAPE

# Registration order matters: roulette selection walks entries in this order
DEFAULT_TEMPLATES = (
    rectangular.TEMPLATE,
    circular.TEMPLATE,
    l_shaped.TEMPLATE,
    cave.TEMPLATE,
    star.TEMPLATE,
    cross.TEMPLATE,
    octagon.TEMPLATE,
    north_star.TEMPLATE,
)

SHAPES = tuple(t.shape for t in DEFAULT_TEMPLATES)

__all__ = [
    "RoomTemplate",
    "RoomTemplateRegistry",
    "TemplateRegistryError",
    "DEFAULT_TEMPLATES",
    "SHAPES",
    "RECTANGULAR",
    "CIRCULAR",
    "L_SHAPED",
    "CAVE",
    "STAR",
    "CROSS",
    "OCTAGON",
    "NORTH_STAR",
    "perimeter_cells",
]
