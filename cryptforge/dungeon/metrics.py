from typing import Dict

from .grid import Grid
from .tiles import CellType


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'corridors': 0,
        'loop_corridors': 0,
        'doors_created': 0,
        'secret_doors': 0,
        'features_placed': 0,
        'entrance_placed': False,
        'runtime_ms': 0.0,
    }


def tile_counts(grid: Grid) -> Dict[str, int]:
    """Number of cells per CellType name, lowercased; zero counts omitted."""
    counts: Dict[str, int] = {}
    for _, _, value in grid.cells():
        name = CellType(value).name.lower()
        counts[name] = counts.get(name, 0) + 1
    return counts
