"""Dense 2D container indexed column-major as ``data[x][y]``."""
from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")

ORTHOGONAL = ((0, -1), (-1, 0), (1, 0), (0, 1))
ALL_DIRECTIONS = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


class Grid(Generic[T]):
    """Fixed-size grid with bounds-checked access.

    ``get`` returns None outside the grid and ``set`` returns False; neither
    raises, so phases can probe neighbours near the border freely.
    """

    __slots__ = ("width", "height", "default", "data")

    def __init__(self, width: int, height: int, default: T):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.default = default
        self.data: List[List[T]] = [[default for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[T]:
        if not self.in_bounds(x, y):
            return None
        return self.data[x][y]

    def set(self, x: int, y: int, value: T) -> bool:
        if not self.in_bounds(x, y):
            return False
        self.data[x][y] = value
        return True

    def fill(self, value: T) -> None:
        for column in self.data:
            for y in range(self.height):
                column[y] = value

    def fill_rect(self, x1: int, y1: int, x2: int, y2: int, value: T) -> None:
        """Fill the inclusive rectangle (x1, y1)-(x2, y2), clipped to the grid."""
        for x in range(max(0, x1), min(self.width - 1, x2) + 1):
            column = self.data[x]
            for y in range(max(0, y1), min(self.height - 1, y2) + 1):
                column[y] = value

    def clone(self) -> "Grid[T]":
        copy = Grid(self.width, self.height, self.default)
        copy.data = [list(column) for column in self.data]
        return copy

    def for_each(self, callback: Callable[[T, int, int], None]) -> None:
        for x in range(self.width):
            for y in range(self.height):
                callback(self.data[x][y], x, y)

    def map(self, callback: Callable[[T, int, int], U]) -> "Grid[U]":
        out: Grid = Grid(self.width, self.height, None)
        for x in range(self.width):
            for y in range(self.height):
                out.data[x][y] = callback(self.data[x][y], x, y)
        return out

    def find_all(self, predicate: Callable[[T, int, int], bool]) -> List[Tuple[int, int]]:
        return [
            (x, y) for x in range(self.width) for y in range(self.height) if predicate(self.data[x][y], x, y)
        ]

    def get_neighbors(self, x: int, y: int, diagonal: bool = False) -> List[Tuple[int, int, T]]:
        """Return in-bounds neighbours as (x, y, value), 4-way or 8-way."""
        directions = ALL_DIRECTIONS if diagonal else ORTHOGONAL
        out = []
        for dx, dy in directions:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                out.append((nx, ny, self.data[nx][ny]))
        return out

    def cells(self) -> Iterator[Tuple[int, int, T]]:
        for x in range(self.width):
            for y in range(self.height):
                yield x, y, self.data[x][y]

    def to_columns(self) -> Tuple[Tuple[T, ...], ...]:
        """Immutable column-major snapshot, so ``snapshot[x][y]`` still works."""
        return tuple(tuple(column) for column in self.data)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


__all__ = ["Grid", "ORTHOGONAL", "ALL_DIRECTIONS"]
