from cryptforge.dungeon import CellType
from cryptforge.dungeon.cells import Room

# Features, doors and markers all sit on cells that were floor or corridor
WALKABLE = frozenset(
    {CellType.FLOOR, CellType.CORRIDOR, CellType.DOOR, CellType.SECRET_DOOR, CellType.ENTRANCE, CellType.EXIT}
    | {t for t in CellType if t >= CellType.WATER}
)


def square(room_id, x, y, size=1, shape="rectangular"):
    """Hand-built square room for corridor/door tests."""
    cells = tuple((x + dx, y + dy) for dx in range(size) for dy in range(size))
    return Room(
        id=room_id,
        shape=shape,
        x=x,
        y=y,
        width=size,
        height=size,
        center=(x + size // 2, y + size // 2),
        cells=cells,
    )


def bfs_reachable(grid, start):
    """Cells reachable from ``start`` over WALKABLE tiles (4-connected).

    ``grid`` is column-major like ``Dungeon.grid``. Returns an empty set when
    start is missing, off the map or not walkable.
    """
    width, height = len(grid), len(grid[0])

    def walkable(cell):
        cx, cy = cell
        return 0 <= cx < width and 0 <= cy < height and grid[cx][cy] in WALKABLE

    if start is None or not walkable(start):
        return set()
    seen = {start}
    frontier = [start]
    while frontier:
        cx, cy = frontier.pop()
        for step in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
            if step not in seen and walkable(step):
                seen.add(step)
                frontier.append(step)
    return seen


def chebyshev_gap(a, b):
    """Smallest Chebyshev distance between any cell of room a and any of room b."""
    return min(max(abs(x1 - x2), abs(y1 - y2)) for x1, y1 in a.cells for x2, y2 in b.cells)
