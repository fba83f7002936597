from typing import List

from .grid import SURROUNDING, Grid, Position
from .tiles import EMPTY, FLOOR, WALL


def build_walls(grid: Grid) -> int:
    """Turn every empty cell touching floor (8-neighbourhood) into wall.

    Only writes EMPTY cells and only reads FLOOR, so scan order is irrelevant.
    Returns the number of walls created.
    """
    created = 0
    cells = grid.cells
    for x in range(grid.width):
        for y in range(grid.height):
            if cells[x][y] != FLOOR:
                continue
            for dx, dy in SURROUNDING:
                nx, ny = x + dx, y + dy
                if grid.in_bounds(nx, ny) and cells[nx][ny] == EMPTY:
                    cells[nx][ny] = WALL
                    created += 1
    return created


def border_positions(grid: Grid) -> List[Position]:
    ring = []
    for x in range(grid.width):
        ring.append(Position(x, 0))
        ring.append(Position(x, grid.height - 1))
    for y in range(1, grid.height - 1):
        ring.append(Position(0, y))
        ring.append(Position(grid.width - 1, y))
    return ring


def seal_borders(grid: Grid) -> int:
    """Force the outer ring off floor, then re-run the wall rule once."""
    sealed = 0
    for x, y in border_positions(grid):
        if grid.cells[x][y] == FLOOR:
            grid.cells[x][y] = WALL
            sealed += 1
    build_walls(grid)
    return sealed


def find_orphan_walls(grid: Grid) -> List[Position]:
    """Walls fully enclosed by floor (8/8) or touching no floor at all (0/8)."""
    orphans = []
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.cells[x][y] != WALL:
                continue
            if grid.surrounding_floor(x, y) in (0, 8):
                orphans.append(Position(x, y))
    return orphans


def remove_orphan_walls(grid: Grid) -> int:
    removed = 0
    while True:
        orphans = find_orphan_walls(grid)
        if not orphans:
            return removed
        for x, y in orphans:
            grid.cells[x][y] = EMPTY
        removed += len(orphans)


__all__ = ["build_walls", "border_positions", "seal_borders", "find_orphan_walls", "remove_orphan_walls"]
