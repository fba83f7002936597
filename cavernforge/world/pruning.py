"""Dead-end pruning.

A dead end is an interior floor tile with exactly one orthogonal floor
neighbour. Each pass collects every dead end using the neighbour counts seen
at the start of the pass and walls them all at once, so a corridor of length
N needs N passes to retract fully. Passes repeat until one finds nothing.
"""

from __future__ import annotations

from typing import List, Tuple

from .grid import Grid, Position
from .tiles import FLOOR, WALL


def find_dead_ends(grid: Grid) -> List[Position]:
    cells = grid.cells
    found = []
    for x in range(1, grid.width - 1):
        for y in range(1, grid.height - 1):
            if cells[x][y] == FLOOR and grid.floor_neighbors(x, y) == 1:
                found.append(Position(x, y))
    return found


def remove_dead_ends(grid: Grid) -> Tuple[int, int]:
    """Prune to a fixed point; returns (tiles removed, passes that removed something)."""
    removed = 0
    passes = 0
    while True:
        dead_ends = find_dead_ends(grid)
        if not dead_ends:
            return removed, passes
        for x, y in dead_ends:
            grid.cells[x][y] = WALL
        removed += len(dead_ends)
        passes += 1


__all__ = ["find_dead_ends", "remove_dead_ends"]
