"""Tile grid containers.

``Grid`` is the mutable buffer a single generation session writes into.
``GridSnapshot`` is the frozen copy handed to everything outside the
pipeline (API, persistence, rendering); it has no mutating methods.
"""

from __future__ import annotations

import hashlib
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .tiles import AVATAR_CHAR, EMPTY, FLOOR, TileClass


class Position(NamedTuple):
    x: int
    y: int


ORTHOGONAL: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
SURROUNDING: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


class _GridReader:
    """Read helpers shared by the mutable grid and its snapshots."""

    width: int
    height: int
    cells: Sequence[Sequence[TileClass]]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileClass:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self.cells[x][y]

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[x][y] == FLOOR

    def floor_neighbors(self, x: int, y: int) -> int:
        """Number of Floor cells among the four orthogonal neighbors."""
        return sum(1 for dx, dy in ORTHOGONAL if self.is_floor(x + dx, y + dy))

    def surrounding_floor(self, x: int, y: int) -> int:
        """Number of Floor cells in the 8-neighborhood; off-grid counts as non-floor."""
        return sum(1 for dx, dy in SURROUNDING if self.is_floor(x + dx, y + dy))

    def positions(self) -> Iterator[Position]:
        """All positions in scan order: x outer, y inner."""
        for x in range(self.width):
            for y in range(self.height):
                yield Position(x, y)

    def floor_positions(self) -> List[Position]:
        return [Position(x, y) for x, y in self.positions() if self.cells[x][y] == FLOOR]

    def count(self, tile: TileClass) -> int:
        return sum(1 for column in self.cells for cell in column if cell == tile)


class Grid(_GridReader):
    def __init__(self, width: int, height: int, fill: TileClass = EMPTY):
        self.width = width
        self.height = height
        self.cells: List[List[TileClass]] = [[fill for _ in range(height)] for _ in range(width)]

    def set(self, x: int, y: int, tile: TileClass) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        self.cells[x][y] = tile

    def snapshot(self) -> "GridSnapshot":
        return GridSnapshot(self.width, self.height, tuple(tuple(column) for column in self.cells))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build a grid from text rows (index = y) using the tile chars."""
        grid = cls(len(rows[0]), len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                grid.cells[x][y] = TileClass.from_char(ch)
        return grid


class GridSnapshot(_GridReader):
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: Tuple[Tuple[TileClass, ...], ...]):
        self.width = width
        self.height = height
        self.cells = cells

    def __eq__(self, other):
        if not isinstance(other, GridSnapshot):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __hash__(self):
        return hash((self.width, self.height, self.cells))

    def rows(self, avatar: Optional[Tuple[int, int]] = None) -> List[str]:
        """Text rows indexed by y, with an optional avatar drawn over a copy."""
        out = []
        for y in range(self.height):
            row = [self.cells[x][y].char for x in range(self.width)]
            if avatar is not None and avatar[1] == y and 0 <= avatar[0] < self.width:
                row[avatar[0]] = AVATAR_CHAR
            out.append("".join(row))
        return out

    def content_hash(self) -> str:
        digest = hashlib.sha256(f"{self.width}x{self.height}:".encode("utf-8"))
        for column in self.cells:
            digest.update("".join(cell.char for cell in column).encode("utf-8"))
        return digest.hexdigest()


__all__ = ["Position", "Grid", "GridSnapshot", "ORTHOGONAL", "SURROUNDING"]
