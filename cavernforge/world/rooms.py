import random
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .config import WorldConfig
from .grid import Grid, Position
from .tiles import EMPTY, FLOOR


@dataclass
class Cavern:
    center: Position
    floor_tiles: List[Position] = field(default_factory=list)
    shape: str = "rectangular"

    @property
    def is_empty(self) -> bool:
        return not self.floor_tiles


def carve_caverns(grid: Grid, centers: List[Position], config: WorldConfig, rng: random.Random) -> List[Cavern]:
    """Carve one cavern per center, in sampling order.

    Each cavern flips a weighted coin between a rectangular room (rejected
    outright if its footprint touches existing floor) and a compact room
    (fills only empty cells, merging silently with neighbours).
    Rejected rooms still yield a Cavern with no floor tiles.
    """
    caverns: List[Cavern] = []
    for center in centers:
        if rng.random() < config.rectangular_chance:
            cavern = Cavern(center, shape="rectangular")
            dig_rectangular_room(grid, cavern, config, rng)
        else:
            cavern = Cavern(center, shape="compact")
            dig_compact_room(grid, cavern, config, rng)
        caverns.append(cavern)
    return caverns


def dig_rectangular_room(grid: Grid, cavern: Cavern, config: WorldConfig, rng: random.Random) -> bool:
    w = rng.randint(*config.rect_width)
    h = rng.randint(*config.rect_height)
    x0, y0 = _anchor(grid, cavern.center, w, h)
    footprint = [(x, y) for x in range(x0, x0 + w) for y in range(y0, y0 + h) if grid.in_bounds(x, y)]
    if any(grid.cells[x][y] == FLOOR for x, y in footprint):
        return False
    for x, y in footprint:
        if _interior(grid, x, y):
            grid.cells[x][y] = FLOOR
            cavern.floor_tiles.append(Position(x, y))
    return True


def dig_compact_room(grid: Grid, cavern: Cavern, config: WorldConfig, rng: random.Random) -> int:
    w = rng.randint(*config.compact_width)
    h = rng.randint(*config.compact_height)
    x0, y0 = _anchor(grid, cavern.center, w, h)
    carved = 0
    for x in range(x0, x0 + w):
        for y in range(y0, y0 + h):
            if grid.in_bounds(x, y) and _interior(grid, x, y) and grid.cells[x][y] == EMPTY:
                grid.cells[x][y] = FLOOR
                cavern.floor_tiles.append(Position(x, y))
                carved += 1
    return carved


def room_stats(caverns: List[Cavern]) -> Dict[str, int]:
    stats = {"rooms_rectangular": 0, "rooms_compact": 0, "rooms_rejected": 0}
    for cavern in caverns:
        stats[f"rooms_{cavern.shape}"] += 1
        if cavern.is_empty and cavern.shape == "rectangular":
            stats["rooms_rejected"] += 1
    return stats


def _anchor(grid: Grid, center: Position, w: int, h: int) -> Tuple[int, int]:
    # Keep the footprint one tile inside the border.
    x0 = max(1, min(center.x - w // 2, grid.width - w - 1))
    y0 = max(1, min(center.y - h // 2, grid.height - h - 1))
    return x0, y0


def _interior(grid: Grid, x: int, y: int) -> bool:
    return 0 < x < grid.width - 1 and 0 < y < grid.height - 1


__all__ = ["Cavern", "carve_caverns", "dig_rectangular_room", "dig_compact_room", "room_stats"]
