"""Tunnel carving between caverns or arbitrary floor positions.

Tunnels are laid as one to three straight runs joined at randomized turn
points:

  * endpoints within one tile on both axes: a single straight run
  * short hops (Manhattan distance <= ``short_distance``): an L with one turn
  * longer hops: a Z with two turns, each kept in the middle third of its span

A straight run is a greedy walk (x first, then y), not a true line raster.
Every non-floor cell it visits becomes floor.
"""

import random
from typing import List

from .grid import ORTHOGONAL, Grid, Position
from .rooms import Cavern
from .tiles import FLOOR

SHORT_TUNNEL_DISTANCE = 8


def boundary_tiles(grid: Grid, cavern: Cavern) -> List[Position]:
    """Floor tiles of ``cavern`` touching a non-floor or off-grid 4-neighbour."""
    edge = []
    for pos in cavern.floor_tiles:
        for dx, dy in ORTHOGONAL:
            if not grid.is_floor(pos.x + dx, pos.y + dy):
                edge.append(pos)
                break
    return edge


def pick_edge_tile(grid: Grid, cavern: Cavern, rng: random.Random) -> Position:
    if not cavern.floor_tiles:
        return cavern.center
    edge = boundary_tiles(grid, cavern)
    if not edge:
        return cavern.floor_tiles[rng.randrange(len(cavern.floor_tiles))]
    return edge[rng.randrange(len(edge))]


def carve_tunnel(
    grid: Grid,
    start: Position,
    end: Position,
    rng: random.Random,
    short_distance: int = SHORT_TUNNEL_DISTANCE,
) -> int:
    """Carve a turned tunnel from ``start`` to ``end``; returns cells converted."""
    dx = end.x - start.x
    dy = end.y - start.y
    if dx == 0 and dy == 0:
        return 0
    if abs(dx) <= 1 and abs(dy) <= 1:
        return carve_straight_run(grid, start, end)

    horizontal_first = rng.random() < 0.5
    if abs(dx) + abs(dy) <= short_distance:
        if horizontal_first:
            turn = Position(_inside_span(rng, start.x, end.x), start.y)
        else:
            turn = Position(start.x, _inside_span(rng, start.y, end.y))
        waypoints = [start, turn, end]
    else:
        if horizontal_first:
            first = Position(_middle_third(rng, start.x, end.x), start.y)
            second = Position(first.x, _middle_third(rng, first.y, end.y))
        else:
            first = Position(start.x, _middle_third(rng, start.y, end.y))
            second = Position(_middle_third(rng, first.x, end.x), first.y)
        waypoints = [start, first, second, end]

    carved = 0
    for a, b in zip(waypoints, waypoints[1:]):
        carved += carve_straight_run(grid, a, b)
    return carved


def carve_straight_run(grid: Grid, start: Position, end: Position) -> int:
    """Walk from ``start`` to ``end`` converting visited cells to floor."""
    if start == end:
        return 0
    x, y = start
    gx, gy = end
    carved = 0
    while (x, y) != (gx, gy):
        if grid.in_bounds(x, y) and grid.cells[x][y] != FLOOR:
            grid.cells[x][y] = FLOOR
            carved += 1
        if x != gx:
            x += 1 if gx > x else -1
        else:
            y += 1 if gy > y else -1
    # The loop exits on arrival, before touching the destination.
    if grid.in_bounds(gx, gy) and grid.cells[gx][gy] != FLOOR:
        grid.cells[gx][gy] = FLOOR
        carved += 1
    return carved


def _inside_span(rng: random.Random, a: int, b: int) -> int:
    lo, hi = min(a, b), max(a, b)
    if hi - lo > 2:
        return rng.randrange(lo + 1, hi)
    return (a + b) // 2


def _middle_third(rng: random.Random, a: int, b: int) -> int:
    third = abs(b - a) // 3
    lower = min(a, b) + third
    upper = max(a, b) - third
    if upper > lower:
        return rng.randrange(lower, upper)
    return (a + b) // 2


__all__ = [
    "SHORT_TUNNEL_DISTANCE",
    "boundary_tiles",
    "pick_edge_tile",
    "carve_tunnel",
    "carve_straight_run",
]
