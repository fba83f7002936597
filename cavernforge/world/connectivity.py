"""Floor connectivity validation and repair.

Floor tiles are indexed in scan order (x outer, y inner) and merged with
their orthogonal floor neighbours in a disjoint set. The grid counts as
connected when a single component remains; an all-solid grid has nothing to
repair and is reported connected.

Repair stitches components together as a chain in discovery order: one
tunnel between a random tile of component k and a random tile of component
k+1. It works on one snapshot of the components and never re-checks between
merges, so callers validate again afterwards (``ensure_connectivity``).
"""

from __future__ import annotations

import random
from typing import Dict, List, Tuple

from ..logging_utils import get_logger
from .grid import Grid, Position
from .tunnels import SHORT_TUNNEL_DISTANCE, carve_tunnel
from .unionfind import DisjointSet

_log = get_logger("world.connectivity")


def _floor_union(grid: Grid) -> Tuple[List[Position], DisjointSet]:
    floor = grid.floor_positions()
    index: Dict[Position, int] = {pos: i for i, pos in enumerate(floor)}
    uf = DisjointSet(len(floor))
    for i, (x, y) in enumerate(floor):
        for neighbor in ((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)):
            j = index.get(neighbor)
            if j is not None:
                uf.union(i, j)
    return floor, uf


def count_components(grid: Grid) -> int:
    _, uf = _floor_union(grid)
    return uf.components


def is_connected(grid: Grid) -> bool:
    components = count_components(grid)
    return components <= 1


def floor_components(grid: Grid) -> List[List[Position]]:
    """Floor tiles grouped by component, groups ordered by first discovery."""
    floor, uf = _floor_union(grid)
    groups: Dict[int, List[Position]] = {}
    for i, pos in enumerate(floor):
        groups.setdefault(uf.find(i), []).append(pos)
    return list(groups.values())


def repair_connectivity(grid: Grid, rng: random.Random, short_distance: int = SHORT_TUNNEL_DISTANCE) -> int:
    """Chain-merge every floor component; returns the number of tunnels dug."""
    components = floor_components(grid)
    if len(components) < 2:
        return 0
    for first, second in zip(components, components[1:]):
        a = first[rng.randrange(len(first))]
        b = second[rng.randrange(len(second))]
        carve_tunnel(grid, a, b, rng, short_distance)
    return len(components) - 1


def ensure_connectivity(grid: Grid, rng: random.Random, short_distance: int = SHORT_TUNNEL_DISTANCE) -> int:
    """Validate, repair if needed, then validate again. Returns tunnels dug."""
    if is_connected(grid):
        return 0
    repairs = repair_connectivity(grid, rng, short_distance)
    remaining = count_components(grid)
    if remaining > 1:
        _log.warn(event="connectivity_repair_incomplete", components=remaining, repairs=repairs)
    return repairs


__all__ = [
    "count_components",
    "is_connected",
    "floor_components",
    "repair_connectivity",
    "ensure_connectivity",
]
