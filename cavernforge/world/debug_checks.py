"""Structural diagnostics for generated worlds.

Used by ``scripts/diagnose_seeds.py`` and the invariant tests. Every check
reports offending positions rather than a bare boolean so failures can be
located on the map.
"""

from __future__ import annotations

from typing import Any, Dict

from .connectivity import count_components
from .graph import MAX_DEGREE
from .grid import Grid
from .pruning import find_dead_ends
from .tiles import FLOOR
from .walls import border_positions, find_orphan_walls
from .world import World


def analyze(world: World) -> Dict[str, Any]:
    grid = Grid(world.width, world.height)
    grid.cells = [list(column) for column in world.grid.cells]
    degrees: Dict[int, int] = {}
    for edge in world.connections.tunnels:
        degrees[edge.a] = degrees.get(edge.a, 0) + 1
        degrees[edge.b] = degrees.get(edge.b, 0) + 1
    return {
        "floor_tiles": grid.count(FLOOR),
        "components": count_components(grid),
        "border_floor": [p for p in border_positions(grid) if grid.cells[p.x][p.y] == FLOOR],
        "orphan_walls": find_orphan_walls(grid),
        "dead_ends": find_dead_ends(grid),
        "over_degree": [i for i, d in sorted(degrees.items()) if d > MAX_DEGREE],
    }


def issues(world: World) -> Dict[str, int]:
    """Counts per invariant; all zero for a healthy world."""
    res = analyze(world)
    return {
        "disconnected": max(0, res["components"] - 1),
        "border_floor": len(res["border_floor"]),
        "orphan_walls": len(res["orphan_walls"]),
        "over_degree": len(res["over_degree"]),
    }


__all__ = ["analyze", "issues"]
