"""Cavern connection graph.

Builds the complete cavern graph weighted by Manhattan distance between
centers and runs Kruskal's algorithm with a per-cavern degree cap, then adds
a few extra tunnels. MST and extra tunnels share one degree counter, so no
cavern ends up with more than ``MAX_DEGREE`` tunnel endpoints. Because the cap
can refuse MST edges the cavern graph may stay disconnected; floor-level
repair happens later in ``connectivity``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from .config import WorldConfig
from .grid import Grid, Position
from .rooms import Cavern
from .tunnels import carve_tunnel, pick_edge_tile
from .unionfind import DisjointSet

MAX_DEGREE = 2


@dataclass(frozen=True)
class Edge:
    a: int
    b: int
    weight: int


@dataclass
class ConnectionResult:
    mst_edges: List[Edge] = field(default_factory=list)
    extra_edges: List[Edge] = field(default_factory=list)
    degrees: List[int] = field(default_factory=list)

    @property
    def tunnels(self) -> List[Edge]:
        return self.mst_edges + self.extra_edges


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def build_edges(caverns: List[Cavern]) -> List[Edge]:
    """Complete graph over cavern indices, stably sorted by weight."""
    edges = []
    for i in range(len(caverns)):
        for j in range(i + 1, len(caverns)):
            edges.append(Edge(i, j, manhattan(caverns[i].center, caverns[j].center)))
    # sorted() is stable: equal weights keep enumeration order.
    return sorted(edges, key=lambda e: e.weight)


def select_mst_edges(edges: List[Edge], n: int, degrees: List[int]) -> List[Edge]:
    uf = DisjointSet(n)
    mst = []
    for edge in edges:
        if uf.connected(edge.a, edge.b):
            continue
        if degrees[edge.a] < MAX_DEGREE and degrees[edge.b] < MAX_DEGREE:
            uf.union(edge.a, edge.b)
            mst.append(edge)
            degrees[edge.a] += 1
            degrees[edge.b] += 1
    return mst


def connect_caverns(grid: Grid, caverns: List[Cavern], config: WorldConfig, rng: random.Random) -> ConnectionResult:
    result = ConnectionResult(degrees=[0] * len(caverns))
    if len(caverns) < 2:
        return result

    edges = build_edges(caverns)
    result.mst_edges = select_mst_edges(edges, len(caverns), result.degrees)
    for edge in result.mst_edges:
        _dig(grid, caverns, edge, config, rng)

    in_mst = set(result.mst_edges)
    for edge in edges:
        if edge in in_mst:
            continue
        # Drawn for every remaining edge, even ones the cap will refuse.
        if rng.random() >= config.extra_tunnel_probability:
            continue
        if result.degrees[edge.a] < MAX_DEGREE and result.degrees[edge.b] < MAX_DEGREE:
            _dig(grid, caverns, edge, config, rng)
            result.extra_edges.append(edge)
            result.degrees[edge.a] += 1
            result.degrees[edge.b] += 1
    return result


def _dig(grid: Grid, caverns: List[Cavern], edge: Edge, config: WorldConfig, rng: random.Random) -> None:
    start = pick_edge_tile(grid, caverns[edge.a], rng)
    end = pick_edge_tile(grid, caverns[edge.b], rng)
    carve_tunnel(grid, start, end, rng, config.short_tunnel_distance)


__all__ = ["MAX_DEGREE", "Edge", "ConnectionResult", "manhattan", "build_edges", "select_mst_edges", "connect_caverns"]
