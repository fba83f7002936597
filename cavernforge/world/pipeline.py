"""Pipeline orchestration for world generation.

One ``Generator`` is one generation session: it owns the mutable grid and
the seeded ``random.Random`` and runs every phase in a fixed order. The
order, and the number of draws each phase takes from the generator, is what
makes a seed reproducible; reordering phases changes every world.
"""

from __future__ import annotations

import random
import time
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .config import WorldConfig
from .connectivity import ensure_connectivity
from .graph import ConnectionResult, connect_caverns
from .grid import Grid, GridSnapshot, Position
from .metrics import init_metrics
from .pruning import remove_dead_ends
from .rooms import Cavern, carve_caverns, room_stats
from .sampler import pick_cavern_centers
from .tiles import FLOOR, WALL
from .walls import build_walls, remove_orphan_walls, seal_borders

_log = get_logger("world.pipeline")


class GenerationOutputs(NamedTuple):
    grid: GridSnapshot
    centers: List[Position]
    caverns: List[Cavern]
    connections: ConnectionResult
    metrics: Dict[str, Any]


class Generator:
    def __init__(self, config: WorldConfig, seed: int, enable_metrics: Optional[bool] = None):
        self.config = config
        self.seed = seed
        self.rng = random.Random(seed)
        self.grid = Grid(config.width, config.height)
        self.enable_metrics = config.enable_metrics if enable_metrics is None else enable_metrics
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.log = _log.bind(seed=seed)

    def _phase(self, label, fn, *a, **k):
        if not self.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        self.metrics['phase_ms'][label] = int((time.perf_counter() - ps) * 1000)
        return r

    def _record(self, **values):
        if self.enable_metrics:
            for key, value in values.items():
                self.metrics[key] += value

    def run(self) -> GenerationOutputs:
        start = time.perf_counter()
        cfg, grid, rng = self.config, self.grid, self.rng
        short = cfg.short_tunnel_distance

        centers, target = self._phase('sample_centers', pick_cavern_centers, cfg, rng)
        caverns = self._phase('carve_rooms', carve_caverns, grid, centers, cfg, rng)
        self._record(caverns_target=target, caverns_placed=len(centers), **room_stats(caverns))

        connections = self._phase('connect_caverns', connect_caverns, grid, caverns, cfg, rng)
        self._record(tunnels_mst=len(connections.mst_edges), tunnels_extra=len(connections.extra_edges))

        self._phase('build_walls', build_walls, grid)
        repairs = self._phase('ensure_connectivity', ensure_connectivity, grid, rng, short)
        pruned, passes = self._phase('remove_dead_ends', remove_dead_ends, grid)
        # Pruning can cut the only bridge between two branches.
        repairs += self._phase('ensure_connectivity_post_prune', ensure_connectivity, grid, rng, short)
        sealed = self._phase('seal_borders', seal_borders, grid)
        orphans = self._phase('remove_orphan_walls', remove_orphan_walls, grid)
        self._record(
            repairs_performed=repairs,
            dead_ends_pruned=pruned,
            prune_passes=passes,
            border_tiles_sealed=sealed,
            orphan_walls_removed=orphans,
        )

        if self.enable_metrics:
            self.metrics['tiles_floor'] = grid.count(FLOOR)
            self.metrics['tiles_wall'] = grid.count(WALL)
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.log.debug(
                event="world_generated",
                caverns=len(caverns),
                floor=self.metrics['tiles_floor'],
                repairs=repairs,
                runtime_ms=self.metrics['runtime_ms'],
            )
        return GenerationOutputs(grid.snapshot(), centers, caverns, connections, self.metrics)


__all__ = ["Generator", "GenerationOutputs"]
