"""Public world surface.

``World`` runs the generation pipeline on construction and keeps only the
frozen result. It is what the web layer, persistence and rendering see:
dimensions, tile queries, the default spawn point and text rendering with an
avatar overlay. None of these can reach the session's mutable grid.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from flask import current_app, has_app_context

from .config import WorldConfig
from .graph import ConnectionResult
from .grid import GridSnapshot, Position
from .pipeline import Generator
from .rooms import Cavern
from .tiles import FLOOR, TileClass


@dataclass
class World:
    seed: Optional[int] = None
    config: WorldConfig = field(default_factory=WorldConfig)
    enable_metrics: Optional[bool] = None

    def __post_init__(self):
        # 0 is a valid seed; None picks one.
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        if self.enable_metrics is None:
            self.enable_metrics = self.config.enable_metrics
            env_val = os.environ.get('WORLD_ENABLE_GENERATION_METRICS')
            if env_val is not None:
                self.enable_metrics = env_val.lower() not in {'0', 'false', 'no', ''}
            # Flask app config has the last word when present
            if has_app_context() and 'WORLD_ENABLE_GENERATION_METRICS' in current_app.config:
                self.enable_metrics = bool(current_app.config['WORLD_ENABLE_GENERATION_METRICS'])
        outputs = Generator(self.config, self.seed, self.enable_metrics).run()
        self.grid: GridSnapshot = outputs.grid
        self.caverns: List[Cavern] = outputs.caverns
        self.connections: ConnectionResult = outputs.connections
        self.metrics: Dict[str, Any] = outputs.metrics
        self._spawn: Optional[Position] = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def dimensions(self) -> Tuple[int, int]:
        return self.grid.size

    def classify(self, x: int, y: int) -> TileClass:
        """Tile class at (x, y); raises IndexError outside the grid."""
        return self.grid.get(x, y)

    def can_occupy(self, x: int, y: int) -> bool:
        return self.grid.is_floor(x, y)

    def default_spawn(self) -> Position:
        """Floor tile with the smallest (y, x), or the grid center if there is no floor."""
        if self._spawn is None:
            floor = self.grid.floor_positions()
            if floor:
                self._spawn = min(floor, key=lambda p: (p.y, p.x))
            else:
                self._spawn = Position(self.width // 2, self.height // 2)
        return self._spawn

    def floor_count(self) -> int:
        return self.grid.count(FLOOR)

    def render(self, avatar: Optional[Tuple[int, int]] = None) -> List[str]:
        return self.grid.rows(avatar)

    def content_hash(self) -> str:
        return self.grid.content_hash()


def generate(seed: int, config: Optional[WorldConfig] = None) -> World:
    return World(seed=seed, config=config or WorldConfig())


__all__ = ["World", "generate"]
