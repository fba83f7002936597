"""In-process cache of generated worlds keyed by (seed, config).

Worlds are immutable once built, so sharing them across requests is safe;
the lock only guards the dict itself.
"""

from __future__ import annotations

import os
import threading
from typing import Dict, Tuple

from flask import current_app, has_app_context

from cavernforge.world.config import WorldConfig
from cavernforge.world.world import World

_world_cache: Dict[Tuple[int, WorldConfig], World] = {}
_world_cache_lock = threading.Lock()
_WORLD_CACHE_MAX = 8  # oldest entry is evicted first


def active_config() -> WorldConfig:
    """World config for the current request: ``WORLD_CONFIG`` app setting, else environment."""
    if has_app_context():
        cfg = current_app.config.get("WORLD_CONFIG")
        if cfg is not None:
            return cfg
    return WorldConfig.from_env()


def get_cached_world(seed: int, config: WorldConfig) -> World:
    if os.environ.get("WORLD_DISABLE_CACHE") == "1":
        return World(seed=seed, config=config)
    key = (seed, config)
    with _world_cache_lock:
        world = _world_cache.get(key)
        if world is not None:
            return world
    world = World(seed=seed, config=config)
    with _world_cache_lock:
        _world_cache[key] = world
        if len(_world_cache) > _WORLD_CACHE_MAX:
            first_key = next(iter(_world_cache.keys()))
            if first_key != key:
                _world_cache.pop(first_key, None)
    return world


def clear_world_cache() -> None:
    with _world_cache_lock:
        _world_cache.clear()


__all__ = ["active_config", "get_cached_world", "clear_world_cache"]
