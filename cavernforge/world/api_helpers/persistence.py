"""Save/restore helpers for the world session.

Only the seed and the avatar position are stored. Restoring regenerates the
world from the seed and checks the stored position against it; anything that
does not land on floor falls back to the world's default spawn. Missing or
malformed rows read as "no saved state" so callers simply start a new world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from cavernforge import db
from cavernforge.logging_utils import get_logger
from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.cache import active_config, get_cached_world
from cavernforge.world.config import WorldConfig
from cavernforge.world.grid import Position
from cavernforge.world.world import World

_log = get_logger("world.persistence")


@dataclass(frozen=True)
class SavedState:
    seed: int
    x: int
    y: int


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def state_from_row(row: Optional[SavedWorld]) -> Optional[SavedState]:
    if row is None:
        return None
    seed, x, y = _as_int(row.seed), _as_int(row.pos_x), _as_int(row.pos_y)
    if seed is None or x is None or y is None:
        _log.warn(event="saved_state_malformed", instance_id=row.id)
        return None
    return SavedState(seed, x, y)


def load_saved_state(instance_id) -> Optional[SavedState]:
    if instance_id is None:
        return None
    try:
        row = db.session.get(SavedWorld, int(instance_id))
    except (TypeError, ValueError):
        return None
    return state_from_row(row)


def restore_world(state: SavedState, config: Optional[WorldConfig] = None) -> Tuple[World, Position]:
    """Regenerate the saved world and return it with a valid avatar position."""
    world = get_cached_world(state.seed, config or active_config())
    if world.can_occupy(state.x, state.y):
        return world, Position(state.x, state.y)
    return world, world.default_spawn()


def save_state(instance: SavedWorld, x: int, y: int) -> bool:
    instance.pos_x, instance.pos_y = x, y
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        _log.error(event="save_state_failed", instance_id=instance.id, error=exc)
        return False
    return True


__all__ = ["SavedState", "state_from_row", "load_saved_state", "restore_world", "save_state"]
