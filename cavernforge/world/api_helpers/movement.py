"""Movement-related helper functions for the world API.

These helpers encapsulate:
- Computing exits and the cell description
- Performing a single step of movement

They operate on a ``World`` and a ``SavedWorld`` ORM row.
"""

from __future__ import annotations

from typing import List, Tuple

from cavernforge.models.saved_world import SavedWorld
from cavernforge.world.api_helpers.persistence import save_state
from cavernforge.world.world import World

DELTAS = {"n": (0, 1), "s": (0, -1), "e": (1, 0), "w": (-1, 0)}
CARDINAL_FULL = {"n": "north", "s": "south", "e": "east", "w": "west"}


def attempt_move(world: World, instance: SavedWorld, direction: str) -> Tuple[int, int, bool]:
    """Attempt one step in ``direction``; returns (x, y, moved)."""
    x, y = instance.pos_x, instance.pos_y
    if direction not in DELTAS:
        return x, y, False
    dx, dy = DELTAS[direction]
    nx, ny = x + dx, y + dy
    if not world.can_occupy(nx, ny):
        return x, y, False
    if not save_state(instance, nx, ny):
        return x, y, False
    return nx, ny, True


def describe_cell_and_exits(world: World, x: int, y: int) -> Tuple[str, List[str]]:
    """Return (description, exits_list) for the given coordinates."""
    desc = f"You are standing on {world.classify(x, y).description}."
    exits_map = [d for d, (dx, dy) in DELTAS.items() if world.can_occupy(x + dx, y + dy)]
    if exits_map:
        desc += " Exits: " + ", ".join(CARDINAL_FULL[e].capitalize() for e in exits_map) + "."
    return desc, exits_map


__all__ = ["DELTAS", "attempt_move", "describe_cell_and_exits"]
