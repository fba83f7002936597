"""Public world package interface."""

from .config import WorldConfig
from .grid import Grid, GridSnapshot, Position
from .tiles import AVATAR_CHAR, EMPTY, FLOOR, WALL, TileClass
from .world import World, generate  # noqa: F401

__all__ = [
    "World",
    "WorldConfig",
    "generate",
    "Grid",
    "GridSnapshot",
    "Position",
    "TileClass",
    "EMPTY",
    "FLOOR",
    "WALL",
    "AVATAR_CHAR",
]
