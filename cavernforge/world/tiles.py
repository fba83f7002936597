from enum import Enum


class TileClass(Enum):
    """Structural tile classes. Members compare by value."""

    EMPTY = "empty"
    FLOOR = "floor"
    WALL = "wall"

    @property
    def char(self) -> str:
        return _CHARS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_char(cls, ch: str) -> "TileClass":
        for tile, tile_char in _CHARS.items():
            if tile_char == ch:
                return tile
        return cls.EMPTY


EMPTY = TileClass.EMPTY
FLOOR = TileClass.FLOOR
WALL = TileClass.WALL

_CHARS = {EMPTY: " ", FLOOR: ".", WALL: "#"}
_DESCRIPTIONS = {EMPTY: "nothing", FLOOR: "floor", WALL: "wall"}

# Overlay only; never stored in a grid.
AVATAR_CHAR = "@"

__all__ = ["TileClass", "EMPTY", "FLOOR", "WALL", "AVATAR_CHAR"]
