"""
Game constants: board coordinates and movement directions.
"""

from enum import IntEnum
from typing import NamedTuple


class Vec2D(NamedTuple):
    """Integer board coordinate. (0, 0) is the bottom left cell."""

    x: int
    y: int

    def __add__(self, other: "Vec2D") -> "Vec2D":
        return Vec2D(self.x + other.x, self.y + other.y)

    def apply(self, direction: "Direction") -> "Vec2D":
        """Return the neighbouring coordinate in the given direction."""
        dx, dy = direction.delta
        return Vec2D(self.x + dx, self.y + dy)


class Direction(IntEnum):
    """
    The four moves. The integer value doubles as the index into
    per-direction value arrays produced by the search.
    """

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def delta(self) -> Vec2D:
        return _DELTAS[self]

    @property
    def wire_name(self) -> str:
        """Lower-case name used by the arena's move responses."""
        return self.name.lower()


_DELTAS = {
    Direction.UP: Vec2D(0, 1),     # Up => y + 1
    Direction.RIGHT: Vec2D(1, 0),
    Direction.DOWN: Vec2D(0, -1),  # Down => y - 1
    Direction.LEFT: Vec2D(-1, 0),
}

UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = frozenset(Direction)

# Snakes are identified by small integers used as array indices
MAX_SNAKES = 4
MAX_HEALTH = 100
# Freshly spawned snakes are this many segments stacked on one cell
START_LENGTH = 3
