"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable

from .constants import MAX_HEALTH, START_LENGTH, Vec2D


class Snake:
    """
    Represents a living snake on the board.

    Attributes:
        id: small integer (0-3), stable for the whole game
        body: deque of Vec2D from tail at index 0 to head at the end
        health: 0-100, reset to 100 whenever the snake eats
    """

    __slots__ = ("id", "body", "health")

    def __init__(self, body: Iterable[Vec2D], health: int = MAX_HEALTH, id: int = 0):
        self.id = id
        self.body = deque(body)
        self.health = health

    @classmethod
    def spawn(cls, p: Vec2D, id: int = 0) -> "Snake":
        """A new snake: START_LENGTH segments stacked on one cell."""
        return cls([p] * START_LENGTH, MAX_HEALTH, id)

    @property
    def head(self) -> Vec2D:
        """Return the head position (last element)."""
        return self.body[-1]

    @property
    def tail(self) -> Vec2D:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def copy(self) -> "Snake":
        return Snake(self.body, self.health, self.id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return (self.id, self.health, self.body) == (other.id, other.health, other.body)

    def __repr__(self):
        return f"<Snake id={self.id} health={self.health} body={[tuple(p) for p in self.body]}>"
