"""
Random player implementation - picks uniformly among the four directions.
"""

import random
from typing import Optional

from domain.constants import Direction
from domain.game import Game
from .base import Player


class RandomPlayer(Player):
    """
    A baseline that ignores the board entirely. Used for comparison play.
    """

    def __init__(self, snake_id: int, rng: Optional[random.Random] = None):
        super().__init__(snake_id)
        self.rng = rng or random.Random()

    def step(self, game: Game) -> Direction:
        return self.rng.choice(list(Direction))
