"""
Base player interface for the game engine.
"""

from domain.constants import Direction
from domain.game import Game


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning a move for its snake_id
    given the current game. start and end are called once per game.
    """

    def __init__(self, snake_id: int):
        self.snake_id = snake_id

    def start(self, game: Game) -> None:
        pass

    def step(self, game: Game) -> Direction:
        """
        Return a move direction given the current game.

        Args:
            game: Current state of the game. Implementations must not modify it.

        Returns:
            One of the four Direction members
        """
        raise NotImplementedError

    def end(self, game: Game) -> None:
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.snake_id})"
