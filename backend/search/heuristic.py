"""
Position evaluation used at the leaves of the search tree.
"""

from collections import deque

from domain.constants import Direction, MAX_HEALTH
from domain.game import Game
from domain.grid import CellType

# Sentinel scores. Heuristics return finite values strictly between them.
WIN = float("inf")
LOSS = float("-inf")


class Heuristic:
    """
    Base class/interface for evaluation strategies.

    An implementation scores a game from the point of view of one snake:
    higher is better for that snake. It must not modify the game, and must
    return a value (LOSS) for snakes that are no longer alive.
    """

    def evaluate(self, game: Game, snake_id: int) -> float:
        raise NotImplementedError


class SpaceHeuristic(Heuristic):
    """
    Prefers positions with room to move, a length lead over the longest
    opponent, and food within reach when health runs low.
    """

    def __init__(
        self,
        space_weight: float = 1.0,
        length_weight: float = 2.0,
        health_weight: float = 0.1,
        food_weight: float = 0.5,
        hunger_threshold: int = 40,
        max_space: int = 64,
    ):
        self.space_weight = space_weight
        self.length_weight = length_weight
        self.health_weight = health_weight
        self.food_weight = food_weight
        self.hunger_threshold = hunger_threshold
        self.max_space = max_space

    def evaluate(self, game: Game, snake_id: int) -> float:
        snake = game.snake(snake_id)
        if snake is None:
            return LOSS
        if len(game.snakes) == 1:
            return WIN

        space, food_distance = self._flood_fill(game, snake.head)
        longest_opponent = max(len(s) for s in game.snakes if s.id != snake_id)

        score = space * self.space_weight
        score += (len(snake) - longest_opponent) * self.length_weight
        score += snake.health * self.health_weight

        if snake.health < self.hunger_threshold:
            if food_distance is None:
                score -= (MAX_HEALTH - snake.health) * self.food_weight
            else:
                score -= food_distance * self.food_weight

        return score

    def _flood_fill(self, game: Game, start):
        """
        Breadth-first fill from `start` over non-occupied cells, bounded by
        max_space. Returns (reachable cells, distance to nearest food or None).
        """
        grid = game.grid
        visited = {start}
        queue = deque([(start, 0)])
        count = 0
        food_distance = None

        while queue and count < self.max_space:
            p, dist = queue.popleft()
            for d in Direction:
                n = p.apply(d)
                if n in visited or not grid.has(n):
                    continue
                cell = grid[n]
                if cell.t == CellType.OCCUPIED:
                    continue
                if cell.t == CellType.FOOD and food_distance is None:
                    food_distance = dist + 1
                visited.add(n)
                queue.append((n, dist + 1))
                count += 1

        return count, food_distance
