"""
Local game orchestration: board setup and the turn loop used to play
agents against each other.

Randomness (start positions, food spawns, hazard growth) always comes
from the `rng` argument, never from module state.
"""

import logging
import random
from typing import List, Sequence

from domain.constants import Direction, MAX_HEALTH, Vec2D
from domain.game import Game, Outcome
from domain.grid import CellType
from domain.snake import Snake
from players.base import Player


logger = logging.getLogger(__name__)

# Food budget at game start; a food spawn is forced whenever it runs out
START_FOOD = 4


def init_game(width: int, height: int, num_agents: int, rng: random.Random) -> Game:
    """
    Standard starting board: snakes of length 3 on the corners or on the
    middle of the edges, food in the center and next to every snake.
    """
    if width % 2 == 0 or height % 2 == 0:
        logger.warning("If the dimensions are even, the initial board configuration is unfair!")
    if width != height:
        logger.warning("If width != height, the initial board configuration is unfair!")

    if rng.random() < 0.5:
        # Corners
        starts = [
            Vec2D(1, 1),
            Vec2D(width - 2, 1),
            Vec2D(width - 2, height - 2),
            Vec2D(1, height - 2),
        ]
    else:
        # Edges
        starts = [
            Vec2D(width // 2, 1),
            Vec2D(width - 2, height // 2),
            Vec2D(width // 2, height - 2),
            Vec2D(1, height // 2),
        ]
    starts = rng.sample(starts, num_agents)

    game = Game(0, width, height, [Snake.spawn(p) for p in starts])

    game.grid.set_type(Vec2D(width // 2, height // 2), CellType.FOOD)

    # One food two steps away from each snake, on a border cell that is not a corner
    for snake in game.snakes:
        candidates = []
        for offset in (Vec2D(-1, -1), Vec2D(-1, 1), Vec2D(1, 1), Vec2D(1, -1)):
            p = snake.head + offset
            if not game.grid.has(p) or game.grid[p].t == CellType.OCCUPIED:
                continue
            on_x_border = p.x == 0 or p.x == width - 1
            on_y_border = p.y == 0 or p.y == height - 1
            if on_x_border != on_y_border:
                candidates.append(p)
        if candidates:
            game.grid.set_type(rng.choice(candidates), CellType.FOOD)

    return game


def _expand_hazards(game: Game, insets: List[int], rng: random.Random) -> None:
    """Grow the hazard border by one row or column on a random side."""
    width, height = game.width, game.height
    side = rng.randrange(4)
    insets[side] += 1
    # sides: 0 bottom, 1 left, 2 top, 3 right
    if side % 2 == 0:
        y = insets[side] - 1 if side == 0 else height - insets[side]
        for x in range(width):
            game.grid.set_hazard(Vec2D(x, y))
    else:
        x = insets[side] - 1 if side == 1 else width - insets[side]
        for y in range(height):
            game.grid.set_hazard(Vec2D(x, y))


def play_game(
    players: Sequence[Player],
    game: Game,
    food_rate: float,
    shrink_turns: int,
    rng: random.Random,
) -> Outcome:
    """
    Play `game` to the end. `players[i]` controls the snake with id i.

    Returns the final Outcome.
    """
    food_count = START_FOOD
    hazard_insets = [0, 0, 0, 0]

    logger.debug("init: %r\n%s", game, game.print_board())
    for player in players:
        player.start(game)

    while True:
        turn = game.turn
        moves = [Direction.UP] * len(Direction)
        for snake in game.snakes:
            moves[snake.id] = players[snake.id].step(game)
        logger.debug("Moves: %s", [m.name for m in moves])

        game.step(moves)
        logger.debug("%d: %r\n%s", turn, game, game.print_board())

        outcome = game.outcome()
        if outcome.finished:
            logger.info("game: %r after %d turns", outcome, turn)
            break

        for snake in game.snakes:
            if snake.health == MAX_HEALTH:
                food_count -= 1

        if food_count <= 0 or rng.random() < food_rate:
            free = game.grid.positions(CellType.FREE)
            if free:
                game.grid.set_type(rng.choice(free), CellType.FOOD)
                food_count += 1

        if (
            turn > 0
            and shrink_turns > 0
            and turn % shrink_turns == 0
            and hazard_insets[0] + hazard_insets[2] < game.height
            and hazard_insets[1] + hazard_insets[3] < game.width
        ):
            _expand_hazards(game, hazard_insets, rng)

    for player in players:
        player.end(game)
    return outcome
