"""
Max-n tree search over simultaneous-move game states.

One ply is a full turn for every living snake. Within a ply the snakes
pick their moves one after another (the root snake first), each one
maximizing its own entry of a per-snake value vector; once all moves are
fixed the game is stepped and the search recurses one ply deeper. Leaves
are scored with a Heuristic for every living snake.

Every explored state is a clone, the caller's game is never modified.
"""

import asyncio
from typing import Iterable, List, Optional, Sequence

from domain.constants import MAX_SNAKES, Direction
from domain.game import Game

from .heuristic import LOSS, WIN, Heuristic

Values = List[float]


def argmax(values: Iterable[float]) -> Optional[int]:
    """Index of the first maximum, None for an empty sequence."""
    best = None
    best_value = None
    for i, v in enumerate(values):
        if best_value is None or v > best_value:
            best, best_value = i, v
    return best


def _evaluate(game: Game, heuristic: Heuristic) -> Values:
    values = [LOSS] * MAX_SNAKES
    winner = game.outcome().winner
    for snake in game.snakes:
        if snake.id == winner:
            values[snake.id] = WIN
        else:
            values[snake.id] = heuristic.evaluate(game, snake.id)
    return values


def _search(game: Game, depth: int, heuristic: Heuristic, root: int) -> Values:
    if depth <= 0 or game.outcome().finished:
        return _evaluate(game, heuristic)

    order = [s.id for s in game.snakes if s.id == root]
    order += [s.id for s in game.snakes if s.id != root]
    moves = [Direction.UP] * MAX_SNAKES
    return _choose(game, depth, heuristic, root, order, 0, moves)


def _choose(
    game: Game,
    depth: int,
    heuristic: Heuristic,
    root: int,
    order: Sequence[int],
    ply: int,
    moves: List[Direction],
) -> Values:
    if ply == len(order):
        child = game.clone()
        child.step(moves)
        return _search(child, depth - 1, heuristic, root)

    snake_id = order[ply]
    # a snake without valid moves still has to move (and dies)
    candidates = sorted(game.valid_moves(snake_id)) or [Direction.UP]

    best = None
    for d in candidates:
        moves[snake_id] = d
        value = _choose(game, depth, heuristic, root, order, ply + 1, moves)
        if best is None or value[snake_id] > best[snake_id]:
            best = value
            if best[snake_id] >= WIN:
                break
    return best


def _root_value(game: Game, depth: int, heuristic: Heuristic, root: int, d: Direction) -> float:
    others = [s.id for s in game.snakes if s.id != root]
    moves = [Direction.UP] * MAX_SNAKES
    moves[root] = d
    return _choose(game, depth, heuristic, root, others, 0, moves)[root]


def max_n(game: Game, depth: int, heuristic: Heuristic, root: int = 0) -> Values:
    """
    Evaluate each of the root snake's four directions `depth` plies deep.

    Returns a list indexed by Direction. Directions that are not valid
    right now score LOSS, as does everything when the root is dead or
    depth is below one.
    """
    result = [LOSS] * len(Direction)
    if depth < 1 or not game.snake_is_alive(root):
        return result

    valid = game.valid_moves(root)
    for d in Direction:
        if d in valid:
            result[d] = _root_value(game, depth, heuristic, root, d)
    return result


async def _async_search(game: Game, depth: int, heuristic: Heuristic, root: int) -> Values:
    if depth <= 0 or game.outcome().finished:
        return _evaluate(game, heuristic)

    order = [s.id for s in game.snakes if s.id == root]
    order += [s.id for s in game.snakes if s.id != root]
    moves = [Direction.UP] * MAX_SNAKES
    return await _async_choose(game, depth, heuristic, root, order, 0, moves)


async def _async_choose(
    game: Game,
    depth: int,
    heuristic: Heuristic,
    root: int,
    order: Sequence[int],
    ply: int,
    moves: List[Direction],
) -> Values:
    if ply == len(order):
        # cancellation point, at most one step and its leaf evaluation apart
        await asyncio.sleep(0)
        child = game.clone()
        child.step(moves)
        return await _async_search(child, depth - 1, heuristic, root)

    snake_id = order[ply]
    candidates = sorted(game.valid_moves(snake_id)) or [Direction.UP]

    best = None
    for d in candidates:
        moves[snake_id] = d
        value = await _async_choose(game, depth, heuristic, root, order, ply + 1, moves)
        if best is None or value[snake_id] > best[snake_id]:
            best = value
            if best[snake_id] >= WIN:
                break
    return best


async def async_max_n(game: Game, depth: int, heuristic: Heuristic, root: int = 0) -> Values:
    """
    Same as max_n, but yields to the event loop before every simulated
    step so that a surrounding timeout can cancel inside a subtree.
    """
    result = [LOSS] * len(Direction)
    if depth < 1 or not game.snake_is_alive(root):
        return result

    valid = game.valid_moves(root)
    others = [s.id for s in game.snakes if s.id != root]
    for d in Direction:
        if d in valid:
            moves = [Direction.UP] * MAX_SNAKES
            moves[root] = d
            value = await _async_choose(game, depth, heuristic, root, others, 0, moves)
            result[d] = value[root]
    return result
