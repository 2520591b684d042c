"""
Search-driven player: picks each move with an iteratively deepened max-n
search that races against the turn's time budget.

Decision flow for one turn:
  - too little time left: a single depth-1 search, no deepening
  - otherwise: depth 1, 2, ... each completed depth publishes its best
    move to a queue; the timeout cancels whatever depth is in flight
  - a certain loss (or no result at all) falls back to any valid move,
    and to UP when there is none
"""

import asyncio
import logging
import time
from typing import Optional, Tuple

import config
from domain.constants import Direction
from domain.game import Game
from domain.request import GameRequest, MoveResponse
from search.heuristic import LOSS, WIN, Heuristic, SpaceHeuristic
from search.maxn import argmax, async_max_n, max_n
from .base import Player


logger = logging.getLogger(__name__)


def fallback_move(game: Game, root: int = 0) -> Direction:
    """Any valid direction, UP if the snake is trapped (the game is lost anyway)."""
    direction = game.first_valid_move(root)
    return direction if direction is not None else Direction.UP


def decide_fast(heuristic: Heuristic, game: Game, root: int = 0) -> Direction:
    """Single synchronous depth-1 search."""
    start = time.monotonic()
    result = max_n(game, 1, heuristic, root)
    logger.debug(
        "max_n depth=1 %.1fms %s", (time.monotonic() - start) * 1000, result
    )

    best = argmax(result)
    if best is not None and result[best] > LOSS:
        return Direction(best)

    logger.info("No surviving move for snake %s, falling back", root)
    return fallback_move(game, root)


async def tree_search(
    heuristic: Heuristic, game: Game, depth: int, root: int = 0
) -> Tuple[Direction, float]:
    """Performs a tree search and returns the best move and its value."""
    start = time.monotonic()
    result = await async_max_n(game, depth, heuristic, root)
    logger.debug(
        "max_n depth=%d %.1fms %s", depth, (time.monotonic() - start) * 1000, result
    )

    best = argmax(result)
    return Direction(best), result[best]


async def iterative_tree_search(
    heuristic: Heuristic,
    game: Game,
    channel: asyncio.Queue,
    root: int = 0,
    max_depth: Optional[int] = None,
) -> None:
    """
    Run tree_search at increasing depths, putting each completed depth's
    move on `channel`. Stops on a certain win or a certain loss; a loss is
    not published so that the caller falls back.
    """
    max_depth = max_depth or config.MAX_DEPTH
    for depth in range(1, max_depth):
        direction, value = await tree_search(heuristic, game, depth, root)

        if value <= LOSS:
            break

        await channel.put(direction)

        if value >= WIN:
            break


async def decide(
    heuristic: Heuristic,
    game: Game,
    root: int = 0,
    timeout_ms: Optional[int] = None,
    latency_ms: int = 0,
) -> Direction:
    """
    Choose a move for snake `root` within `timeout_ms - latency_ms`.

    The search runs on a private clone; `game` is left untouched. Always
    returns a direction.
    """
    timeout_ms = config.DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms
    ms = max(timeout_ms - latency_ms, 0)
    if ms <= config.FAST_TIMEOUT_MS:
        return decide_fast(heuristic, game, root)

    game = game.clone()
    channel: asyncio.Queue = asyncio.Queue(maxsize=config.MAX_DEPTH)

    try:
        await asyncio.wait_for(
            iterative_tree_search(heuristic, game, channel, root), ms / 1000
        )
    except asyncio.TimeoutError:
        logger.debug("Search for snake %s stopped after %dms", root, ms)

    result = None
    while not channel.empty():
        result = channel.get_nowait()

    if result is not None:
        return result

    logger.info("No search result for snake %s, falling back", root)
    return fallback_move(game, root)


def move(heuristic: Heuristic, request: GameRequest, latency_ms: int = 0) -> MoveResponse:
    """
    Turn entry point for an arena request: build the game (the requesting
    snake becomes id 0) and decide under the request's timeout.
    """
    game = Game.from_request(request)
    direction = asyncio.run(decide(heuristic, game, 0, request.timeout, latency_ms))
    return MoveResponse(direction)


class TreePlayer(Player):
    """
    Player backed by the iterative deepening max-n search.
    """

    def __init__(
        self,
        snake_id: int,
        heuristic: Optional[Heuristic] = None,
        timeout_ms: Optional[int] = None,
        latency_ms: int = 0,
    ):
        super().__init__(snake_id)
        self.heuristic = heuristic or SpaceHeuristic()
        self.timeout_ms = config.DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms
        self.latency_ms = latency_ms

    def step(self, game: Game) -> Direction:
        return asyncio.run(
            decide(self.heuristic, game, self.snake_id, self.timeout_ms, self.latency_ms)
        )
