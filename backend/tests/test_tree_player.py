"""
Tests for the search-driven turn driver.

The timing-dependent paths replace tree_search with scripted coroutines
so that depth results and stalls are deterministic.
"""

import asyncio
import os
import random
import sys
import time
from unittest.mock import patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import Direction, Game, GameRequest, MoveResponse, Snake, Vec2D
from players import tree_player
from players.tree_player import (
    TreePlayer,
    decide,
    decide_fast,
    fallback_move,
    iterative_tree_search,
    move,
)
from search import LOSS, WIN, SpaceHeuristic, argmax, max_n
from simulate import init_game

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def head_first(*points, health=100):
    return Snake(reversed([Vec2D(x, y) for x, y in points]), health)


def open_game():
    return Game(0, 11, 11, [
        head_first((5, 5), (5, 4), (5, 3)),
        head_first((8, 8), (8, 7), (8, 6)),
    ])


def doomed_game():
    """
    Snake 0 can only move UP to (0, 1), where the longer snake 1 can
    always meet it head on: every direction evaluates to LOSS.
    """
    return Game(0, 7, 7, [
        head_first((0, 0), (1, 0), (1, 1)),
        head_first((0, 2), (0, 3), (0, 4), (0, 5), (0, 6)),
    ])


def scripted_search(script):
    """Replacement for tree_search returning (direction, value) per depth."""
    async def fake(heuristic, game, depth, root=0):
        item = script[depth - 1]
        if item is None:
            await asyncio.sleep(10)
        return item
    return fake


class TestFallback:
    """Tests for the uninformed fallback policy."""

    def test_fallback_picks_valid_move(self):
        game = doomed_game()
        assert fallback_move(game, 0) == UP

    def test_fallback_without_valid_moves_is_up(self):
        game = Game(0, 5, 5, [head_first((0, 0), (1, 0), (1, 1), (0, 1), health=50)])
        assert game.valid_moves(0) == set()
        assert fallback_move(game, 0) == UP

    def test_doomed_position_is_all_loss(self):
        assert max_n(doomed_game(), 1, SpaceHeuristic()) == [LOSS] * 4

    def test_decide_fast_falls_back_to_valid_move(self):
        assert decide_fast(SpaceHeuristic(), doomed_game(), 0) == UP

    def test_decide_falls_back_to_valid_move(self):
        direction = asyncio.run(decide(SpaceHeuristic(), doomed_game(), 0, timeout_ms=400))
        assert direction in doomed_game().valid_moves(0)


class TestIterativeDeepening:
    """Tests for iterative_tree_search and decide."""

    def test_publishes_each_depth_in_order(self):
        script = [(LEFT, 1.0), (RIGHT, 2.0), (DOWN, 3.0)]

        async def run():
            channel = asyncio.Queue()
            with patch.object(tree_player, "tree_search", scripted_search(script)):
                await iterative_tree_search(SpaceHeuristic(), open_game(), channel, 0, max_depth=4)
            return [channel.get_nowait() for _ in range(channel.qsize())]

        assert asyncio.run(run()) == [LEFT, RIGHT, DOWN]

    def test_stops_on_certain_win(self):
        script = [(LEFT, 1.0), (UP, WIN), (DOWN, 3.0)]

        async def run():
            channel = asyncio.Queue()
            with patch.object(tree_player, "tree_search", scripted_search(script)):
                await iterative_tree_search(SpaceHeuristic(), open_game(), channel, 0, max_depth=4)
            return [channel.get_nowait() for _ in range(channel.qsize())]

        assert asyncio.run(run()) == [LEFT, UP]

    def test_certain_loss_is_not_published(self):
        script = [(LEFT, 1.0), (RIGHT, LOSS), (DOWN, 3.0)]

        async def run():
            channel = asyncio.Queue()
            with patch.object(tree_player, "tree_search", scripted_search(script)):
                await iterative_tree_search(SpaceHeuristic(), open_game(), channel, 0, max_depth=4)
            return [channel.get_nowait() for _ in range(channel.qsize())]

        assert asyncio.run(run()) == [LEFT]

    def test_deadline_keeps_last_completed_depth(self):
        """Depth 3 stalls past the deadline; depth 2's move is used."""
        script = [(LEFT, 1.0), (DOWN, 2.0), None]
        with patch.object(tree_player, "tree_search", scripted_search(script)):
            direction = asyncio.run(
                decide(SpaceHeuristic(), open_game(), 0, timeout_ms=300, latency_ms=0)
            )
        assert direction == DOWN

    def test_deadline_before_first_depth_falls_back(self):
        script = [None]
        game = open_game()
        with patch.object(tree_player, "tree_search", scripted_search(script)):
            direction = asyncio.run(decide(SpaceHeuristic(), game, 0, timeout_ms=300))
        assert direction == game.first_valid_move(0)

    def test_short_budget_uses_fast_path(self):
        """At or below the fast threshold no deepening is attempted."""
        with patch.object(tree_player, "decide_fast", return_value=RIGHT) as fast, \
                patch.object(tree_player, "iterative_tree_search") as deep:
            direction = asyncio.run(
                decide(SpaceHeuristic(), open_game(), 0, timeout_ms=200, latency_ms=60)
            )
        assert direction == RIGHT
        fast.assert_called_once()
        deep.assert_not_called()

    def test_result_matches_deepest_completed_depth(self):
        """With a real search, the answer equals a standalone search of a completed depth."""
        game = open_game()
        heuristic = SpaceHeuristic()
        with patch("config.MAX_DEPTH", 3):
            direction = asyncio.run(decide(heuristic, game, 0, timeout_ms=30000))
        assert direction == Direction(argmax(max_n(game, 2, heuristic)))

    def test_decide_does_not_modify_game(self):
        game = open_game()
        before = game.clone()
        with patch("config.MAX_DEPTH", 3):
            asyncio.run(decide(SpaceHeuristic(), game, 0, timeout_ms=30000))
        assert game.grid == before.grid
        assert game.snakes == before.snakes

    def test_four_snake_opening_respects_deadline(self):
        """Deep searches on a full board are cut off close to the budget."""
        game = init_game(11, 11, 4, random.Random(7))
        start = time.monotonic()
        direction = asyncio.run(decide(SpaceHeuristic(), game, 0, timeout_ms=500))
        elapsed = time.monotonic() - start
        assert elapsed < 1.5
        assert direction in game.valid_moves(0)


class TestEntryPoints:
    """Tests for move() and TreePlayer."""

    @pytest.fixture
    def request_payload(self):
        return {
            "game": {"timeout": 100},
            "turn": 3,
            "board": {
                "width": 7,
                "height": 7,
                "food": [],
                "hazards": [],
                "snakes": [
                    {"id": "them", "health": 90,
                     "body": [{"x": 5, "y": 5}, {"x": 5, "y": 4}, {"x": 5, "y": 3}]},
                    {"id": "me", "health": 90,
                     "body": [{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 1, "y": 1}]},
                ],
            },
            "you": {"id": "me"},
        }

    def test_move_returns_response_for_requesting_snake(self, request_payload):
        request = GameRequest.from_dict(request_payload)
        response = move(SpaceHeuristic(), request, latency_ms=10)
        assert isinstance(response, MoveResponse)
        # "me" is cornered with UP as its only move
        assert response.move == UP
        assert response.to_dict() == {"move": "up"}

    def test_tree_player_step(self):
        game = Game(0, 7, 7, [
            head_first((3, 3), (3, 2), (3, 1)),
            head_first((6, 6), (6, 5), (6, 4)),
        ])
        player = TreePlayer(1, timeout_ms=100)
        direction = player.step(game)
        # snake 1 is boxed in to the left only
        assert direction == LEFT
        assert game.turn == 0
