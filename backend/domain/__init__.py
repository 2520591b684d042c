"""
Domain entities for the arena game engine.

This module contains the core game entities that are independent of
infrastructure concerns (search, players, simulation).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, MAX_SNAKES, Direction, Vec2D
from .errors import InvalidSnapshotError
from .grid import Cell, CellType, Grid
from .snake import Snake
from .request import GameRequest, MoveResponse, SnakeData
from .game import Game, Outcome

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'MAX_SNAKES',
    'Direction', 'Vec2D',
    'InvalidSnapshotError',
    'Cell', 'CellType', 'Grid',
    'Snake',
    'GameRequest', 'MoveResponse', 'SnakeData',
    'Game', 'Outcome',
]
