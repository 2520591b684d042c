"""
Player implementations.

This module contains the player abstraction and the implementations
that control snake movement decisions.
"""

from .base import Player
from .random_player import RandomPlayer
from .tree_player import TreePlayer
from .registry import get_player_class, list_players, AVAILABLE_PLAYERS

__all__ = [
    'Player',
    'RandomPlayer',
    'TreePlayer',
    'get_player_class',
    'list_players',
    'AVAILABLE_PLAYERS',
]
