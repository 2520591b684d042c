"""
Game tree search for choosing moves.
"""

from .heuristic import WIN, LOSS, Heuristic, SpaceHeuristic
from .maxn import argmax, max_n, async_max_n

__all__ = [
    'WIN', 'LOSS',
    'Heuristic', 'SpaceHeuristic',
    'argmax', 'max_n', 'async_max_n',
]
