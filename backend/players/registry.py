"""
Registry of player implementations.

Maps agent names used on the command line (e.g. 'tree', 'random') to
player classes. To add a player, write the class in its own module and
add a loader entry to PLAYER_LOADERS.
"""

from typing import Callable, Dict, List, Type

from .base import Player


# Classes are imported on lookup
def _get_tree_player() -> Type[Player]:
    from .tree_player import TreePlayer
    return TreePlayer


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


PLAYER_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "tree": _get_tree_player,
    "random": _get_random_player,
}

AVAILABLE_PLAYERS = list(PLAYER_LOADERS.keys())


def get_player_class(name: str) -> Type[Player]:
    """
    Get the player class for a given agent name.

    Raises:
        ValueError: If name is not recognized.
    """
    key = (name or "").strip().lower()

    if key not in PLAYER_LOADERS:
        available = ", ".join(AVAILABLE_PLAYERS)
        raise ValueError(f"Unknown player '{name}'. Available players: {available}")

    return PLAYER_LOADERS[key]()


def list_players() -> List[Dict[str, str]]:
    """
    Return metadata about all available players.
    """
    return [
        {"key": "tree", "description": "Iterative deepening max-n search with a flood-fill heuristic"},
        {"key": "random", "description": "Uniformly random direction, for comparison play"},
    ]
