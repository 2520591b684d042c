"""
Errors raised while turning external input into game state.
"""


class InvalidSnapshotError(ValueError):
    """A game snapshot is malformed or inconsistent and cannot be played."""
