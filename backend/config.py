"""
Runtime settings for the search agent and the batch simulator.

Values come from the environment (optionally a local .env file) and fall
back to the defaults below.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{raw}'")


# Iterative deepening explores depths 1..MAX_DEPTH-1
MAX_DEPTH = _int_setting("SEARCH_MAX_DEPTH", 8)

# Remaining budget (ms) at or below which only a depth-1 search is run
FAST_TIMEOUT_MS = _int_setting("SEARCH_FAST_TIMEOUT_MS", 150)

# Per-turn budget used when a snapshot does not carry its own timeout
DEFAULT_TIMEOUT_MS = _int_setting("GAME_TIMEOUT_MS", 500)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
