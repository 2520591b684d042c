from __future__ import annotations

"""
TrueSkill rating engine for simulated games.

Keeps one rating per agent name in memory and updates them from game
outcomes: the winner ranks first, every other participant ties behind
it; a draw ties everyone.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from trueskill import TrueSkill, Rating

from domain.game import Outcome

# Fixed configuration for this deployment (keep in code, not env vars)
DEFAULT_MU = 25.0
DEFAULT_SIGMA = DEFAULT_MU / 3.0  # ~8.333
DEFAULT_BETA = DEFAULT_MU / 6.0
DEFAULT_TAU = 0.5
DEFAULT_DRAW_PROBABILITY = 0.1


logger = logging.getLogger(__name__)


@dataclass
class AgentRating:
    name: str
    rating: Rating
    games: int = 0
    wins: int = 0

    @property
    def exposed(self) -> float:
        return self.rating.mu - 3.0 * self.rating.sigma


class TrueSkillEngine:
    """
    Wraps the TrueSkill environment and the per-agent rating table.
    """

    def __init__(self, env: TrueSkill | None = None) -> None:
        self.env = env or TrueSkill(
            mu=DEFAULT_MU,
            sigma=DEFAULT_SIGMA,
            beta=DEFAULT_BETA,
            tau=DEFAULT_TAU,
            draw_probability=DEFAULT_DRAW_PROBABILITY,
        )
        self.ratings: Dict[str, AgentRating] = {}

    def get(self, name: str) -> AgentRating:
        if name not in self.ratings:
            self.ratings[name] = AgentRating(name=name, rating=self.env.create_rating())
        return self.ratings[name]

    def rate_outcome(self, names: Sequence[str], outcome: Outcome) -> List[AgentRating]:
        """
        Apply one finished game. `names[i]` is the agent that played snake i.

        Agents appearing more than once in a game (self-play) are rated
        once per game, using their best result.
        """
        if not outcome.finished:
            raise ValueError("Cannot rate a game that has not finished")

        ranks: Dict[str, int] = {}
        for slot, name in enumerate(names):
            rank = 0 if outcome.winner == slot else 1
            ranks[name] = min(rank, ranks.get(name, rank))

        if outcome.is_draw:
            ranks = {name: 0 for name in ranks}

        if len(ranks) < 2:
            logger.info("Game with fewer than 2 distinct agents; skipping TrueSkill update.")
            return []

        participants = [self.get(name) for name in ranks]
        teams = [[p.rating] for p in participants]
        rated_teams = self.env.rate(teams, ranks=[ranks[p.name] for p in participants])

        for participant, rated_team in zip(participants, rated_teams):
            participant.rating = rated_team[0]
            participant.games += 1
            if ranks[participant.name] == 0 and not outcome.is_draw:
                participant.wins += 1
            logger.debug(
                "Updated TrueSkill for %s (mu=%.3f, sigma=%.3f, exposed=%.3f)",
                participant.name, participant.rating.mu, participant.rating.sigma, participant.exposed,
            )

        return participants

    def leaderboard(self) -> List[AgentRating]:
        """Agents sorted by conservative rating, best first."""
        return sorted(self.ratings.values(), key=lambda r: r.exposed, reverse=True)
