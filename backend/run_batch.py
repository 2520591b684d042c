import argparse
import json
import logging
import random
import time
from typing import List, Sequence

import config
from domain.constants import MAX_SNAKES
from domain.game import Game
from domain.request import GameRequest
from players.registry import AVAILABLE_PLAYERS, get_player_class, list_players
from services.trueskill_engine import TrueSkillEngine
from simulate import init_game, play_game


logger = logging.getLogger(__name__)


def parse_request(raw: str) -> GameRequest:
    try:
        return GameRequest.from_dict(json.loads(raw))
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON for --init: {e}")
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    agents = "\n".join(f"  {p['key']:<8} {p['description']}" for p in list_players())
    parser = argparse.ArgumentParser(
        description="Simulate games between agents and tally their wins.",
        epilog=f"agents:\n{agents}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--timeout", type=int, default=config.DEFAULT_TIMEOUT_MS,
                        help="Time each snake has for a turn in ms "
                             f"(default: {config.DEFAULT_TIMEOUT_MS}).")
    parser.add_argument("--width", type=int, default=11,
                        help="Width of the board (default: 11).")
    parser.add_argument("--height", type=int, default=11,
                        help="Height of the board (default: 11).")
    parser.add_argument("--food-rate", type=float, default=0.15,
                        help="Chance new food spawns each turn (default: 0.15).")
    parser.add_argument("-s", "--shrink-turns", type=int, default=25,
                        help="Number of turns after which the hazard expands (default: 25).")
    parser.add_argument("-g", "--game-count", type=int, default=1,
                        help="Number of games that are played (default: 1).")
    parser.add_argument("--swap", action="store_true",
                        help="Rotate agent positions to get more accurate results.")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed for the random number generator (0 = random).")
    parser.add_argument("--init", type=parse_request, default=None,
                        help="Start configuration as an arena request JSON.")
    parser.add_argument("agents", nargs="+", choices=AVAILABLE_PLAYERS,
                        help="Agents to play, one per snake.")
    return parser


def run_games(
    agents: Sequence[str],
    game_count: int,
    width: int,
    height: int,
    timeout: int,
    food_rate: float,
    shrink_turns: int,
    swap: bool,
    seed: int,
    init: GameRequest = None,
    engine: TrueSkillEngine = None,
) -> List[int]:
    """
    Play `game_count` games (per rotation when swapping) and return wins
    per agent in the original agent order.
    """
    if len(agents) > MAX_SNAKES:
        raise ValueError(f"Only up to {MAX_SNAKES} snakes are supported")
    if init is not None and len(init.snakes) != len(agents):
        raise ValueError(
            f"--init has {len(init.snakes)} snakes but {len(agents)} agents were given"
        )

    agents = list(agents)
    wins = [0] * len(agents)
    start = time.monotonic()

    for _ in range(len(agents)):
        rng = random.Random(seed) if seed else random.Random()

        for i in range(game_count):
            if init is not None:
                game = Game.from_request(init)
            else:
                game = init_game(width, height, len(agents), rng)

            players = []
            for slot, name in enumerate(agents):
                player_class = get_player_class(name)
                if name == "random":
                    players.append(player_class(slot, rng=random.Random(rng.random())))
                else:
                    players.append(player_class(slot, timeout_ms=timeout))

            outcome = play_game(players, game, food_rate, shrink_turns, rng)
            if outcome.winner is not None:
                wins[outcome.winner] += 1
            if engine is not None:
                engine.rate_outcome(agents, outcome)

            logger.warning("Finish Game: %d %dms", i, (time.monotonic() - start) * 1000)

        if not swap:
            break
        # Swap agents; after a full rotation the original order is restored
        wins = wins[1:] + wins[:1]
        agents = agents[1:] + agents[:1]

    return wins


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(args.agents) > MAX_SNAKES:
        raise SystemExit(f"Only up to {MAX_SNAKES} snakes are supported")
    logger.info("agents: %s", args.agents)

    engine = TrueSkillEngine()
    wins = run_games(
        args.agents,
        game_count=args.game_count,
        width=args.width,
        height=args.height,
        timeout=args.timeout,
        food_rate=args.food_rate,
        shrink_turns=args.shrink_turns,
        swap=args.swap,
        seed=args.seed,
        init=args.init,
        engine=engine,
    )

    print(f"Agents: {args.agents}")
    print(f"Result: {wins}")
    print("Ratings:")
    for r in engine.leaderboard():
        print(f"  {r.name}: mu={r.rating.mu:.3f} sigma={r.rating.sigma:.3f} "
              f"exposed={r.exposed:.3f} ({r.wins}/{r.games} wins)")


if __name__ == "__main__":
    main()
