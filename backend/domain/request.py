"""
Request and response shapes exchanged with the arena.

A request payload describes the whole board at the start of a turn:

    {
        "game": {"timeout": 500},
        "turn": 12,
        "board": {
            "width": 11, "height": 11,
            "food": [{"x": 5, "y": 5}],
            "hazards": [],
            "snakes": [{"id": "a", "health": 90, "body": [{"x": 1, "y": 1}, ...]}]
        },
        "you": {"id": "a"}
    }

Bodies are listed head first, as the arena sends them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import config
from .constants import MAX_HEALTH, MAX_SNAKES, Direction, Vec2D
from .errors import InvalidSnapshotError


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise InvalidSnapshotError(f"Missing '{key}' in {where}")
    return data[key]


def _parse_point(raw: Any, where: str) -> Vec2D:
    try:
        return Vec2D(int(raw["x"]), int(raw["y"]))
    except (KeyError, TypeError, ValueError):
        raise InvalidSnapshotError(f"Invalid coordinate {raw!r} in {where}")


@dataclass
class SnakeData:
    id: str
    health: int
    # head first
    body: List[Vec2D]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnakeData":
        snake_id = str(_require(data, "id", "snake"))
        where = f"snake '{snake_id}'"
        try:
            health = int(_require(data, "health", where))
        except (TypeError, ValueError):
            raise InvalidSnapshotError(f"Invalid health in {where}")
        body = [_parse_point(p, where) for p in _require(data, "body", where)]
        return cls(id=snake_id, health=health, body=body)


@dataclass
class GameRequest:
    width: int
    height: int
    snakes: List[SnakeData]
    you: str
    turn: int = 0
    food: List[Vec2D] = field(default_factory=list)
    hazards: List[Vec2D] = field(default_factory=list)
    timeout: int = config.DEFAULT_TIMEOUT_MS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRequest":
        """
        Parse and validate an arena payload.

        Raises:
            InvalidSnapshotError: if the payload is incomplete or inconsistent.
        """
        board = _require(data, "board", "request")
        you = _require(data, "you", "request")
        game = data.get("game") or {}

        try:
            width = int(_require(board, "width", "board"))
            height = int(_require(board, "height", "board"))
            turn = int(data.get("turn", 0))
            timeout = int(game.get("timeout", config.DEFAULT_TIMEOUT_MS))
        except (TypeError, ValueError) as e:
            raise InvalidSnapshotError(f"Invalid board header: {e}")

        request = cls(
            width=width,
            height=height,
            snakes=[SnakeData.from_dict(s) for s in _require(board, "snakes", "board")],
            you=str(_require(you, "id", "you")),
            turn=turn,
            food=[_parse_point(p, "food") for p in board.get("food") or []],
            hazards=[_parse_point(p, "hazards") for p in board.get("hazards") or []],
            timeout=timeout,
        )
        request.validate()
        return request

    def validate(self) -> None:
        """Reject snapshots that the state machine cannot represent."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidSnapshotError(f"Invalid board size {self.width}x{self.height}")
        if len(self.snakes) > MAX_SNAKES:
            raise InvalidSnapshotError(
                f"At most {MAX_SNAKES} snakes are supported, got {len(self.snakes)}"
            )
        ids = [s.id for s in self.snakes]
        if len(set(ids)) != len(ids):
            raise InvalidSnapshotError(f"Duplicate snake ids in {ids}")
        if self.you not in {s.id for s in self.snakes}:
            raise InvalidSnapshotError(f"Snake '{self.you}' is not on the board")

        def check(p: Vec2D, where: str):
            if not (0 <= p.x < self.width and 0 <= p.y < self.height):
                raise InvalidSnapshotError(f"{where} at {tuple(p)} is out of bounds")

        for snake in self.snakes:
            if not snake.body:
                raise InvalidSnapshotError(f"Snake '{snake.id}' has an empty body")
            if not 0 <= snake.health <= MAX_HEALTH:
                raise InvalidSnapshotError(f"Snake '{snake.id}' has invalid health {snake.health}")
            for p in snake.body:
                check(p, f"Snake '{snake.id}'")
        for p in self.food:
            check(p, "Food")
        for p in self.hazards:
            check(p, "Hazard")

    def ordered_snakes(self) -> List[SnakeData]:
        """Snakes with `you` first, the others in payload order."""
        mine = [s for s in self.snakes if s.id == self.you]
        return mine + [s for s in self.snakes if s.id != self.you]


@dataclass
class MoveResponse:
    move: Direction

    def to_dict(self) -> Dict[str, str]:
        return {"move": self.move.wire_name}
