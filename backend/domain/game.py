"""
Game entity - the authoritative state machine for one arena game.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set

from .constants import MAX_HEALTH, MAX_SNAKES, Direction, Vec2D
from .errors import InvalidSnapshotError
from .grid import CellType, Grid
from .request import GameRequest
from .snake import Snake


@dataclass(frozen=True)
class Outcome:
    """
    Derived game result. `winner` is only set for a finished game with
    exactly one survivor.
    """

    finished: bool
    winner: Optional[int] = None

    @property
    def is_draw(self) -> bool:
        return self.finished and self.winner is None

    def __repr__(self):
        if not self.finished:
            return "Outcome.ONGOING"
        if self.winner is None:
            return "Outcome.DRAW"
        return f"Outcome.winner({self.winner})"

    @classmethod
    def won_by(cls, snake_id: int) -> "Outcome":
        return cls(True, snake_id)


Outcome.ONGOING = Outcome(False)
Outcome.DRAW = Outcome(True)


class Game:
    """
    Grid plus the living snakes and the turn counter.

    A cell is OCCUPIED exactly when it belongs to the body of a living
    snake. Food and hazards are placed from outside; `step` only clears
    food that gets eaten.
    """

    __slots__ = ("turn", "snakes", "grid")

    def __init__(
        self,
        turn: int,
        width: int,
        height: int,
        snakes: Iterable[Snake],
        food: Iterable[Vec2D] = (),
        hazards: Iterable[Vec2D] = (),
    ):
        if width <= 0 or height <= 0:
            raise InvalidSnapshotError(f"Invalid board size {width}x{height}")

        self.turn = turn
        self.grid = Grid(width, height)
        self.snakes: List[Snake] = []

        for i, snake in enumerate(snakes):
            if i >= MAX_SNAKES:
                raise InvalidSnapshotError(f"At most {MAX_SNAKES} snakes are supported")
            if not snake.body:
                raise InvalidSnapshotError(f"Snake {i} has an empty body")
            if not 0 <= snake.health <= MAX_HEALTH:
                raise InvalidSnapshotError(f"Snake {i} has invalid health {snake.health}")
            for p in snake.body:
                if not self.grid.has(p):
                    raise InvalidSnapshotError(f"Snake {i} at {tuple(p)} is out of bounds")
            self.snakes.append(Snake(snake.body, snake.health, i))

        for p in list(food) + list(hazards):
            if not self.grid.has(p):
                raise InvalidSnapshotError(f"Food or hazard at {tuple(p)} is out of bounds")

        self.grid.add_food(food)
        self.grid.add_hazards(hazards)
        for snake in self.snakes:
            self.grid.add_snake(snake.body)

    @classmethod
    def from_request(cls, request: GameRequest) -> "Game":
        """
        Build a game from an arena snapshot. The requesting snake becomes
        id 0, the others follow in payload order. Bodies are reversed into
        tail-to-head order.
        """
        request.validate()
        snakes = [
            Snake(reversed(s.body), s.health) for s in request.ordered_snakes()
        ]
        return cls(
            request.turn,
            request.width,
            request.height,
            snakes,
            request.food,
            request.hazards,
        )

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def clone(self) -> "Game":
        game = Game.__new__(Game)
        game.turn = self.turn
        game.grid = self.grid.copy()
        game.snakes = [s.copy() for s in self.snakes]
        return game

    def snake(self, snake_id: int) -> Optional[Snake]:
        for s in self.snakes:
            if s.id == snake_id:
                return s
        return None

    def snake_is_alive(self, snake_id: int) -> bool:
        return any(s.id == snake_id for s in self.snakes)

    def outcome(self) -> Outcome:
        if not self.snakes:
            return Outcome.DRAW
        if len(self.snakes) == 1:
            return Outcome.won_by(self.snakes[0].id)
        return Outcome.ONGOING

    def valid_moves(self, snake_id: int) -> Set[Direction]:
        """
        Directions leading onto an in-bounds cell that is not occupied
        right now (before any tail moves).
        """
        snake = self.snake(snake_id)
        if snake is None:
            return set()
        moves = set()
        for d in Direction:
            p = snake.head.apply(d)
            if self.grid.has(p) and self.grid[p].t != CellType.OCCUPIED:
                moves.add(d)
        return moves

    def first_valid_move(self, snake_id: int) -> Optional[Direction]:
        """The lowest-indexed valid direction, if there is one."""
        moves = self.valid_moves(snake_id)
        return min(moves) if moves else None

    def step(self, moves: Sequence[Direction]) -> None:
        """
        Advance all living snakes simultaneously.

        `moves` is indexed by snake id. The phases run in a fixed order:
        release tails, advance heads (eating or starving), resolve
        head-to-head collisions, then commit survivors and clear the
        bodies of eliminated snakes.
        """
        grid = self.grid
        heads = {snake.id: snake.head for snake in self.snakes}

        # release tails
        for snake in self.snakes:
            tail = snake.body.popleft()
            if not snake.body or snake.body[0] != tail:
                grid.set_type(tail, CellType.FREE)

        survivors = [None] * MAX_SNAKES

        # move heads, eat or starve
        for snake in self.snakes:
            old_head = heads[snake.id]
            head = old_head.apply(moves[snake.id])
            if snake.health > 0 and grid.has(head) and grid[head].t != CellType.OCCUPIED:
                if grid[head].t == CellType.FOOD:
                    snake.body.appendleft(snake.body[0] if snake.body else old_head)
                    snake.health = MAX_HEALTH
                else:
                    snake.health -= 1
                snake.body.append(head)
                survivors[snake.id] = (head, len(snake.body))
            elif not snake.body:
                snake.body.append(old_head)

        # head to head, every pair is judged on the tentative survivors
        tentative = list(survivors)
        for i in range(MAX_SNAKES - 1):
            for j in range(i + 1, MAX_SNAKES):
                if tentative[i] is None or tentative[j] is None:
                    continue
                (head_i, len_i), (head_j, len_j) = tentative[i], tentative[j]
                if head_i != head_j:
                    continue
                if len_i < len_j:
                    survivors[i] = None
                elif len_i > len_j:
                    survivors[j] = None
                else:
                    survivors[i] = None
                    survivors[j] = None

        # commit: clear the eliminated first, a loser's head may share the
        # winner's cell
        living = []
        for snake in self.snakes:
            if survivors[snake.id] is None:
                for p in snake.body:
                    grid.set_type(p, CellType.FREE)
            else:
                living.append(snake)
        for snake in living:
            grid.set_type(snake.head, CellType.OCCUPIED)
            # a single segment snake that ate regrows onto its old head
            grid.set_type(snake.tail, CellType.OCCUPIED)
        self.snakes = living
        self.turn += 1

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        o = food
        x = hazard (when empty)
        # = snake body
        0,1,2,3 = snake head (showing snake id)
        (0,0) is at the bottom left, x-axis labels at the bottom
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for y in range(self.height):
            for x in range(self.width):
                cell = self.grid[Vec2D(x, y)]
                if cell.t == CellType.FOOD:
                    board[y][x] = 'o'
                elif cell.t == CellType.OCCUPIED:
                    board[y][x] = '#'
                elif cell.hazard:
                    board[y][x] = 'x'

        for snake in self.snakes:
            board[snake.head.y][snake.head.x] = str(snake.id)

        result = []
        # Print rows in reverse order (bottom to top)
        for y in range(self.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<Game turn={self.turn} {self.width}x{self.height} "
            f"snakes={[(s.id, s.health, len(s)) for s in self.snakes]}>"
        )
