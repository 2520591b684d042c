"""
Grid entity - the dense cell array underneath a game.
"""

from enum import IntEnum
from typing import Iterable, List, NamedTuple

from .constants import Vec2D


class CellType(IntEnum):
    FREE = 0
    FOOD = 1
    OCCUPIED = 2


class Cell(NamedTuple):
    """
    State of one board position. The hazard flag is independent of the
    cell type: a hazardous cell may still be free or hold food.
    """

    t: CellType = CellType.FREE
    hazard: bool = False


# All six possible cells, so that writes never allocate
_CELLS = {(t, h): Cell(t, h) for t in CellType for h in (False, True)}

FREE_CELL = _CELLS[(CellType.FREE, False)]


class Grid:
    """
    Row-major array of cells, width * height long.

    Coordinates outside the board are not valid keys. Callers check with
    `has` before indexing; indexing out of bounds raises IndexError.
    """

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: List[Cell] = None):
        self.width = width
        self.height = height
        self.cells = cells if cells is not None else [FREE_CELL] * (width * height)

    def has(self, p: Vec2D) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def _index(self, p: Vec2D) -> int:
        if not self.has(p):
            raise IndexError(f"Coordinate {tuple(p)} outside {self.width}x{self.height} grid")
        return p.y * self.width + p.x

    def __getitem__(self, p: Vec2D) -> Cell:
        return self.cells[self._index(p)]

    def __setitem__(self, p: Vec2D, cell: Cell) -> None:
        self.cells[self._index(p)] = cell

    def set_type(self, p: Vec2D, t: CellType) -> None:
        """Change the cell type at `p`, keeping its hazard flag."""
        i = self._index(p)
        self.cells[i] = _CELLS[(t, self.cells[i].hazard)]

    def set_hazard(self, p: Vec2D, hazard: bool = True) -> None:
        i = self._index(p)
        self.cells[i] = _CELLS[(self.cells[i].t, hazard)]

    def add_snake(self, body: Iterable[Vec2D]) -> None:
        for p in body:
            self.set_type(p, CellType.OCCUPIED)

    def add_food(self, points: Iterable[Vec2D]) -> None:
        for p in points:
            self.set_type(p, CellType.FOOD)

    def add_hazards(self, points: Iterable[Vec2D]) -> None:
        for p in points:
            self.set_hazard(p, True)

    def positions(self, t: CellType) -> List[Vec2D]:
        """All coordinates whose cell has the given type, row by row."""
        return [
            Vec2D(i % self.width, i // self.width)
            for i, cell in enumerate(self.cells)
            if cell.t == t
        ]

    def copy(self) -> "Grid":
        # Cells are immutable, a shallow list copy is enough
        return Grid(self.width, self.height, list(self.cells))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"
