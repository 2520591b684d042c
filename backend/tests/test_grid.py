"""
Tests for the Grid entity and board coordinates.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import Direction, Vec2D
from domain.grid import Cell, CellType, Grid


class TestDirection:
    """Tests for Direction and Vec2D arithmetic."""

    def test_direction_indices(self):
        """Directions map to the array indices 0-3."""
        assert [int(d) for d in Direction] == [0, 1, 2, 3]

    def test_apply_moves_one_cell(self):
        """Up increases y, right increases x."""
        p = Vec2D(3, 3)
        assert p.apply(Direction.UP) == Vec2D(3, 4)
        assert p.apply(Direction.DOWN) == Vec2D(3, 2)
        assert p.apply(Direction.LEFT) == Vec2D(2, 3)
        assert p.apply(Direction.RIGHT) == Vec2D(4, 3)

    def test_vec_addition(self):
        assert Vec2D(1, 2) + Vec2D(-1, 3) == Vec2D(0, 5)

    def test_wire_names(self):
        assert Direction.LEFT.wire_name == "left"


class TestGrid:
    """Tests for the Grid class."""

    def test_new_grid_is_free(self):
        grid = Grid(3, 2)
        assert len(grid.cells) == 6
        assert all(cell == Cell(CellType.FREE, False) for cell in grid.cells)

    def test_has_bounds(self):
        grid = Grid(3, 2)
        assert grid.has(Vec2D(0, 0))
        assert grid.has(Vec2D(2, 1))
        assert not grid.has(Vec2D(3, 0))
        assert not grid.has(Vec2D(0, 2))
        assert not grid.has(Vec2D(-1, 0))

    def test_out_of_bounds_index_raises(self):
        """Indexing outside the board is a programming error."""
        grid = Grid(3, 3)
        with pytest.raises(IndexError):
            grid[Vec2D(3, 0)]
        with pytest.raises(IndexError):
            grid[Vec2D(0, -1)] = Cell(CellType.FOOD)

    def test_add_snake_and_food(self):
        grid = Grid(5, 5)
        grid.add_snake([Vec2D(1, 1), Vec2D(1, 2)])
        grid.add_food([Vec2D(3, 3)])
        assert grid[Vec2D(1, 1)].t == CellType.OCCUPIED
        assert grid[Vec2D(1, 2)].t == CellType.OCCUPIED
        assert grid[Vec2D(3, 3)].t == CellType.FOOD
        assert grid[Vec2D(0, 0)].t == CellType.FREE

    def test_hazard_is_independent_of_type(self):
        """A hazardous cell keeps its type and can still hold food."""
        grid = Grid(4, 4)
        p = Vec2D(2, 2)
        grid.add_hazards([p])
        assert grid[p] == Cell(CellType.FREE, True)
        grid.set_type(p, CellType.FOOD)
        assert grid[p] == Cell(CellType.FOOD, True)
        grid.set_type(p, CellType.FREE)
        assert grid[p].hazard is True

    def test_positions_by_type(self):
        grid = Grid(3, 3)
        grid.add_food([Vec2D(2, 0), Vec2D(0, 1)])
        assert grid.positions(CellType.FOOD) == [Vec2D(2, 0), Vec2D(0, 1)]

    def test_copy_is_independent(self):
        grid = Grid(3, 3)
        copy = grid.copy()
        copy.set_type(Vec2D(1, 1), CellType.OCCUPIED)
        assert grid[Vec2D(1, 1)].t == CellType.FREE
        assert copy != grid
