"""Tests for the Grid module."""

import pytest

from grid_snake.grid import Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 50
        assert grid.height == 50
        assert grid.size == 2500

    def test_custom_dimensions(self):
        grid = Grid(width=10, height=8)
        assert grid.width == 10
        assert grid.height == 8

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 2"):
            Grid(width=1, height=4)
        with pytest.raises(ValueError, match="at least 2"):
            Grid(width=4, height=1)


class TestGridBounds:
    def test_in_bounds(self):
        grid = Grid(width=5, height=5)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 4)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, 5)
        assert not grid.in_bounds(5, 0)

    def test_is_out_of_bounds(self):
        grid = Grid(width=6, height=3)
        assert not grid.is_out_of_bounds((2, 5))
        assert grid.is_out_of_bounds((3, 0))
        assert grid.is_out_of_bounds((0, 6))
        assert grid.is_out_of_bounds((0, -1))
        assert grid.is_out_of_bounds((-1, 0))


class TestGridFreeCells:
    def test_all_free(self):
        grid = Grid(width=4, height=3)
        free = grid.free_cells([])
        assert len(free) == 12
        assert free[0] == (0, 0)
        assert free[-1] == (2, 3)

    def test_excludes_occupied(self):
        grid = Grid(width=4, height=4)
        free = grid.free_cells([(0, 0), (1, 1)])
        assert len(free) == 14
        assert (0, 0) not in free
        assert (1, 1) not in free

    def test_ignores_out_of_bounds_entries(self):
        grid = Grid(width=2, height=2)
        assert len(grid.free_cells([(-1, 0), (5, 5)])) == 4

    def test_full_board(self):
        grid = Grid(width=2, height=2)
        assert grid.free_cells([(0, 0), (0, 1), (1, 0), (1, 1)]) == []

    def test_returns_python_ints(self):
        grid = Grid(width=3, height=3)
        row, col = grid.free_cells([])[0]
        assert type(row) is int
        assert type(col) is int


class TestGridSerialization:
    def test_to_dict(self):
        assert Grid(width=5, height=7).to_dict() == {"width": 5, "height": 7}
