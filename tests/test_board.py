"""Tests for the Board module."""

import pytest

from terminal_snake.board import Board
from terminal_snake.snake import Point


class TestBoardInit:
    def test_default_dimensions(self):
        board = Board()
        assert board.width == 20
        assert board.height == 15
        assert board.area == 300

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Board(width=3, height=10)

    def test_center(self):
        assert Board(10, 8).center == Point(5, 4)


class TestBoardBounds:
    def test_in_bounds(self):
        board = Board(10, 8)
        assert board.in_bounds(Point(0, 0))
        assert board.in_bounds(Point(9, 7))
        assert not board.in_bounds(Point(10, 0))
        assert not board.in_bounds(Point(0, 8))
        assert not board.in_bounds(Point(-1, 3))


class TestBoardFreeCells:
    def test_all_free(self):
        board = Board(4, 4)
        assert len(board.free_cells([])) == 16

    def test_excludes_occupied(self):
        board = Board(4, 4)
        occupied = [Point(0, 0), Point(3, 2)]
        free = board.free_cells(occupied)
        assert len(free) == 14
        assert Point(0, 0) not in free
        assert Point(3, 2) not in free
        assert Point(2, 3) in free

    def test_ignores_out_of_bounds(self):
        board = Board(4, 4)
        assert len(board.free_cells([Point(-1, 0), Point(9, 9)])) == 16

    def test_full_board(self):
        board = Board(4, 4)
        everything = [Point(x, y) for x in range(4) for y in range(4)]
        assert board.free_cells(everything) == []
