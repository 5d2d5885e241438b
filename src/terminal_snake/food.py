"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from terminal_snake.errors import BoardFullError
from terminal_snake.snake import Point

if TYPE_CHECKING:
    from terminal_snake.board import Board
    from terminal_snake.snake import Snake

logger = logging.getLogger(__name__)


class FoodPlacer:
    """Picks a uniformly random board cell the snake does not occupy.

    Rejection sampling is tried first. After ``max_attempts`` misses the
    free cells are enumerated and one is chosen directly, so placement
    terminates however crowded the board is.
    """

    def __init__(
        self,
        board: Board,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 0:
            raise ValueError("max_attempts must be non-negative.")
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = (
            max_attempts if max_attempts is not None else board.area
        )

    def place(self, snake: Snake) -> Point:
        """Return a new food point outside the snake's body."""
        if len(snake) >= self.board.area:
            raise BoardFullError(self.board.width, self.board.height)

        for _ in range(self.max_attempts):
            point = Point(
                int(self.rng.integers(0, self.board.width)),
                int(self.rng.integers(0, self.board.height)),
            )
            if not snake.contains_point(point):
                return point

        free = self.board.free_cells(snake.body)
        if not free:
            raise BoardFullError(self.board.width, self.board.height)
        logger.debug(
            "Rejection sampling missed %d times; choosing among %d free cells.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(0, len(free)))]
