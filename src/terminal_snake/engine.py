"""Tick-based game state composing board, snake, and food logic."""

from __future__ import annotations

import enum
import logging

import numpy as np

from terminal_snake.board import Board
from terminal_snake.config import GameConfig
from terminal_snake.errors import BoardFullError
from terminal_snake.food import FoodPlacer
from terminal_snake.snake import Direction, Point, Snake

logger = logging.getLogger(__name__)


class GameStatus(enum.Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameOverReason(enum.Enum):
    """Why a session left the RUNNING state."""

    WALL = "wall"
    SELF = "self"
    QUIT = "quit"
    BOARD_FULL = "board_full"


def interval_for(speed: int, config: GameConfig) -> float:
    """Return the tick interval in seconds for a speed level.

    Level 0 ticks every ``max_interval_ms``; ``max_speed`` ticks every
    ``min_interval_ms``.
    """
    speed = max(0, min(speed, config.max_speed))
    span = config.max_interval_ms - config.min_interval_ms
    ms = config.min_interval_ms + (span / config.max_speed) * (
        config.max_speed - speed
    )
    return ms / 1000.0


class GameState:
    """Single-snake game state advanced one tick at a time.

    The state owns the board, the snake, and the current food point.
    Collisions are recorded as a transition to ``GAME_OVER``; nothing
    leaves that state.
    """

    def __init__(
        self,
        config: GameConfig,
        board: Board,
        snake: Snake,
        placer: FoodPlacer,
    ) -> None:
        self.config = config
        self.board = board
        self.snake = snake
        self.placer = placer
        self.food: Point | None = None
        self.score = 0
        self.speed = 0
        self.tick = 0
        self.status = GameStatus.RUNNING
        self.reason: GameOverReason | None = None

    @classmethod
    def new(
        cls,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
        direction: Direction | None = None,
    ) -> GameState:
        """Start a session: centered snake, random heading, first food."""
        config = config if config is not None else GameConfig()
        rng = rng if rng is not None else np.random.default_rng(config.seed)
        board = Board(config.board_width, config.board_height)
        if direction is None:
            direction = list(Direction)[int(rng.integers(0, len(Direction)))]
        snake = Snake(board.center, config.initial_length, direction)
        state = cls(config, board, snake, FoodPlacer(board, rng=rng))
        state.place_food()
        logger.info(
            "New %dx%d game, heading %s.",
            board.width, board.height, direction.name.lower(),
        )
        return state

    @property
    def done(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def interval(self) -> float:
        return interval_for(self.speed, self.config)

    @property
    def points_per_level(self) -> int:
        return max(1, self.board.area // self.config.max_speed)

    def place_food(self) -> Point:
        """Relocate the food to a random free cell."""
        self.food = self.placer.place(self.snake)
        return self.food

    def turn(
        self,
        direction: Direction,
        heading_at_tick_start: Direction | None = None,
    ) -> bool:
        """Apply a requested heading change.

        The request is checked against the heading the tick started with,
        so two quick turns within one tick cannot reverse into the neck.
        Returns whether the heading changed.
        """
        if self.done:
            return False
        reference = (
            heading_at_tick_start
            if heading_at_tick_start is not None
            else self.snake.direction()
        )
        if direction in (reference, reference.opposite):
            return False
        self.snake.set_direction(direction)
        return True

    def has_collided_with_wall(self) -> bool:
        """Check whether the next move would leave the board."""
        return not self.board.in_bounds(self.snake.next_head())

    def has_bitten_itself(self) -> bool:
        """Check whether the next move would enter the body.

        The current head and the tail cell are excluded: the tail vacates
        this tick, so moving into it is safe.
        """
        next_head = self.snake.next_head()
        body = self.snake.body_points()
        return next_head in body[1:-1]

    def step(self) -> None:
        """Advance the game by one tick."""
        if self.done:
            return
        self.tick += 1

        if self.has_collided_with_wall():
            self._end(GameOverReason.WALL)
            return
        if self.has_bitten_itself():
            self._end(GameOverReason.SELF)
            return

        if self.snake.next_head() != self.food:
            self.snake.slither()
            return

        self.snake.grow()
        self.score += 1
        if self.score % self.points_per_level == 0 and (
            self.speed < self.config.max_speed
        ):
            self.speed += 1
            logger.debug("Speed level %d at score %d.", self.speed, self.score)
        try:
            self.place_food()
        except BoardFullError:
            self.food = None
            self._end(GameOverReason.BOARD_FULL)

    def quit(self) -> None:
        """End the session at the player's request."""
        if not self.done:
            self._end(GameOverReason.QUIT)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "speed": self.speed,
            "status": self.status.value,
            "reason": self.reason.value if self.reason else None,
            "board": self.board.to_dict(),
            "snake": self.snake.to_dict(),
            "food": list(self.food) if self.food is not None else None,
        }

    def _end(self, reason: GameOverReason) -> None:
        self.status = GameStatus.GAME_OVER
        self.reason = reason
        logger.info(
            "Game over (%s) at tick %d with score %d.",
            reason.value, self.tick, self.score,
        )
