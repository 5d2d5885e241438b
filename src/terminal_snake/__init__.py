"""Terminal snake: a real-time snake game for the terminal."""

from terminal_snake.board import Board
from terminal_snake.config import GameConfig
from terminal_snake.engine import GameOverReason, GameState, GameStatus
from terminal_snake.errors import (
    BoardFullError,
    InputSourceError,
    SnakeGameError,
    TerminalError,
)
from terminal_snake.food import FoodPlacer
from terminal_snake.loop import GameLoop, play
from terminal_snake.snake import Direction, Point, Snake, opposite

__all__ = [
    "Board",
    "BoardFullError",
    "Direction",
    "FoodPlacer",
    "GameConfig",
    "GameLoop",
    "GameOverReason",
    "GameState",
    "GameStatus",
    "InputSourceError",
    "Point",
    "Snake",
    "SnakeGameError",
    "TerminalError",
    "opposite",
    "play",
]
