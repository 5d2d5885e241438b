"""Real-time driver: tick pacing, input polling, and rendering."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from terminal_snake.config import GameConfig
from terminal_snake.engine import GameState
from terminal_snake.errors import InputSourceError, TerminalError
from terminal_snake.snake import Direction
from terminal_snake.terminal import (
    BORDER_COLS,
    CHROME_ROWS,
    KeyCode,
    KeyEvent,
    Modifier,
    Terminal,
)

logger = logging.getLogger(__name__)

# Curses timeouts are whole milliseconds; shorter waits end the tick.
POLL_RESOLUTION = 0.001


@dataclass(frozen=True)
class Turn:
    direction: Direction


@dataclass(frozen=True)
class Quit:
    pass


Command = Turn | Quit

_TURNS: dict[KeyCode, Direction] = {
    KeyCode.UP: Direction.UP,
    KeyCode.RIGHT: Direction.RIGHT,
    KeyCode.DOWN: Direction.DOWN,
    KeyCode.LEFT: Direction.LEFT,
}


def command_for(event: KeyEvent | None) -> Command | None:
    """Map a key event to a game command, or ``None`` to ignore it."""
    if event is None:
        return None
    if event.code is KeyCode.QUIT:
        return Quit()
    if event.code in _TURNS:
        return Turn(_TURNS[event.code])
    if (
        event.char is not None
        and event.char.lower() == "c"
        and Modifier.CONTROL in event.modifiers
    ):
        return Quit()
    return None


class GameLoop:
    """Drives a :class:`GameState` in real time against a terminal.

    There is no timer thread. Each tick polls the terminal with whatever
    remains of the tick interval until it runs out, then advances the
    game once and redraws. Heading requests are validated against the
    heading the tick started with.
    """

    def __init__(
        self,
        state: GameState,
        terminal: Terminal,
        clock: Callable[[], float] = time.monotonic,
        max_input_failures: int | None = None,
    ) -> None:
        self.state = state
        self.terminal = terminal
        self.clock = clock
        self.max_input_failures = (
            max_input_failures
            if max_input_failures is not None
            else state.config.max_input_failures
        )
        self._input_failures = 0

    def run(self) -> GameState:
        """Play until the game is over and return the final state."""
        self._render()
        while not self.state.done:
            self.run_tick()
        return self.state

    def run_tick(self) -> None:
        """Run one tick: poll for its full interval, then move."""
        interval = self.state.interval
        heading = self.state.snake.direction()
        started = self.clock()

        while (
            remaining := interval - (self.clock() - started)
        ) >= POLL_RESOLUTION:
            command = command_for(self._poll(remaining))
            if isinstance(command, Quit):
                self.state.quit()
                return
            if isinstance(command, Turn):
                self.state.turn(command.direction, heading)

        self.state.step()
        if not self.state.done:
            self._render()

    def _poll(self, timeout: float) -> KeyEvent | None:
        try:
            event = self.terminal.poll_input(timeout)
        except InputSourceError:
            self._input_failures += 1
            if self._input_failures > self.max_input_failures:
                raise
            logger.warning(
                "Input poll failed (%d in a row); treating as no input.",
                self._input_failures,
            )
            return None
        self._input_failures = 0
        return event

    def _render(self) -> None:
        state = self.state
        self.terminal.render(
            state.board.width,
            state.board.height,
            state.snake.body_points(),
            state.food,
            score=state.score,
            speed=state.speed,
        )


def play(
    config: GameConfig,
    terminal: Terminal,
    fit: bool = False,
    clock: Callable[[], float] = time.monotonic,
) -> GameState:
    """Size the board, run a full session, and return the final state.

    With *fit*, the board takes all the room the terminal offers.
    Raises :class:`TerminalError` when the board does not fit.
    """
    cols, rows = terminal.measure()
    if fit:
        try:
            config = config.replace(
                board_width=cols - BORDER_COLS,
                board_height=rows - CHROME_ROWS,
            )
        except ValueError as exc:
            raise TerminalError(
                f"Terminal is too small ({cols}x{rows}): {exc}",
            ) from exc
    width, height = config.board_width, config.board_height
    if cols < width + BORDER_COLS or rows < height + CHROME_ROWS:
        raise TerminalError(
            f"Terminal is {cols}x{rows}; a {width}x{height} board needs "
            f"{width + BORDER_COLS}x{height + CHROME_ROWS}.",
        )

    state = GameState.new(config)
    with terminal.session(width, height):
        GameLoop(state, terminal, clock=clock).run()
    return state
