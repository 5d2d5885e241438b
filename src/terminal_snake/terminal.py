"""Curses-backed terminal: setup and restore, key input, drawing."""

from __future__ import annotations

import curses
import enum
import logging
import os
import sys
from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from typing import Protocol

from terminal_snake.errors import InputSourceError, TerminalError
from terminal_snake.snake import Point

logger = logging.getLogger(__name__)

# Rows and columns the border and status line need around the board.
BORDER_COLS = 2
CHROME_ROWS = 3

HEAD_CHAR = "@"
BODY_CHAR = "o"
FOOD_CHAR = "*"

_ESC = 27
_CTRL_C = 3

ESCDELAY_MS = 25


class KeyCode(enum.Enum):
    """Logical keys the game distinguishes."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"
    QUIT = "quit"
    OTHER = "other"


class Modifier(enum.Enum):
    CONTROL = "control"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press."""

    code: KeyCode
    char: str | None = None
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)


class Terminal(Protocol):
    """What the game loop needs from a terminal."""

    def measure(self) -> tuple[int, int]:
        """Return the terminal size as ``(columns, rows)``."""
        ...

    def session(
        self, width: int, height: int,
    ) -> AbstractContextManager[None]:
        """Prepare the screen for a board and restore it on exit."""
        ...

    def poll_input(self, timeout: float) -> KeyEvent | None:
        """Wait up to *timeout* seconds for one key press."""
        ...

    def render(
        self,
        width: int,
        height: int,
        body: Sequence[Point],
        food: Point | None,
        score: int = 0,
        speed: int = 0,
    ) -> None:
        ...


_ARROWS: dict[int, KeyCode] = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_LEFT: KeyCode.LEFT,
}


def decode_key(ch: int) -> KeyEvent:
    """Translate a curses key code into a :class:`KeyEvent`."""
    if ch in _ARROWS:
        return KeyEvent(_ARROWS[ch])
    if ch in (ord("q"), ord("Q"), _ESC):
        return KeyEvent(KeyCode.QUIT, chr(ch) if ch != _ESC else None)
    # Raw mode delivers Ctrl-<letter> as bytes 1..26.
    if 1 <= ch <= 26:
        return KeyEvent(
            KeyCode.OTHER, chr(ord("a") + ch - 1),
            frozenset({Modifier.CONTROL}),
        )
    if 32 <= ch < 127:
        return KeyEvent(KeyCode.OTHER, chr(ch))
    return KeyEvent(KeyCode.OTHER)


class CursesTerminal:
    """Terminal backed by the standard library's curses module.

    :meth:`session` puts the terminal in raw mode with a hidden cursor
    and always restores the previous mode, including when the body of
    the ``with`` block raises.
    """

    def __init__(self) -> None:
        self._screen: curses.window | None = None

    def measure(self) -> tuple[int, int]:
        if self._screen is not None:
            rows, cols = self._screen.getmaxyx()
            return cols, rows
        try:
            size = os.get_terminal_size(sys.stdout.fileno())
        except (OSError, ValueError) as exc:
            raise TerminalError(f"Cannot measure the terminal: {exc}") from exc
        return size.columns, size.lines

    @contextmanager
    def session(self, width: int, height: int) -> Iterator[None]:
        try:
            screen = curses.initscr()
        except curses.error as exc:
            raise TerminalError(f"Cannot initialise the terminal: {exc}") from exc

        cursor = None
        try:
            curses.noecho()
            curses.raw()
            screen.keypad(True)
            # Esc quits; do not wait the default second for an escape sequence.
            curses.set_escdelay(ESCDELAY_MS)
            try:
                cursor = curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal cannot hide the cursor.")
            rows, cols = screen.getmaxyx()
            if cols < width + BORDER_COLS or rows < height + CHROME_ROWS:
                raise TerminalError(
                    f"Terminal is {cols}x{rows}; a {width}x{height} board "
                    f"needs {width + BORDER_COLS}x{height + CHROME_ROWS}.",
                )
            screen.clear()
            self._screen = screen
            yield
        except curses.error as exc:
            raise TerminalError(f"Terminal failure: {exc}") from exc
        finally:
            self._screen = None
            self._restore(screen, cursor)

    def poll_input(self, timeout: float) -> KeyEvent | None:
        screen = self._require_screen()
        screen.timeout(max(0, int(timeout * 1000)))
        try:
            ch = screen.getch()
        except curses.error as exc:
            raise InputSourceError(f"Reading a key failed: {exc}") from exc
        if ch == -1:
            return None
        return decode_key(ch)

    def render(
        self,
        width: int,
        height: int,
        body: Sequence[Point],
        food: Point | None,
        score: int = 0,
        speed: int = 0,
    ) -> None:
        screen = self._require_screen()
        try:
            screen.erase()
            self._draw_border(screen, width, height)
            if food is not None:
                screen.addstr(food.y + 1, food.x + 1, FOOD_CHAR)
            for i, point in enumerate(body):
                char = HEAD_CHAR if i == 0 else BODY_CHAR
                screen.addstr(point.y + 1, point.x + 1, char)
            _, cols = screen.getmaxyx()
            status = f"Score: {score}  Speed: {speed}  (q to quit)"
            screen.addstr(height + 2, 0, status[: cols - 1])
            screen.refresh()
        except curses.error as exc:
            raise TerminalError(f"Drawing failed: {exc}") from exc

    def _require_screen(self) -> curses.window:
        if self._screen is None:
            raise TerminalError("Terminal session is not active.")
        return self._screen

    @staticmethod
    def _draw_border(screen: curses.window, width: int, height: int) -> None:
        horizontal = "+" + "-" * width + "+"
        screen.addstr(0, 0, horizontal)
        for row in range(1, height + 1):
            screen.addstr(row, 0, "|")
            screen.addstr(row, width + 1, "|")
        screen.addstr(height + 1, 0, horizontal)

    @staticmethod
    def _restore(screen: curses.window, cursor: int | None) -> None:
        screen.keypad(False)
        curses.noraw()
        curses.echo()
        if cursor is not None:
            try:
                curses.curs_set(cursor)
            except curses.error:
                logger.debug("Terminal cannot restore the cursor.")
        curses.endwin()
