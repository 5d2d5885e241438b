"""Exception hierarchy for fatal session failures."""

from __future__ import annotations


class SnakeGameError(Exception):
    """Base class for errors that abort a game session."""


class TerminalError(SnakeGameError):
    """The terminal could not be measured, sized, or configured."""


class InputSourceError(TerminalError):
    """Reading a key event from the terminal failed."""


class BoardFullError(SnakeGameError):
    """No free cell is left on the board to place food on."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"No free cell left on the {width}x{height} board.")
