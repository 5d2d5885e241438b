"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return _OPPOSITES[direction]


class Point(NamedTuple):
    """An (x, y) board cell. ``y`` grows downwards."""

    x: int
    y: int

    def translate(self, direction: Direction, distance: int = 1) -> Point:
        """Return the point *distance* cells away along *direction*."""
        dx, dy = direction.value
        return Point(self.x + dx * distance, self.y + dy * distance)


class Snake:
    """A snake represented as an ordered deque of body points.

    The head is ``body[0]``; the tail is ``body[-1]``. Bounds are the
    caller's concern, as is rejecting 180° turns.
    """

    def __init__(
        self,
        head: Point,
        length: int = 3,
        direction: Direction = Direction.RIGHT,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        back = direction.opposite
        self.body: deque[Point] = deque(
            head.translate(back, i) for i in range(length)
        )
        self._direction = direction

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.body[0]

    def head_point(self) -> Point:
        return self.body[0]

    def body_points(self) -> list[Point]:
        """Return a head-first copy of the body."""
        return list(self.body)

    def direction(self) -> Direction:
        return self._direction

    def set_direction(self, direction: Direction) -> None:
        """Overwrite the heading. No reversal check happens here."""
        self._direction = direction

    def next_head(self) -> Point:
        """Compute the next head position without moving."""
        return self.head.translate(self._direction)

    def slither(self) -> Point:
        """Move one cell forward and return the vacated tail cell."""
        self.body.appendleft(self.next_head())
        return self.body.pop()

    def grow(self) -> None:
        """Move one cell forward keeping the tail."""
        self.body.appendleft(self.next_head())

    def contains_point(self, point: Point) -> bool:
        """Check whether the snake occupies a given cell."""
        return point in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(p) for p in self.body],
            "direction": self._direction.name.lower(),
        }
