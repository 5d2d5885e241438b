"""Fixed-size playing field."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from terminal_snake.snake import Point


class Board:
    """Rectangular board of ``width`` columns by ``height`` rows.

    Free-cell queries use a NumPy occupancy mask indexed as ``[y, x]``.
    """

    def __init__(self, width: int = 20, height: int = 15) -> None:
        if width < 4 or height < 4:
            raise ValueError("Board dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def in_bounds(self, point: Point) -> bool:
        """Check whether a point lies within the board."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def free_cells(self, occupied: Iterable[Point]) -> list[Point]:
        """Return every in-bounds cell not listed in *occupied*."""
        mask = np.ones((self.height, self.width), dtype=bool)
        for point in occupied:
            if self.in_bounds(point):
                mask[point.y, point.x] = False
        ys, xs = np.nonzero(mask)
        return [
            Point(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True)
        ]

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}
