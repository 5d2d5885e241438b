"""Game configuration."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board size, pacing, and session settings.

    Supports JSON serialization so a setup can be shared or replayed.
    """

    # Board
    board_width: int = 20
    board_height: int = 15
    initial_length: int = 3

    # Pacing: the tick interval shrinks linearly from max to min
    # as the speed level climbs from 0 to max_speed.
    min_interval_ms: int = 200
    max_interval_ms: int = 700
    max_speed: int = 20

    # Input
    max_input_failures: int = 3

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width < 4 or self.board_height < 4:
            raise ValueError("Board dimensions must be at least 4×4.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        room = (min(self.board_width, self.board_height) - 1) // 2
        if self.initial_length - 1 > room:
            raise ValueError(
                f"A snake of length {self.initial_length} does not fit a "
                f"{self.board_width}x{self.board_height} board.",
            )
        if self.min_interval_ms <= 0:
            raise ValueError("min_interval_ms must be positive.")
        if self.max_interval_ms <= self.min_interval_ms:
            raise ValueError("max_interval_ms must exceed min_interval_ms.")
        if self.max_speed < 1:
            raise ValueError("max_speed must be at least 1.")
        if self.max_input_failures < 0:
            raise ValueError("max_input_failures must be non-negative.")

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **changes) -> GameConfig:
        """Return a copy with *changes* applied (and validated)."""
        return dataclasses.replace(self, **changes)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
