"""Session configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from snake_arcade.errors import InvalidConfiguration
from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Everything needed to start one game session.

    Supports JSON serialization so a setup can be reproduced. Only the
    configuration is persisted, never a game in progress.
    """

    # Board
    board_width: int = 10
    board_height: int = 20

    # Snake layout, head first
    initial_segments: tuple[tuple[int, int], ...] = ((2, 0), (1, 0), (0, 0))
    initial_facing: Direction = Direction.RIGHT

    # Pacing, in seconds
    tick_interval: float = 0.5
    tick_step: float = 0.01
    min_tick_interval: float = 0.05

    # Food
    initial_food: tuple[int, int] | None = None
    max_food_attempts: int | None = None

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width < 1 or self.board_height < 1:
            raise InvalidConfiguration("Board dimensions must be positive.")
        if not self.initial_segments:
            raise InvalidConfiguration("initial_segments must not be empty.")

        seen: set[tuple[int, int]] = set()
        for pos in self.initial_segments:
            if not self._in_bounds(pos):
                raise InvalidConfiguration(
                    f"Initial segment {pos} lies outside the "
                    f"{self.board_width}x{self.board_height} board."
                )
            if pos in seen:
                raise InvalidConfiguration(
                    f"Initial segments overlap at {pos}."
                )
            seen.add(pos)

        if self.tick_interval <= 0:
            raise InvalidConfiguration("tick_interval must be positive.")
        if self.tick_step < 0:
            raise InvalidConfiguration("tick_step must not be negative.")
        if not 0 < self.min_tick_interval <= self.tick_interval:
            raise InvalidConfiguration(
                "min_tick_interval must be positive and at most tick_interval."
            )

        if self.initial_food is not None:
            if not self._in_bounds(self.initial_food):
                raise InvalidConfiguration("initial_food lies outside the board.")
            if self.initial_food in seen:
                raise InvalidConfiguration("initial_food overlaps the snake.")
        if self.max_food_attempts is not None and self.max_food_attempts < 1:
            raise InvalidConfiguration("max_food_attempts must be at least 1.")

    def _in_bounds(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self.board_width and 0 <= y < self.board_height

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return {
            "board_width": self.board_width,
            "board_height": self.board_height,
            "initial_segments": [list(p) for p in self.initial_segments],
            "initial_facing": self.initial_facing.name.lower(),
            "tick_interval": self.tick_interval,
            "tick_step": self.tick_step,
            "min_tick_interval": self.min_tick_interval,
            "initial_food": (
                list(self.initial_food) if self.initial_food is not None else None
            ),
            "max_food_attempts": self.max_food_attempts,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> SessionConfig:
        """Build a config from :meth:`to_dict` output."""
        data = dict(raw)
        if "initial_segments" in data:
            data["initial_segments"] = tuple(
                tuple(p) for p in data["initial_segments"]
            )
        if "initial_facing" in data:
            data["initial_facing"] = Direction[data["initial_facing"].upper()]
        if data.get("initial_food") is not None:
            data["initial_food"] = tuple(data["initial_food"])
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> SessionConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
