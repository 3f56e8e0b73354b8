"""Food placement logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.errors import FoodPlacementExhausted, InvalidConfiguration
from snake_arcade.grid import Board, GridPosition

if TYPE_CHECKING:
    from snake_arcade.snake import SnakeChain

logger = logging.getLogger(__name__)

# Resample budget per board cell when no explicit limit is given.
_ATTEMPTS_PER_CELL = 20


@dataclass
class FoodItem:
    """The single food cell on the board. Repositioned, never destroyed."""

    position: GridPosition

    @property
    def render_handle(self) -> str:
        return "food"

    def to_dict(self) -> dict:
        return {"x": self.position.x, "y": self.position.y}


class FoodSpawner:
    """Picks random free cells for food.

    Uses a caller-supplied NumPy generator so placement is reproducible
    for a fixed seed.
    """

    def __init__(
        self,
        board: Board,
        rng: np.random.Generator | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is None:
            max_attempts = _ATTEMPTS_PER_CELL * board.area
        if max_attempts < 1:
            raise InvalidConfiguration("max_attempts must be at least 1.")
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def sample(self) -> GridPosition:
        """Draw one uniformly random board position."""
        x = int(self.rng.integers(0, self.board.width))
        y = int(self.rng.integers(0, self.board.height))
        return GridPosition(x, y)

    def place_new_food(self, chain: SnakeChain) -> GridPosition:
        """Return a random position not occupied by *chain*.

        Raises :class:`FoodPlacementExhausted` when the chain covers the
        board or no free cell turns up within ``max_attempts`` samples.
        """
        if len(chain) >= self.board.area:
            logger.warning("Snake covers the board; no cell left for food.")
            raise FoodPlacementExhausted("Snake covers the whole board.")

        for _ in range(self.max_attempts):
            pos = self.sample()
            if not chain.occupies(pos):
                return pos

        logger.warning(
            "No free cell found in %d attempts (snake length %d).",
            self.max_attempts, len(chain),
        )
        raise FoodPlacementExhausted(
            f"No free cell found in {self.max_attempts} attempts."
        )
