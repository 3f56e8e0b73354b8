"""Tick-driven game session composing board, snake, and food logic."""

from __future__ import annotations

import enum
import logging

import numpy as np

from snake_arcade.config import SessionConfig
from snake_arcade.errors import FoodPlacementExhausted, InvalidConfiguration
from snake_arcade.food import FoodItem, FoodSpawner
from snake_arcade.grid import Board, GridPosition
from snake_arcade.snake import Direction, Segment, SnakeChain

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    """Lifecycle states of a session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class TickOutcome(str, enum.Enum):
    """What a single tick did."""

    RUNNING = "running"
    SCORED = "scored"
    GAME_OVER = "game_over"


class GameSession:
    """Single-snake, tick-driven game session.

    The session owns the board, chain, food, and spawner. The driver paces
    calls to :meth:`tick` using :attr:`tick_interval`; the session itself
    never sleeps or reads a clock.

    Food placement draws from *rng* when given, otherwise from a generator
    seeded with ``config.seed``. Supplying both is rejected so the recorded
    seed always matches the one in use.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        if rng is not None and self.config.seed is not None:
            raise InvalidConfiguration(
                "Pass either a seeded config or an explicit rng, not both."
            )
        self.board = Board(self.config.board_width, self.config.board_height)
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.chain = SnakeChain.from_positions(
            self.board, self.config.initial_segments, self.config.initial_facing,
        )
        self.spawner = FoodSpawner(
            self.board, rng=self.rng, max_attempts=self.config.max_food_attempts,
        )

        if self.config.initial_food is not None:
            food_pos = GridPosition(*self.config.initial_food)
        else:
            food_pos = self.spawner.place_new_food(self.chain)
        self.food = FoodItem(food_pos)

        self.score = 0
        self.tick_count = 0
        self.tick_interval = self.config.tick_interval
        self.phase = Phase.NOT_STARTED

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self.chain.segments

    def start(self) -> None:
        """Move from NOT_STARTED to RUNNING. No effect once started."""
        if self.phase is Phase.NOT_STARTED:
            self.phase = Phase.RUNNING
            logger.info("Session started; food at %s.", self.food.position)

    def tick(self, direction: Direction = Direction.NONE) -> TickOutcome:
        """Advance the game by one step using at most one direction request."""
        if self.phase is Phase.GAME_OVER:
            return TickOutcome.GAME_OVER
        self.start()

        result = self.chain.move(direction)
        self.tick_count += 1

        if result.collided:
            self._end_game()
            return TickOutcome.GAME_OVER

        if result.head == self.food.position:
            self.chain.grow()
            self.score += 1
            self.tick_interval = max(
                self.config.min_tick_interval,
                self.tick_interval - self.config.tick_step,
            )
            try:
                self.food.position = self.spawner.place_new_food(self.chain)
            except FoodPlacementExhausted:
                self._end_game()
                raise
            logger.debug(
                "Scored at tick %d (score %d, interval %.3f).",
                self.tick_count, self.score, self.tick_interval,
            )
            return TickOutcome.SCORED

        return TickOutcome.RUNNING

    def cells(self) -> np.ndarray:
        """Return the board as a ``[y, x]`` array of cell codes."""
        return self.board.cells(self.chain.positions, self.food.position)

    def get_state(self) -> dict:
        """Return the full, serializable session state."""
        return {
            "tick": self.tick_count,
            "phase": self.phase.value,
            "score": self.score,
            "tick_interval": self.tick_interval,
            "board": self.board.to_dict(),
            "snake": self.chain.to_dict(),
            "food": self.food.to_dict(),
        }

    def _end_game(self) -> None:
        """Enter the terminal phase."""
        self.phase = Phase.GAME_OVER
        logger.info(
            "Game over at tick %d with score %d.", self.tick_count, self.score,
        )
