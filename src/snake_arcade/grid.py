"""Board geometry for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from snake_arcade.errors import InvalidConfiguration

if TYPE_CHECKING:
    from snake_arcade.snake import Direction


class CellType(enum.IntEnum):
    """Integer codes stored in a rendered cell array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class GridPosition(NamedTuple):
    """Integer (x, y) board coordinate. ``x`` grows right, ``y`` grows down."""

    x: int
    y: int

    def moved(self, direction: Direction) -> GridPosition:
        """Return the position one unit away in *direction*."""
        dx, dy = direction.value
        return GridPosition(self.x + dx, self.y + dy)


class Board:
    """Fixed-size rectangular board bounding every position in a session.

    Cell arrays produced by :meth:`cells` use ``[y, x]`` indexing so that
    rows line up with the screen.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        if width < 1 or height < 1:
            raise InvalidConfiguration("Board dimensions must be positive.")
        self.width = width
        self.height = height

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, position: GridPosition) -> bool:
        """Check whether a position lies on the board."""
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def positions(self) -> Iterator[GridPosition]:
        """Yield every board cell, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield GridPosition(x, y)

    def cells(
        self,
        snake: Iterable[GridPosition] = (),
        food: GridPosition | None = None,
    ) -> np.ndarray:
        """Paint snake and food positions into a fresh ``int8`` array.

        Positions outside the board are skipped; the head may sit there for
        the tick on which a wall collision is reported.
        """
        cells = np.zeros((self.height, self.width), dtype=np.int8)
        if food is not None and self.in_bounds(food):
            cells[food.y, food.x] = CellType.FOOD
        for pos in snake:
            if self.in_bounds(pos):
                cells[pos.y, pos.x] = CellType.SNAKE
        return cells

    def to_dict(self) -> dict:
        """Serialize board dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
