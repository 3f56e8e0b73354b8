"""Snake chain representation and follow-the-leader movement."""

from __future__ import annotations

import enum
import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from snake_arcade.errors import InvalidConfiguration
from snake_arcade.grid import Board, GridPosition

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    """Movement directions with (dx, dy) values. ``NONE`` requests no change."""

    NONE = (0, 0)
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# NONE has no reversal partner, so it maps to itself.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass
class Segment:
    """One body cell: where it is and the direction that moved it there."""

    position: GridPosition
    facing: Direction = Direction.NONE
    # Set on the copies a chain hands out; the chain itself ignores it.
    is_head: bool = field(default=False, compare=False)

    @property
    def render_handle(self) -> str:
        return "head" if self.is_head else "body"

    def advance(self, direction: Direction) -> None:
        """Step one unit in *direction* and remember it as the facing."""
        if direction is Direction.NONE:
            return
        self.position = self.position.moved(direction)
        self.facing = direction

    def to_dict(self) -> dict:
        return {
            "x": self.position.x,
            "y": self.position.y,
            "facing": self.facing.name.lower(),
        }


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single :meth:`SnakeChain.move`."""

    head: GridPosition
    collided: bool


class SnakeChain:
    """An ordered chain of segments on a board.

    The head is the first segment and the tail the last. Segments are owned
    by the chain and only change through :meth:`move` and :meth:`grow`;
    callers get read-only views.
    """

    def __init__(self, board: Board, segments: Iterable[Segment]) -> None:
        self.board = board
        self._segments: list[Segment] = [
            Segment(seg.position, seg.facing) for seg in segments
        ]
        if not self._segments:
            raise InvalidConfiguration("A snake needs at least one segment.")
        self._tail_snapshot: Segment | None = None

    @classmethod
    def from_positions(
        cls,
        board: Board,
        positions: Iterable[tuple[int, int]],
        facing: Direction = Direction.RIGHT,
    ) -> SnakeChain:
        """Build a chain whose segments all share the starting *facing*."""
        return cls(
            board, (Segment(GridPosition(*pos), facing) for pos in positions),
        )

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @property
    def segments(self) -> tuple[Segment, ...]:
        """Copies of the current segments, head first."""
        return tuple(
            Segment(s.position, s.facing, is_head=(i == 0))
            for i, s in enumerate(self._segments)
        )

    @property
    def positions(self) -> list[GridPosition]:
        return [s.position for s in self._segments]

    @property
    def head(self) -> GridPosition:
        return self._segments[0].position

    @property
    def tail(self) -> GridPosition:
        return self._segments[-1].position

    @property
    def facing(self) -> Direction:
        """Direction the head last moved in."""
        return self._segments[0].facing

    @staticmethod
    def validate_direction(
        requested: Direction, current: Direction,
    ) -> Direction:
        """Drop requests that repeat or reverse the current heading.

        Returns ``Direction.NONE`` (keep heading) for rejected requests.
        """
        if requested is current or requested is current.opposite:
            return Direction.NONE
        return requested

    def move(self, requested: Direction = Direction.NONE) -> MoveResult:
        """Advance every segment one step, each following its predecessor.

        The head takes the validated *requested* direction (or keeps its
        heading); every other segment takes the facing its predecessor had
        before this move. Collisions are evaluated after all segments move.
        """
        direction = self.validate_direction(requested, self.facing)
        if direction is Direction.NONE:
            direction = self.facing
        resolved = direction

        tail = self._segments[-1]
        self._tail_snapshot = Segment(tail.position, tail.facing)

        for segment in self._segments:
            previous = segment.facing
            segment.advance(direction)
            # A segment that never moved hands on the head's direction.
            direction = previous if previous is not Direction.NONE else resolved

        return MoveResult(head=self.head, collided=self.collides())

    def grow(self) -> None:
        """Append a segment on the cell the tail vacated in the last move."""
        if self._tail_snapshot is None:
            raise RuntimeError("grow() must directly follow a move().")
        self._segments.append(self._tail_snapshot)
        self._tail_snapshot = None
        logger.debug("Snake grew to %d segments.", len(self._segments))

    def occupies(self, position: GridPosition) -> bool:
        """Check whether any segment sits on *position*."""
        return any(seg.position == position for seg in self._segments)

    def out_of_bounds(self) -> bool:
        return not self.board.in_bounds(self.head)

    def self_intersects(self) -> bool:
        """Check whether two segments share a position."""
        counts = Counter(seg.position for seg in self._segments)
        return any(n > 1 for n in counts.values())

    def collides(self) -> bool:
        """Check for a wall hit by the head or any overlapping segments."""
        return self.out_of_bounds() or self.self_intersects()

    def to_dict(self) -> dict:
        """Serialize chain state for renderers."""
        return {
            "segments": [seg.to_dict() for seg in self._segments],
            "length": len(self._segments),
        }
