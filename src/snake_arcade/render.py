"""Renderable capability shared by snake segments and food."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from snake_arcade.grid import GridPosition

if TYPE_CHECKING:
    from snake_arcade.session import GameSession


@runtime_checkable
class Renderable(Protocol):
    """Anything a renderer can draw: a board position plus an opaque handle.

    The handle names a sprite or style; mapping it to pixels is the
    renderer's job.
    """

    @property
    def position(self) -> GridPosition: ...

    @property
    def render_handle(self) -> str: ...


def renderables(session: GameSession) -> Iterator[Renderable]:
    """Yield drawables in paint order: food first, then tail to head."""
    yield session.food
    yield from reversed(session.segments)
