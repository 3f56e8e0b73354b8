"""Exceptions raised by the snake arcade core."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a board, layout, or timing setting cannot start a session."""


class FoodPlacementExhausted(RuntimeError):
    """Raised when no free cell was found for food within the attempt budget."""
