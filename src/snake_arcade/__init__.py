"""Snake Arcade — tick-driven snake game core."""

from snake_arcade.config import SessionConfig
from snake_arcade.errors import FoodPlacementExhausted, InvalidConfiguration
from snake_arcade.food import FoodItem, FoodSpawner
from snake_arcade.grid import Board, CellType, GridPosition
from snake_arcade.render import Renderable, renderables
from snake_arcade.session import GameSession, Phase, TickOutcome
from snake_arcade.snake import Direction, MoveResult, Segment, SnakeChain

__all__ = [
    "Board",
    "CellType",
    "Direction",
    "FoodItem",
    "FoodPlacementExhausted",
    "FoodSpawner",
    "GameSession",
    "GridPosition",
    "InvalidConfiguration",
    "MoveResult",
    "Phase",
    "Renderable",
    "Segment",
    "SessionConfig",
    "SnakeChain",
    "TickOutcome",
    "renderables",
]
