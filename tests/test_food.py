"""Tests for the food module."""

from unittest.mock import patch

import numpy as np
import pytest

from snake_arcade.errors import FoodPlacementExhausted, InvalidConfiguration
from snake_arcade.food import FoodItem, FoodSpawner
from snake_arcade.grid import Board, GridPosition
from snake_arcade.snake import Direction, SnakeChain


class TestFoodItem:
    def test_render_handle(self):
        food = FoodItem(GridPosition(1, 2))
        assert food.render_handle == "food"
        assert food.to_dict() == {"x": 1, "y": 2}

    def test_repositioned_in_place(self):
        food = FoodItem(GridPosition(1, 2))
        food.position = GridPosition(3, 4)
        assert food.position == (3, 4)


class TestFoodSpawnerInit:
    def test_default_attempts_scale_with_board(self):
        spawner = FoodSpawner(Board(10, 20))
        assert spawner.max_attempts == 20 * 200

    def test_invalid_attempts(self):
        with pytest.raises(InvalidConfiguration, match="at least 1"):
            FoodSpawner(Board(), max_attempts=0)


class TestFoodPlacement:
    def test_sample_within_bounds(self):
        board = Board(3, 7)
        spawner = FoodSpawner(board, rng=np.random.default_rng(0))
        for _ in range(200):
            assert board.in_bounds(spawner.sample())

    def test_never_on_snake(self):
        board = Board(4, 4)
        spawner = FoodSpawner(board, rng=np.random.default_rng(3))
        chain = SnakeChain.from_positions(
            board, [(3, 0), (2, 0), (1, 0), (0, 0)], Direction.RIGHT,
        )
        for direction in [Direction.DOWN, Direction.DOWN, Direction.LEFT] * 2:
            for _ in range(50):
                assert not chain.occupies(spawner.place_new_food(chain))
            chain.move(direction)

    def test_finds_last_free_cell(self):
        board = Board(3, 3)
        layout = [p for p in board.positions() if p != (2, 2)]
        chain = SnakeChain.from_positions(board, layout)
        spawner = FoodSpawner(board, rng=np.random.default_rng(11))
        assert spawner.place_new_food(chain) == (2, 2)

    def test_deterministic(self):
        board = Board(10, 20)
        chain = SnakeChain.from_positions(board, [(2, 0), (1, 0), (0, 0)])
        a = FoodSpawner(board, rng=np.random.default_rng(42))
        b = FoodSpawner(board, rng=np.random.default_rng(42))
        assert [a.place_new_food(chain) for _ in range(5)] == [
            b.place_new_food(chain) for _ in range(5)
        ]


class TestFoodExhaustion:
    def test_full_board(self):
        board = Board(2, 2)
        chain = SnakeChain.from_positions(board, [(0, 0), (1, 0), (1, 1), (0, 1)])
        spawner = FoodSpawner(board, rng=np.random.default_rng(0))
        with pytest.raises(FoodPlacementExhausted, match="whole board"):
            spawner.place_new_food(chain)

    def test_attempts_are_bounded(self):
        board = Board(5, 5)
        chain = SnakeChain.from_positions(board, [(0, 0)])
        spawner = FoodSpawner(board, max_attempts=7)
        with patch.object(
            spawner, "sample", return_value=GridPosition(0, 0),
        ) as sample:
            with pytest.raises(FoodPlacementExhausted, match="7 attempts"):
                spawner.place_new_food(chain)
        assert sample.call_count == 7
