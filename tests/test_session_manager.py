"""Tests for the in-memory session registry."""

import pytest

from snake_arcade.config import SessionConfig
from snake_arcade.server.session_manager import (
    SessionLimitExceeded,
    SessionManager,
    parse_direction,
)
from snake_arcade.session import Phase, TickOutcome
from snake_arcade.snake import Direction

_WALL_BOUND = SessionConfig(
    initial_segments=((9, 0), (8, 0), (7, 0)), initial_food=(0, 10),
)


class TestParseDirection:
    def test_known(self):
        assert parse_direction("up") == Direction.UP
        assert parse_direction("right") == Direction.RIGHT

    def test_none(self):
        assert parse_direction(None) == Direction.NONE

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            parse_direction("north")


class TestSessionManager:
    def test_invalid_retention(self):
        with pytest.raises(ValueError, match=">= 0"):
            SessionManager(max_finished_sessions=-1)

    def test_create_and_get(self):
        manager = SessionManager()
        entry = manager.create_session(SessionConfig(seed=1))
        assert manager.get_session(entry.session_id) is entry
        assert entry.summary().phase == Phase.NOT_STARTED
        assert len(manager.list_sessions()) == 1

    def test_tick(self):
        manager = SessionManager()
        entry = manager.create_session(SessionConfig(initial_food=(5, 0)))
        assert manager.tick(entry.session_id, "down") == TickOutcome.RUNNING
        assert entry.session.chain.head == (2, 1)

    def test_tick_unknown(self):
        with pytest.raises(KeyError):
            SessionManager().tick("missing")

    def test_finished_sessions_hidden_from_list(self):
        manager = SessionManager()
        entry = manager.create_session(_WALL_BOUND)
        assert manager.tick(entry.session_id) == TickOutcome.GAME_OVER
        assert entry.finished_at is not None
        assert manager.list_sessions() == []

    def test_prunes_oldest_finished(self):
        manager = SessionManager(max_finished_sessions=1)
        first = manager.create_session(_WALL_BOUND)
        second = manager.create_session(_WALL_BOUND)
        manager.tick(first.session_id)
        manager.tick(second.session_id)
        assert manager.get_session(first.session_id) is None
        assert manager.get_session(second.session_id) is second

    def test_delete(self):
        manager = SessionManager()
        entry = manager.create_session()
        manager.delete_session(entry.session_id)
        assert len(manager) == 0
        with pytest.raises(KeyError):
            manager.delete_session(entry.session_id)


class TestSessionLimits:
    def test_invalid_limits(self):
        with pytest.raises(ValueError, match=">= 1"):
            SessionManager(max_active_sessions=0)
        with pytest.raises(ValueError, match="positive"):
            SessionManager(idle_timeout=0)

    def test_live_sessions_are_capped(self):
        manager = SessionManager(max_finished_sessions=0, max_active_sessions=3)
        for _ in range(3):
            manager.create_session()
        with pytest.raises(SessionLimitExceeded, match="limit of 3"):
            manager.create_session()
        assert len(manager) == 3

    def test_finished_sessions_free_a_slot(self):
        manager = SessionManager(max_active_sessions=1)
        entry = manager.create_session(_WALL_BOUND)
        manager.tick(entry.session_id)
        assert manager.active_count == 0
        manager.create_session()
        assert manager.active_count == 1

    def test_idle_sessions_evicted(self):
        manager = SessionManager(max_active_sessions=2, idle_timeout=60.0)
        stale = manager.create_session()
        fresh = manager.create_session()
        stale.last_active -= 120.0
        manager.create_session()
        assert manager.get_session(stale.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh
        assert len(manager) == 2

    def test_tick_keeps_session_alive(self):
        manager = SessionManager(idle_timeout=60.0)
        entry = manager.create_session(SessionConfig(initial_food=(9, 19)))
        entry.last_active -= 120.0
        manager.tick(entry.session_id)
        manager.create_session()
        assert manager.get_session(entry.session_id) is entry
