"""In-memory session registry for the HTTP driver."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field

from snake_arcade.config import SessionConfig
from snake_arcade.server.models import SessionSummary
from snake_arcade.session import GameSession, Phase, TickOutcome
from snake_arcade.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100
_MAX_ACTIVE_SESSIONS = 1000
_IDLE_TIMEOUT = 600.0  # seconds without a tick before a live session is evicted

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def parse_direction(name: str | None) -> Direction:
    """Map a wire direction name to a :class:`Direction`; ``None`` is NONE."""
    if name is None:
        return Direction.NONE
    try:
        return _DIRECTION_MAP[name]
    except KeyError as exc:
        raise ValueError(f"Unknown direction '{name}'.") from exc


class SessionLimitExceeded(RuntimeError):
    """Raised when the registry is full of live sessions."""


@dataclass
class SessionEntry:
    """A registered session and its bookkeeping."""

    session_id: str
    session: GameSession
    created_at: float = field(default_factory=time.monotonic)
    last_active: float = field(default_factory=time.monotonic)
    finished_at: float | None = None

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self.session.phase,
            score=self.session.score,
            tick_interval=self.session.tick_interval,
        )


class SessionManager:
    """Central registry of running and finished sessions.

    Each :meth:`tick` call advances one session by exactly one step; pacing
    is left to the client. Live sessions are capped at
    ``max_active_sessions``; one that goes ``idle_timeout`` seconds without
    a tick is evicted the next time a session is created.
    """

    def __init__(
        self,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        max_active_sessions: int = _MAX_ACTIVE_SESSIONS,
        idle_timeout: float = _IDLE_TIMEOUT,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if max_active_sessions < 1:
            raise ValueError("max_active_sessions must be >= 1.")
        if idle_timeout <= 0:
            raise ValueError("idle_timeout must be positive.")
        self._sessions: dict[str, SessionEntry] = {}
        self._max_finished_sessions = max_finished_sessions
        self._max_active_sessions = max_active_sessions
        self._idle_timeout = idle_timeout

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def active_count(self) -> int:
        return sum(1 for e in self._sessions.values() if e.finished_at is None)

    def create_session(self, config: SessionConfig | None = None) -> SessionEntry:
        """Create and register a new session.

        Raises :class:`SessionLimitExceeded` when every live slot is taken by
        a session that has ticked recently.
        """
        self._evict_idle_sessions(time.monotonic())
        if self.active_count >= self._max_active_sessions:
            raise SessionLimitExceeded(
                f"Session limit of {self._max_active_sessions} reached."
            )

        session = GameSession(config)
        session_id = uuid.uuid4().hex[:12]
        entry = SessionEntry(session_id=session_id, session=session)
        self._sessions[session_id] = entry
        logger.info(
            "Session %s created (%dx%d board).",
            session_id, session.board.width, session.board.height,
        )
        return entry

    def get_session(self, session_id: str) -> SessionEntry | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> SessionEntry:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Session {session_id} not found.")
        return entry

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that are not over."""
        return [
            entry.summary() for entry in self._sessions.values()
            if entry.session.phase is not Phase.GAME_OVER
        ]

    def tick(self, session_id: str, direction: str | None = None) -> TickOutcome:
        """Advance one session by a single tick."""
        entry = self._require(session_id)
        entry.last_active = time.monotonic()
        try:
            outcome = entry.session.tick(parse_direction(direction))
        finally:
            if entry.session.game_over and entry.finished_at is None:
                entry.finished_at = time.monotonic()
                self._prune_finished_sessions()
        return outcome

    def delete_session(self, session_id: str) -> None:
        """Drop a session from the registry."""
        self._require(session_id)
        del self._sessions[session_id]
        logger.info("Session %s deleted.", session_id)

    def _evict_idle_sessions(self, now: float) -> None:
        """Drop live sessions nobody has ticked within the idle timeout."""
        stale_ids = [
            sid for sid, e in self._sessions.items()
            if e.finished_at is None and now - e.last_active >= self._idle_timeout
        ]
        for sid in stale_ids:
            del self._sessions[sid]
        if stale_ids:
            logger.info("Evicted %d idle sessions.", len(stale_ids))

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            e for e in self._sessions.values() if e.finished_at is not None
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(key=lambda e: e.finished_at)
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )
