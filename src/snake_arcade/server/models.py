"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from snake_arcade.session import Phase, TickOutcome


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    board_width: int = Field(default=10, ge=1)
    board_height: int = Field(default=20, ge=1)
    initial_segments: list[tuple[int, int]] | None = None
    initial_facing: Literal["up", "down", "left", "right"] = "right"
    tick_interval: float = Field(default=0.5, gt=0)
    tick_step: float = Field(default=0.01, ge=0)
    min_tick_interval: float = Field(default=0.05, gt=0)
    initial_food: tuple[int, int] | None = None
    seed: int | None = None


class TickRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/tick."""

    direction: Literal["up", "down", "left", "right"] | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    tick_interval: float


class TickResponse(BaseModel):
    """Outcome of one tick plus the resulting state."""

    outcome: TickOutcome
    state: dict


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
