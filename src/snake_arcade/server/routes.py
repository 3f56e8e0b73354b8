"""REST API route handlers for session lifecycle and ticking."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_arcade.config import SessionConfig
from snake_arcade.errors import FoodPlacementExhausted, InvalidConfiguration
from snake_arcade.server.models import (
    CreateSessionRequest,
    ErrorResponse,
    SessionSummary,
    TickRequest,
    TickResponse,
)
from snake_arcade.server.session_manager import (
    SessionLimitExceeded,
    SessionManager,
    parse_direction,
)

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    responses={
        404: {"model": ErrorResponse, "description": "Unknown session."},
        409: {"model": ErrorResponse, "description": "No free cell for food."},
        429: {"model": ErrorResponse, "description": "Session limit reached."},
    },
)


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _build_config(body: CreateSessionRequest) -> SessionConfig:
    kwargs = body.model_dump(exclude_none=True)
    if "initial_segments" in kwargs:
        kwargs["initial_segments"] = tuple(
            tuple(p) for p in kwargs["initial_segments"]
        )
    if "initial_food" in kwargs:
        kwargs["initial_food"] = tuple(kwargs["initial_food"])
    kwargs["initial_facing"] = parse_direction(kwargs["initial_facing"])
    return SessionConfig(**kwargs)


@router.post("", status_code=201)
async def create_session(body: CreateSessionRequest, request: Request) -> SessionSummary:
    """Start a new session."""
    manager = _get_manager(request)
    try:
        entry = manager.create_session(_build_config(body))
    except InvalidConfiguration as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except SessionLimitExceeded as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    except FoodPlacementExhausted as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return entry.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List sessions that are not over."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session summary and full state."""
    entry = _get_manager(request).get_session(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = entry.summary().model_dump(mode="json")
    result["state"] = entry.session.get_state()
    return result


@router.post("/{session_id}/tick")
async def tick_session(
    session_id: str, body: TickRequest, request: Request,
) -> TickResponse:
    """Advance a session by one tick."""
    manager = _get_manager(request)
    entry = manager.get_session(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    try:
        outcome = manager.tick(session_id, body.direction)
    except FoodPlacementExhausted as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return TickResponse(outcome=outcome, state=entry.session.get_state())


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Discard a session."""
    try:
        _get_manager(request).delete_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
