"""Session-Endpoints: Dashboard anlegen, Auswahl setzen, Zustand lesen."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, HTTPException, Request, Response

from resto_radar.api.schemas import CuisineSelection, RegionSelection, SessionResponse
from resto_radar.domain.errors import SessionNotReadyError, UnknownSelectionError
from resto_radar.infrastructure.cache.session_store import SessionStore
from resto_radar.use_cases.dashboard import (
    DashboardState,
    build_snapshot,
    initialize_dashboard,
    new_dashboard_state,
    select_cuisine,
    select_region,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["Sessions"])


def _sessions(request: Request) -> SessionStore:
    sessions: SessionStore = request.app.state.sessions
    return sessions


def _get_session(request: Request, session_id: str) -> DashboardState:
    state = _sessions(request).get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return state


def _response(session_id: str, state: DashboardState) -> SessionResponse:
    return SessionResponse(session_id=session_id, dashboard=build_snapshot(state))


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(request: Request) -> SessionResponse:
    """
    Neue Dashboard-Session anlegen und den Data-Index laden.

    Schlaegt das Laden fehl, wird die Session trotzdem angelegt, im
    terminalen Fehlerstatus ("System initialization failed").
    """
    state = new_dashboard_state(
        request.app.state.settings, transport=request.app.state.transport,
    )
    await initialize_dashboard(state)
    session_id = uuid.uuid4().hex
    _sessions(request).add(session_id, state)
    logger.info("Session %s created (initialized=%s)", session_id, state.initialized)
    return _response(session_id, state)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(request: Request, session_id: str) -> SessionResponse:
    return _response(session_id, _get_session(request, session_id))


@router.post("/{session_id}/region", response_model=SessionResponse)
async def choose_region(
    request: Request, session_id: str, selection: RegionSelection,
) -> SessionResponse:
    state = _get_session(request, session_id)
    try:
        await select_region(state, selection.region.strip())
    except SessionNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except UnknownSelectionError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _response(session_id, state)


@router.post("/{session_id}/cuisine", response_model=SessionResponse)
async def choose_cuisine(
    request: Request, session_id: str, selection: CuisineSelection,
) -> SessionResponse:
    state = _get_session(request, session_id)
    try:
        await select_cuisine(state, selection.cuisine.strip())
    except SessionNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except UnknownSelectionError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _response(session_id, state)


@router.delete("/{session_id}", status_code=204)
async def delete_session(request: Request, session_id: str) -> Response:
    state = _sessions(request).pop(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    state.charts.destroy_all()
    return Response(status_code=204)
