"""
PuttLog Backend - Session & Putt Route Handlers
================================================

What:  /sessions endpoints: session list/create/detail/delete and the nested
       putt record create/update/delete.
How:   Each handler resolves the caller's owner id (identity dependency), gets
       a per-request AsyncSession, and delegates to SessionService/PuttService.
Who:   Called by the mobile client and by puttlog.client.PuttLogClient.

Status Codes:
    200 read/update, 201 create, 204 delete
    400 ValidationError (missing identity, bad body, rule violations)
    404 NotFoundError (missing or not owned)
    500 DatabaseError / unexpected
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from puttlog.database import get_db_session
from puttlog.identity import get_owner_id
from puttlog.schemas.session import (
    ErrorResponse,
    PuttCreate,
    PuttResponse,
    PuttUpdate,
    SessionCreate,
    SessionDetail,
    SessionSummary,
)
from puttlog.services.putt_service import putt_service
from puttlog.services.session_service import session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

_ERRORS = {
    400: {"description": "Invalid input or missing identity header", "model": ErrorResponse},
    404: {"description": "Session or putt record not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


# ══════════════════════════════════════════════════════════════════════════
# Sessions
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "",
    response_model=List[SessionSummary],
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="List my practice sessions",
    description="Returns the caller's sessions, most recently created first. No pagination.",
)
async def list_sessions(
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[SessionSummary]:
    return await session_service.list_sessions(db, owner_id)


@router.post(
    "",
    status_code=201,
    response_model=SessionSummary,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a practice session",
)
async def create_session(
    body: SessionCreate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> SessionSummary:
    return await session_service.create_session(db, owner_id, name=body.name, date=body.date)


@router.get(
    "/{session_id}",
    response_model=SessionDetail,
    responses=_ERRORS,
    summary="Get a session with its putt records",
    description=(
        "Returns the session, its putt records ordered by distance then insertion, "
        "and derived totals. A session owned by another caller is reported as not found."
    ),
)
async def get_session(
    session_id: int,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> SessionDetail:
    return await session_service.get_session_with_putts(db, owner_id, session_id)


@router.delete(
    "/{session_id}",
    status_code=204,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a session and all of its putt records",
)
async def delete_session(
    session_id: int,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await session_service.delete_session(db, owner_id, session_id)
    return Response(status_code=204)


# ══════════════════════════════════════════════════════════════════════════
# Putt records
# ══════════════════════════════════════════════════════════════════════════


@router.post(
    "/{session_id}/putts",
    status_code=201,
    response_model=PuttResponse,
    responses=_ERRORS,
    summary="Add a distance record to a session",
)
async def add_putt(
    session_id: int,
    body: PuttCreate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> PuttResponse:
    return await putt_service.add_putt(
        db,
        owner_id,
        session_id,
        distance_m=body.distance_m,
        attempts=body.attempts,
        makes=body.makes,
    )


@router.patch(
    "/{session_id}/putts/{putt_id}",
    response_model=PuttResponse,
    responses=_ERRORS,
    summary="Update attempts and/or makes of a putt record",
    description="Omitted fields keep their stored value; the resulting pair must satisfy 0 <= makes <= attempts.",
)
async def update_putt(
    session_id: int,
    putt_id: int,
    body: PuttUpdate,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> PuttResponse:
    return await putt_service.update_putt(
        db,
        owner_id,
        session_id,
        putt_id,
        attempts=body.attempts,
        makes=body.makes,
    )


@router.delete(
    "/{session_id}/putts/{putt_id}",
    status_code=204,
    response_class=Response,
    responses={400: _ERRORS[400], 404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Delete a putt record",
    description="Succeeds whether or not the record still exists; 404 only when the session is not found.",
)
async def delete_putt(
    session_id: int,
    putt_id: int,
    owner_id: str = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await putt_service.delete_putt(db, owner_id, session_id, putt_id)
    return Response(status_code=204)
