"""
PuttLog Backend - Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the API contract between the client and backend.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI docs from them.

Validation split:
    Schemas check SHAPE: required fields present, JSON types correct.
    Integer fields are strict, so "7" and true are rejected rather than coerced.
    Services check RANGES and INVARIANTS (non-empty name, date pattern,
    positive distance, 0 <= makes <= attempts), so the rules also hold for
    callers that do not come through HTTP.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What the client sends
# ══════════════════════════════════════════════════════════════════════════


class SessionCreate(BaseModel):
    """Body of POST /sessions."""
    name: StrictStr = Field(description="Session name (non-empty)")
    date: StrictStr = Field(description="Practice date, YYYY-MM-DD")


class PuttCreate(BaseModel):
    """Body of POST /sessions/{id}/putts."""
    distance_m: StrictInt = Field(description="Practice distance in meters (> 0)")
    attempts: StrictInt = Field(description="Putts attempted from this distance (>= 0)")
    makes: StrictInt = Field(description="Putts made from this distance (0..attempts)")


class PuttUpdate(BaseModel):
    """
    Body of PATCH /sessions/{id}/putts/{putt_id}.

    Either field may be omitted (or null); omitted fields keep their stored
    value and the resulting pair is what gets validated.
    """
    attempts: Optional[StrictInt] = Field(default=None, description="New attempts count")
    makes: Optional[StrictInt] = Field(default=None, description="New makes count")


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class SessionSummary(BaseModel):
    """
    What:  Compact session representation for the session list.
    Who:   Returned by GET /sessions (array items) and POST /sessions (201).
    """
    id: int = Field(description="Session identifier")
    name: str = Field(description="Session name as submitted")
    date: str = Field(description="Practice date as submitted (YYYY-MM-DD)")
    created_at: datetime = Field(description="When the session was created (UTC)")

    model_config = {"from_attributes": True}


class PuttResponse(BaseModel):
    """
    What:  One per-distance record.
    Who:   Returned by POST/PATCH on putts, and inside SessionDetail.

    accuracy is derived from makes/attempts on every response, never stored.
    """
    id: int = Field(description="Putt record identifier")
    session_id: int = Field(description="Owning session")
    distance_m: int = Field(description="Practice distance in meters")
    attempts: int = Field(description="Putts attempted")
    makes: int = Field(description="Putts made")
    accuracy: int = Field(description="round(100 * makes / attempts), 0 with no attempts")
    created_at: datetime = Field(description="When the record was created (UTC)")


class SessionTotals(BaseModel):
    """Derived session aggregate: summed counts and overall accuracy percentage."""
    attempts: int = Field(default=0, description="Sum of attempts over all distances")
    makes: int = Field(default=0, description="Sum of makes over all distances")
    accuracy: int = Field(default=0, description="round(100 * makes / attempts), 0 with no attempts")


class SessionDetail(SessionSummary):
    """
    What:  Full session with its putt records.
    Who:   Returned by GET /sessions/{id}.

    putts are ordered by distance_m ascending, then id ascending.
    """
    user_id: str = Field(description="Owner id")
    putts: List[PuttResponse] = Field(default_factory=list, description="Per-distance records")
    totals: SessionTotals = Field(default_factory=SessionTotals, description="Derived totals")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "session with ID '42' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health. `ok` is always true while the process serves requests."""
    ok: bool = Field(default=True, description="Service is up")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
