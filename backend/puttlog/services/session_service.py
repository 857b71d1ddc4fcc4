"""
PuttLog Backend - Session Service
==================================

What:  Owner-scoped create / list / read / delete for practice sessions.
How:   Runs SQLAlchemy statements on the request's AsyncSession. The route's
       session dependency commits once at the end, so each call here is one
       transaction together with everything else the request does.
Who:   Called by the /sessions route handlers and by PuttService, which uses
       get_owned_session() as its authorization step.

Ownership Rule:
    A session is visible only to the caller whose id matches sessions.user_id.
    A session that exists but belongs to someone else raises exactly the same
    NotFoundError as a session that does not exist.

Error Handling Strategy:
    ValidationError / NotFoundError propagate unchanged. Anything else raised
    while talking to the database is logged and wrapped in DatabaseError (500).
"""

import logging
import re
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from puttlog.exceptions import DatabaseError, NotFoundError, PuttLogError, ValidationError
from puttlog.models.session import PracticeSession, PuttRecord
from puttlog.schemas.session import PuttResponse, SessionDetail, SessionSummary
from puttlog.services.stats import accuracy_percent, compute_totals

logger = logging.getLogger(__name__)

# ASCII digits only; fullmatch() so trailing text is rejected
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Largest key a 64-bit INTEGER column can hold; ids above it cannot exist
MAX_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """True when value could be a generated primary key."""
    return 0 < value <= MAX_ID


def validate_session_fields(name: str, date: str) -> None:
    """
    Check a new session's user-supplied fields.

    Raises:
        ValidationError: name is empty, or date is not YYYY-MM-DD
    """
    if not name:
        raise ValidationError(message="name must not be empty", field="name")
    if not DATE_PATTERN.fullmatch(date):
        raise ValidationError(
            message="date must be formatted as YYYY-MM-DD",
            field="date",
            context={"date": date},
        )


def putt_response(record: PuttRecord) -> PuttResponse:
    """Build the API representation of a putt record, with derived accuracy."""
    return PuttResponse(
        id=record.id,
        session_id=record.session_id,
        distance_m=record.distance_m,
        attempts=record.attempts,
        makes=record.makes,
        accuracy=accuracy_percent(record.makes, record.attempts),
        created_at=record.created_at,
    )


class SessionService:
    """
    Business logic for practice sessions.

    Responsibilities:
        - list_sessions(): caller's sessions, newest first
        - create_session(): validate and insert
        - get_session_with_putts(): detail view with ordered putts and totals
        - delete_session(): remove the session and all of its putts
        - get_owned_session(): ownership check shared with PuttService
    """

    async def get_owned_session(
        self, db: AsyncSession, owner_id: str, session_id: int
    ) -> PracticeSession:
        """
        Resolve a session and check that the caller owns it.

        Raises:
            NotFoundError: no such session, or it belongs to another owner
        """
        if not is_storable_id(session_id):
            raise NotFoundError(resource="session", resource_id=str(session_id))

        result = await db.execute(
            select(PracticeSession).where(PracticeSession.id == session_id)
        )
        session = result.scalar_one_or_none()

        if session is None or session.user_id != owner_id:
            raise NotFoundError(resource="session", resource_id=str(session_id))

        return session

    async def list_sessions(self, db: AsyncSession, owner_id: str) -> List[SessionSummary]:
        """
        List the caller's sessions, most recently created first.

        Query plan:
            SELECT ... FROM sessions WHERE user_id = :owner
            ORDER BY created_at DESC, id DESC
            → idx_sessions_user; id breaks ties between same-instant inserts
        """
        try:
            result = await db.execute(
                select(PracticeSession)
                .where(PracticeSession.user_id == owner_id)
                .order_by(PracticeSession.created_at.desc(), PracticeSession.id.desc())
            )
            return [SessionSummary.model_validate(s) for s in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing sessions: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve sessions. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def create_session(
        self, db: AsyncSession, owner_id: str, name: str, date: str
    ) -> SessionSummary:
        """
        Create a new session for the caller.

        Returns:
            SessionSummary with the store-assigned id and created_at

        Raises:
            ValidationError: empty name or malformed date (nothing is written)
            DatabaseError: insert failed
        """
        validate_session_fields(name, date)

        try:
            session = PracticeSession(user_id=owner_id, name=name, date=date)
            db.add(session)
            await db.flush()  # Assigns id without committing
            logger.info("Session created: %s (date=%s)", session.id, session.date)
            return SessionSummary.model_validate(session)

        except Exception as e:
            logger.error("Database error creating session: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the session. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_session_with_putts(
        self, db: AsyncSession, owner_id: str, session_id: int
    ) -> SessionDetail:
        """
        Fetch one session with its putt records and derived totals.

        Putts are ordered by distance_m ascending, then id ascending, so
        records at the same distance keep insertion order.

        Raises:
            NotFoundError: missing or not owned (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            session = await self.get_owned_session(db, owner_id, session_id)

            result = await db.execute(
                select(PuttRecord)
                .where(PuttRecord.session_id == session.id)
                .order_by(PuttRecord.distance_m.asc(), PuttRecord.id.asc())
            )
            putts = list(result.scalars().all())

            return SessionDetail(
                id=session.id,
                user_id=session.user_id,
                name=session.name,
                date=session.date,
                created_at=session.created_at,
                putts=[putt_response(p) for p in putts],
                totals=compute_totals(putts),
            )

        except PuttLogError:
            raise
        except Exception as e:
            logger.error("Database error fetching session %s: %s", session_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the session. Please try again.",
                context={"session_id": session_id},
            )

    async def delete_session(self, db: AsyncSession, owner_id: str, session_id: int) -> None:
        """
        Delete a session and all of its putt records.

        Both statements run in the caller's transaction: the request either
        commits both deletes or rolls both back. The putts FK also carries
        ON DELETE CASCADE.

        Raises:
            NotFoundError: missing or not owned (nothing is deleted)
        """
        try:
            session = await self.get_owned_session(db, owner_id, session_id)

            putts_result = await db.execute(
                delete(PuttRecord).where(PuttRecord.session_id == session.id)
            )
            await db.execute(delete(PracticeSession).where(PracticeSession.id == session.id))
            await db.flush()

            logger.info(
                "Session %s deleted with %d putt record(s)",
                session_id,
                putts_result.rowcount or 0,
            )

        except PuttLogError:
            raise
        except Exception as e:
            logger.error("Database error deleting session %s: %s", session_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the session. Please try again.",
                context={"session_id": session_id},
            )


session_service = SessionService()
