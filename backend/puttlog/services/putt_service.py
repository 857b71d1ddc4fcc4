"""
PuttLog Backend - Putt Record Service
======================================

What:  Add, adjust and delete the per-distance putt records of a session.
How:   Every operation first resolves the parent session through
       SessionService.get_owned_session(); putt records carry no owner column,
       so the parent session is the only authorization boundary.
Who:   Called by the /sessions/{id}/putts route handlers.

Count Rules (checked on every create and update):
    distance_m > 0
    attempts >= 0, makes >= 0
    makes <= attempts

Partial Updates:
    PATCH may carry only attempts or only makes. The stored row is read first
    and the rules are applied to the EFFECTIVE pair (supplied value, or stored
    value when omitted). Nothing is written when the pair is invalid.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from puttlog.exceptions import DatabaseError, NotFoundError, PuttLogError, ValidationError
from puttlog.models.session import PuttRecord
from puttlog.schemas.session import PuttResponse
from puttlog.services.session_service import is_storable_id, putt_response, session_service

logger = logging.getLogger(__name__)

# INTEGER columns are 32-bit on PostgreSQL
MAX_COUNT = 2**31 - 1


def validate_counts(attempts: int, makes: int) -> None:
    """
    Check an (attempts, makes) pair.

    Raises:
        ValidationError: a count is negative or too large, or makes exceeds attempts
    """
    if attempts < 0:
        raise ValidationError(message="attempts must be >= 0", field="attempts")
    if attempts > MAX_COUNT:
        raise ValidationError(message=f"attempts must be <= {MAX_COUNT}", field="attempts")
    if makes < 0:
        raise ValidationError(message="makes must be >= 0", field="makes")
    if makes > attempts:
        raise ValidationError(
            message="makes cannot exceed attempts",
            field="makes",
            context={"attempts": attempts, "makes": makes},
        )


def validate_distance(distance_m: int) -> None:
    if distance_m <= 0:
        raise ValidationError(message="distance_m must be a positive integer", field="distance_m")
    if distance_m > MAX_COUNT:
        raise ValidationError(message=f"distance_m must be <= {MAX_COUNT}", field="distance_m")


class PuttService:
    """Business logic for putt records."""

    async def _get_putt(
        self, db: AsyncSession, session_id: int, putt_id: int
    ) -> Optional[PuttRecord]:
        if not is_storable_id(putt_id):
            return None
        result = await db.execute(
            select(PuttRecord).where(
                PuttRecord.id == putt_id,
                PuttRecord.session_id == session_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_putt(
        self,
        db: AsyncSession,
        owner_id: str,
        session_id: int,
        distance_m: int,
        attempts: int,
        makes: int,
    ) -> PuttResponse:
        """
        Add a distance record to one of the caller's sessions.

        The session is checked before the body, so an unowned session is a
        404 even when the counts are also invalid.

        Raises:
            NotFoundError: session missing or not owned
            ValidationError: distance/count rules violated (nothing is written)
        """
        try:
            session = await session_service.get_owned_session(db, owner_id, session_id)

            validate_distance(distance_m)
            validate_counts(attempts, makes)

            record = PuttRecord(
                session_id=session.id,
                distance_m=distance_m,
                attempts=attempts,
                makes=makes,
            )
            db.add(record)
            await db.flush()
            logger.info(
                "Putt record %s added to session %s: %dm %d/%d",
                record.id, session.id, distance_m, makes, attempts,
            )
            return putt_response(record)

        except PuttLogError:
            raise
        except Exception as e:
            logger.error("Database error adding putt to session %s: %s", session_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the putt record. Please try again.",
                context={"session_id": session_id},
            )

    async def update_putt(
        self,
        db: AsyncSession,
        owner_id: str,
        session_id: int,
        putt_id: int,
        attempts: Optional[int] = None,
        makes: Optional[int] = None,
    ) -> PuttResponse:
        """
        Change attempts and/or makes of a putt record.

        Args:
            attempts: New attempts, or None to keep the stored value
            makes:    New makes, or None to keep the stored value

        Raises:
            NotFoundError: session not owned, or no such record under it
            ValidationError: effective pair violates the count rules
        """
        try:
            session = await session_service.get_owned_session(db, owner_id, session_id)

            record = await self._get_putt(db, session.id, putt_id)
            if record is None:
                raise NotFoundError(resource="putt record", resource_id=str(putt_id))

            effective_attempts = record.attempts if attempts is None else attempts
            effective_makes = record.makes if makes is None else makes
            validate_counts(effective_attempts, effective_makes)

            record.attempts = effective_attempts
            record.makes = effective_makes
            await db.flush()
            logger.info(
                "Putt record %s updated: %d/%d", record.id, record.makes, record.attempts
            )
            return putt_response(record)

        except PuttLogError:
            raise
        except Exception as e:
            logger.error("Database error updating putt %s: %s", putt_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the putt record. Please try again.",
                context={"session_id": session_id, "putt_id": putt_id},
            )

    async def delete_putt(
        self, db: AsyncSession, owner_id: str, session_id: int, putt_id: int
    ) -> None:
        """
        Delete a putt record from one of the caller's sessions.

        A record that is already gone is not an error: either way the record
        ends up absent.

        Raises:
            NotFoundError: session missing or not owned
        """
        try:
            session = await session_service.get_owned_session(db, owner_id, session_id)

            if not is_storable_id(putt_id):
                logger.debug("Putt record %s cannot exist in session %s", putt_id, session_id)
                return

            result = await db.execute(
                delete(PuttRecord).where(
                    PuttRecord.id == putt_id,
                    PuttRecord.session_id == session.id,
                )
            )
            await db.flush()

            if result.rowcount:
                logger.info("Putt record %s deleted from session %s", putt_id, session_id)
            else:
                logger.debug("Putt record %s already absent from session %s", putt_id, session_id)

        except PuttLogError:
            raise
        except Exception as e:
            logger.error("Database error deleting putt %s: %s", putt_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the putt record. Please try again.",
                context={"session_id": session_id, "putt_id": putt_id},
            )


putt_service = PuttService()
