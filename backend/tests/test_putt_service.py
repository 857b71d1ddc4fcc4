"""
PuttLog Backend - Putt Service Tests
=====================================

What:  PuttService against a real SQLite database.

What we test:
    ✅ Valid (attempts, makes) pairs are stored exactly
    ✅ Negative counts, makes > attempts and non-positive distance are rejected
       without writing anything
    ✅ Partial updates validate the effective pair
    ✅ Every operation is scoped by the parent session's owner
    ✅ Deleting an absent record is not an error
"""

import pytest
from sqlalchemy import func, select

from puttlog.exceptions import DatabaseError, NotFoundError, ValidationError
from puttlog.models.session import PuttRecord
from puttlog.services.putt_service import (
    MAX_COUNT,
    PuttService,
    putt_service,
    validate_counts,
    validate_distance,
)
from puttlog.services.session_service import session_service

ALICE = "user_alice"
BOB = "user_bob"


async def _new_session(db, owner=ALICE):
    return await session_service.create_session(db, owner, "Practice", "2024-05-14")


async def _putt_count(db):
    result = await db.execute(select(func.count()).select_from(PuttRecord))
    return result.scalar_one()


class TestValidateCounts:

    @pytest.mark.parametrize("attempts,makes", [(0, 0), (1, 0), (1, 1), (10, 7), (250, 250)])
    def test_valid_pairs(self, attempts, makes):
        validate_counts(attempts, makes)

    @pytest.mark.parametrize(
        "attempts,makes,field",
        [(-1, 0, "attempts"), (5, -1, "makes"), (3, 4, "makes"), (0, 1, "makes"), (2**31, 0, "attempts")],
    )
    def test_invalid_pairs(self, attempts, makes, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_counts(attempts, makes)
        assert exc_info.value.field == field


class TestAddPutt:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts,makes", [(0, 0), (10, 7), (5, 5), (12, 0)])
    async def test_stores_exact_pair(self, db_session, attempts, makes):
        session = await _new_session(db_session)

        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, attempts, makes)

        stored = await db_session.get(PuttRecord, putt.id)
        assert (stored.attempts, stored.makes) == (attempts, makes)
        assert putt.session_id == session.id
        assert putt.distance_m == 3
        assert putt.created_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "distance,attempts,makes",
        [(3, 5, 6), (3, -1, 0), (3, 4, -2), (0, 4, 2), (-3, 4, 2)],
    )
    async def test_rejects_invalid_values_without_writing(self, db_session, distance, attempts, makes):
        session = await _new_session(db_session)

        with pytest.raises(ValidationError):
            await putt_service.add_putt(db_session, ALICE, session.id, distance, attempts, makes)

        assert await _putt_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_foreign_session_is_not_found(self, db_session):
        session = await _new_session(db_session, owner=ALICE)

        with pytest.raises(NotFoundError):
            await putt_service.add_putt(db_session, BOB, session.id, 3, 10, 7)

        assert await _putt_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_session_checked_before_counts(self, db_session):
        with pytest.raises(NotFoundError):
            await putt_service.add_putt(db_session, ALICE, 9999, 3, 1, 5)

    @pytest.mark.asyncio
    async def test_reports_accuracy(self, db_session):
        session = await _new_session(db_session)

        putt = await putt_service.add_putt(db_session, ALICE, session.id, 6, 8, 1)

        assert putt.accuracy == 13  # 12.5% rounds up


class TestUpdatePutt:

    @pytest.mark.asyncio
    async def test_makes_above_stored_attempts_rejected_unchanged(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        with pytest.raises(ValidationError, match="makes cannot exceed attempts"):
            await putt_service.update_putt(db_session, ALICE, session.id, putt.id, makes=11)

        stored = await db_session.get(PuttRecord, putt.id)
        assert (stored.attempts, stored.makes) == (10, 8)

    @pytest.mark.asyncio
    async def test_attempts_only_keeps_makes(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        updated = await putt_service.update_putt(db_session, ALICE, session.id, putt.id, attempts=12)

        assert (updated.attempts, updated.makes) == (12, 8)

    @pytest.mark.asyncio
    async def test_lowering_attempts_below_stored_makes_rejected(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        with pytest.raises(ValidationError):
            await putt_service.update_putt(db_session, ALICE, session.id, putt.id, attempts=7)

        stored = await db_session.get(PuttRecord, putt.id)
        assert (stored.attempts, stored.makes) == (10, 8)

    @pytest.mark.asyncio
    async def test_both_fields_validated_together(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        updated = await putt_service.update_putt(db_session, ALICE, session.id, putt.id, attempts=3, makes=3)

        assert (updated.attempts, updated.makes) == (3, 3)
        assert updated.accuracy == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("changes", [{"attempts": -1}, {"makes": -1}])
    async def test_negative_values_rejected(self, db_session, changes):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 0)

        with pytest.raises(ValidationError):
            await putt_service.update_putt(db_session, ALICE, session.id, putt.id, **changes)

    @pytest.mark.asyncio
    async def test_no_fields_is_a_no_op(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 4, 2)

        updated = await putt_service.update_putt(db_session, ALICE, session.id, putt.id)

        assert (updated.attempts, updated.makes) == (4, 2)

    @pytest.mark.asyncio
    async def test_foreign_owner_cannot_update(self, db_session):
        session = await _new_session(db_session, owner=ALICE)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        with pytest.raises(NotFoundError):
            await putt_service.update_putt(db_session, BOB, session.id, putt.id, attempts=20)

        stored = await db_session.get(PuttRecord, putt.id)
        assert stored.attempts == 10

    @pytest.mark.asyncio
    async def test_putt_from_another_session_not_found(self, db_session):
        first = await _new_session(db_session)
        second = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, first.id, 3, 10, 8)

        with pytest.raises(NotFoundError, match="putt record"):
            await putt_service.update_putt(db_session, ALICE, second.id, putt.id, makes=1)


class TestDeletePutt:

    @pytest.mark.asyncio
    async def test_delete_then_delete_again(self, db_session):
        session = await _new_session(db_session)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        await putt_service.delete_putt(db_session, ALICE, session.id, putt.id)
        await putt_service.delete_putt(db_session, ALICE, session.id, putt.id)

        assert await _putt_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_foreign_owner_cannot_delete(self, db_session):
        session = await _new_session(db_session, owner=ALICE)
        putt = await putt_service.add_putt(db_session, ALICE, session.id, 3, 10, 8)

        with pytest.raises(NotFoundError):
            await putt_service.delete_putt(db_session, BOB, session.id, putt.id)

        assert await _putt_count(db_session) == 1

    @pytest.mark.asyncio
    async def test_storage_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(DatabaseError):
            await PuttService().delete_putt(mock_db_session, ALICE, 1, 1)


class TestValueBounds:

    def test_largest_count_accepted(self):
        validate_counts(MAX_COUNT, MAX_COUNT)
        validate_distance(MAX_COUNT)

    def test_distance_above_bound_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_distance(MAX_COUNT + 1)
        assert exc_info.value.field == "distance_m"

    @pytest.mark.asyncio
    async def test_oversized_attempts_write_nothing(self, db_session):
        session = await _new_session(db_session)

        with pytest.raises(ValidationError):
            await putt_service.add_putt(db_session, ALICE, session.id, 3, 2**64, 1)

        assert await _putt_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_unstorable_putt_id(self, db_session):
        session = await _new_session(db_session)

        with pytest.raises(NotFoundError, match="putt record"):
            await putt_service.update_putt(db_session, ALICE, session.id, 2**63, attempts=1)
        await putt_service.delete_putt(db_session, ALICE, session.id, 2**63)
