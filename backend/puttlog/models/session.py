"""
PuttLog Backend - Practice Session & Putt Record Models
========================================================

What:  ORM models for the `sessions` and `putts` tables.
How:   Inherit from the shared DeclarativeBase; Alembic and Database.create_all()
       read the metadata.
Who:   Used by SessionService / PuttService and by the initial migration.

Table Design:
    sessions
        id          INTEGER primary key (store generated)
        user_id     owner id taken from the identity header
        name        non-empty text
        date        'YYYY-MM-DD' text, stored exactly as submitted
        created_at  UTC timestamp set at insert

    putts
        id          INTEGER primary key
        session_id  FK → sessions.id ON DELETE CASCADE
        distance_m  positive integer (meters)
        attempts    non-negative integer
        makes       non-negative integer, never above attempts
        created_at  UTC timestamp set at insert

    Indexes:
        idx_sessions_user  (sessions.user_id)  → "my sessions" listing
        idx_putts_session  (putts.session_id)  → putts of one session
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from puttlog.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PracticeSession(Base):
    """
    A named, dated practice unit owned by one caller.

    Lifecycle:
        1. Created by POST /sessions (name + date)
        2. Never edited in place
        3. Deleted by DELETE /sessions/{id}, together with all of its putts

    Query Patterns:
        - List mine: WHERE user_id = :owner ORDER BY created_at DESC, id DESC
        - Ownership check: WHERE id = :id, then compare user_id in Python
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Owner id supplied by the external identity provider",
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Kept as text: the API round-trips the submitted string and does not
    # check calendar validity beyond the YYYY-MM-DD pattern.
    date: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        comment="When this session was created (UTC)",
    )

    __table_args__ = (
        Index("idx_sessions_user", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<PracticeSession(id={self.id}, name='{self.name}', "
            f"date='{self.date}')>"
        )


class PuttRecord(Base):
    """
    Attempts and makes from one practice distance within a session.

    Putt records carry no owner column: every access goes through the
    parent session's ownership check first.
    """

    __tablename__ = "putts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
    )

    distance_m: Mapped[int] = mapped_column(Integer, nullable=False)

    attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    makes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    # Same ranges the service layer checks before every write
    __table_args__ = (
        Index("idx_putts_session", "session_id"),
        CheckConstraint("distance_m > 0", name="ck_putts_distance_positive"),
        CheckConstraint("attempts >= 0", name="ck_putts_attempts_nonnegative"),
        CheckConstraint("makes >= 0 AND makes <= attempts", name="ck_putts_makes_range"),
    )

    def __repr__(self) -> str:
        return (
            f"<PuttRecord(id={self.id}, session_id={self.session_id}, "
            f"distance_m={self.distance_m}, {self.makes}/{self.attempts})>"
        )
