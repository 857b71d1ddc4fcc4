"""Create sessions and putts tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Creates `sessions` and `putts`, the FK cascade from putts to sessions,
       and the owner / session-id lookup indexes.

Rollback: downgrade() drops both tables (destructive, all practice data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables with constraints and indexes (see puttlog/models/session.py)."""
    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Text(),
            nullable=False,
            comment="Owner id supplied by the external identity provider",
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="When this session was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_sessions_user", "sessions", ["user_id"])

    op.create_table(
        "putts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("distance_m", sa.Integer(), nullable=False),
        sa.Column("attempts", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("makes", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
        sa.CheckConstraint("distance_m > 0", name="ck_putts_distance_positive"),
        sa.CheckConstraint("attempts >= 0", name="ck_putts_attempts_nonnegative"),
        sa.CheckConstraint("makes >= 0 AND makes <= attempts", name="ck_putts_makes_range"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_putts_session", "putts", ["session_id"])


def downgrade() -> None:
    op.drop_index("idx_putts_session", table_name="putts")
    op.drop_table("putts")
    op.drop_index("idx_sessions_user", table_name="sessions")
    op.drop_table("sessions")
