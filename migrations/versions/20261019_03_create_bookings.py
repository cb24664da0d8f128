"""create test ride bookings

Revision ID: 20261019_03
Revises: 20261019_02
Create Date: 2026-10-19 09:20:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_03"
down_revision: Union[str, None] = "20261019_02"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), sa.Identity(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("bike_id", sa.Integer(), nullable=False),
        sa.Column("dealer_id", sa.Integer(), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("preferred_time", sa.String(length=5), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("dealer_response", sa.Text(), nullable=True),
        sa.Column("rescheduled_date", sa.Date(), nullable=True),
        sa.Column("rescheduled_time", sa.String(length=5), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["bike_id"], ["bikes.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["dealer_id"], ["dealers.id"], ondelete="RESTRICT"),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'rescheduled', 'completed', 'cancelled')",
            name="ck_bookings_status",
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"], unique=False)
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"], unique=False)
    op.create_index("ix_bookings_bike_id", "bookings", ["bike_id"], unique=False)
    op.create_index("ix_bookings_dealer_id", "bookings", ["dealer_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_bookings_dealer_id", table_name="bookings")
    op.drop_index("ix_bookings_bike_id", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")
