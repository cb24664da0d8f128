"""create bikes and dealer bike listings

Revision ID: 20261019_02
Revises: 20261019_01
Create Date: 2026-10-19 09:10:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_02"
down_revision: Union[str, None] = "20261019_01"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bikes",
        sa.Column("id", sa.Integer(), sa.Identity(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("brand", sa.String(length=120), nullable=False),
        sa.Column("category", sa.String(length=40), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("ex_showroom_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("specifications", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("images", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comparisons", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("ix_bikes_id", "bikes", ["id"], unique=False)
    op.create_index("ix_bikes_name", "bikes", ["name"], unique=False)
    op.create_index("ix_bikes_brand", "bikes", ["brand"], unique=False)

    op.create_table(
        "dealer_bike_listings",
        sa.Column("id", sa.Integer(), sa.Identity(), primary_key=True, nullable=False),
        sa.Column("dealer_id", sa.Integer(), nullable=False),
        sa.Column("bike_id", sa.Integer(), nullable=False),
        sa.Column("available_for_test_ride", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("available_for_purchase", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("on_road_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["dealer_id"], ["dealers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["bike_id"], ["bikes.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("dealer_id", "bike_id", name="uq_dealer_bike_listings_dealer_bike"),
    )
    op.create_index("ix_dealer_bike_listings_id", "dealer_bike_listings", ["id"], unique=False)
    op.create_index("ix_dealer_bike_listings_dealer_id", "dealer_bike_listings", ["dealer_id"], unique=False)
    op.create_index("ix_dealer_bike_listings_bike_id", "dealer_bike_listings", ["bike_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_dealer_bike_listings_bike_id", table_name="dealer_bike_listings")
    op.drop_index("ix_dealer_bike_listings_dealer_id", table_name="dealer_bike_listings")
    op.drop_index("ix_dealer_bike_listings_id", table_name="dealer_bike_listings")
    op.drop_table("dealer_bike_listings")
    op.drop_index("ix_bikes_brand", table_name="bikes")
    op.drop_index("ix_bikes_name", table_name="bikes")
    op.drop_index("ix_bikes_id", table_name="bikes")
    op.drop_table("bikes")
