"""Create the geocode cache table.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "geocode",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lat", sa.String(), nullable=False),
        sa.Column("lon", sa.String(), nullable=False),
        sa.Column("address", sa.JSON(), nullable=False),
        sa.Column(
            "cached_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_geocode_lat_lon", "geocode", ["lat", "lon"])


def downgrade() -> None:
    op.drop_index("ix_geocode_lat_lon", table_name="geocode")
    op.drop_table("geocode")
