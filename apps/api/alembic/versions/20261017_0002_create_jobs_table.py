"""create jobs table

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17 09:20:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261017_0002"
down_revision: Union[str, Sequence[str], None] = "20261017_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("driver_id", sa.String(length=64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("driver_name", sa.String(length=255), nullable=True),
        sa.Column("driver_phone", sa.String(length=32), nullable=True),
        sa.Column("pickup_name", sa.String(length=255), nullable=False),
        sa.Column("pickup_phone", sa.String(length=32), nullable=False),
        sa.Column("pickup_email", sa.String(length=255), nullable=True),
        sa.Column("pickup_latitude", sa.Float(), nullable=False),
        sa.Column("pickup_longitude", sa.Float(), nullable=False),
        sa.Column("dropoff_name", sa.String(length=255), nullable=False),
        sa.Column("dropoff_phone", sa.String(length=32), nullable=False),
        sa.Column("dropoff_email", sa.String(length=255), nullable=True),
        sa.Column("dropoff_latitude", sa.Float(), nullable=False),
        sa.Column("dropoff_longitude", sa.Float(), nullable=False),
        sa.Column("current_latitude", sa.Float(), nullable=True),
        sa.Column("current_longitude", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="medium"),
        sa.Column("is_urgent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("fragile_items", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("heavy_item", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_jobs_driver_id", "jobs", ["driver_id"])
    op.create_index("ix_jobs_status_created_at", "jobs", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_jobs_status_created_at", table_name="jobs")
    op.drop_index("ix_jobs_driver_id", table_name="jobs")
    op.drop_table("jobs")
