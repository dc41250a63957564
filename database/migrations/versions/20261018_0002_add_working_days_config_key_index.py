"""add working days config key index

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index(
        "uq_working_days_configs_key",
        "working_days_configs",
        [
            "branch_id",
            sa.text("coalesce(academic_year_id, '')"),
            sa.text("coalesce(grade_level_id, '')"),
        ],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("uq_working_days_configs_key", table_name="working_days_configs")
