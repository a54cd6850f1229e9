"""create_visitors_table

Revision ID: 3f1c2a9d8e47
Revises:
Create Date: 2026-10-18 09:12:04.518203

Adds:
- visitors table (one row per location per tick)
- composite index on (location, time)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d8e47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "visitors",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=False),
        sa.Column("free", sa.Integer(), nullable=False),
        sa.Column("occupied", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_visitors_location_time", "visitors", ["location", "time"])


def downgrade() -> None:
    op.drop_index("ix_visitors_location_time", table_name="visitors")
    op.drop_table("visitors")
