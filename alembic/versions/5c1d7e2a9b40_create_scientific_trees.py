"""Create scientific_trees with unique scientific_name

Revision ID: 5c1d7e2a9b40
Revises:
Create Date: 2026-10-19 09:12:44.120391

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1d7e2a9b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "scientific_trees",
        sa.Column("id", sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column("scientific_name", sa.String(length=200), nullable=False),
        sa.Column("common_name", sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_scientific_trees_id"), "scientific_trees", ["id"], unique=False
    )
    # Unique: concurrent resolve-or-create of the same name fails instead of duplicating
    op.create_index(
        op.f("ix_scientific_trees_scientific_name"),
        "scientific_trees",
        ["scientific_name"],
        unique=True,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_scientific_trees_scientific_name"), table_name="scientific_trees")
    op.drop_index(op.f("ix_scientific_trees_id"), table_name="scientific_trees")
    op.drop_table("scientific_trees")
