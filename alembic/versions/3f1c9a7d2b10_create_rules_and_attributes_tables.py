"""create_rules_and_attributes_tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-18 09:12:41.503218

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create rules and attributes tables."""
    op.create_table(
        "rules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False, comment="Unique rule name"),
        sa.Column("rule_string", sa.Text(), nullable=False, comment="Rule expression text"),
        sa.Column("ast", sa.JSON(), nullable=False, comment="Parsed rule tree"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rules_name"), "rules", ["name"], unique=True)

    op.create_table(
        "attributes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "attribute_name",
            sa.String(length=255),
            nullable=False,
            comment="Unique attribute name",
        ),
        sa.Column(
            "data_type",
            sa.String(length=16),
            nullable=False,
            comment="String, Number or Boolean",
        ),
        sa.Column(
            "allowed_values",
            sa.JSON(),
            nullable=True,
            comment="Permitted values (JSON array)",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_attributes_attribute_name"), "attributes", ["attribute_name"], unique=True
    )


def downgrade() -> None:
    """Drop rules and attributes tables."""
    op.drop_index(op.f("ix_attributes_attribute_name"), table_name="attributes")
    op.drop_table("attributes")
    op.drop_index(op.f("ix_rules_name"), table_name="rules")
    op.drop_table("rules")
