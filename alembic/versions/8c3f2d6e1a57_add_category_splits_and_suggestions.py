"""Add transaction_category_splits, category_training_data and category_suggestions.

Revision ID: 8c3f2d6e1a57
Revises: 5e1a9c2b7d40
Create Date: 2026-10-17

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8c3f2d6e1a57"
down_revision: Union[str, None] = "5e1a9c2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "transaction_category_splits",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("transaction_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("amount > 0", name="ck_transaction_category_splits_amount_positive"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["transaction_id"], ["transactions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_transaction_category_splits_user_id", "transaction_category_splits", ["user_id"]
    )
    op.create_index(
        "ix_transaction_category_splits_transaction_id",
        "transaction_category_splits",
        ["transaction_id"],
    )
    op.create_index(
        "ix_transaction_category_splits_category_id",
        "transaction_category_splits",
        ["category_id"],
    )

    op.create_table(
        "category_training_data",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("transaction_text", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("source_type", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "source_type IN ('expense', 'income', 'goal', 'bill', 'investment')",
            name="ck_category_training_data_source_type",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_category_training_data_user_id", "category_training_data", ["user_id"])
    op.create_index(
        "ix_category_training_data_category_id", "category_training_data", ["category_id"]
    )

    op.create_table(
        "category_suggestions",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("transaction_id", sa.Uuid(), nullable=False),
        sa.Column("suggested_category_id", sa.Uuid(), nullable=False),
        sa.Column("confidence_score", sa.Float(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["transaction_id"], ["transactions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["suggested_category_id"], ["categories.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_category_suggestions_user_id", "category_suggestions", ["user_id"])
    op.create_index(
        "ix_category_suggestions_transaction_id", "category_suggestions", ["transaction_id"]
    )
    op.create_index(
        "ix_category_suggestions_suggested_category_id",
        "category_suggestions",
        ["suggested_category_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_category_suggestions_suggested_category_id", table_name="category_suggestions")
    op.drop_index("ix_category_suggestions_transaction_id", table_name="category_suggestions")
    op.drop_index("ix_category_suggestions_user_id", table_name="category_suggestions")
    op.drop_table("category_suggestions")

    op.drop_index("ix_category_training_data_category_id", table_name="category_training_data")
    op.drop_index("ix_category_training_data_user_id", table_name="category_training_data")
    op.drop_table("category_training_data")

    op.drop_index(
        "ix_transaction_category_splits_category_id", table_name="transaction_category_splits"
    )
    op.drop_index(
        "ix_transaction_category_splits_transaction_id", table_name="transaction_category_splits"
    )
    op.drop_index(
        "ix_transaction_category_splits_user_id", table_name="transaction_category_splits"
    )
    op.drop_table("transaction_category_splits")
