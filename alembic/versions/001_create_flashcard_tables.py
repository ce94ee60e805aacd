"""Create users, card_sets and cards tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema for the flashcard backend.
How:   Parent references (card_sets.user_id, cards.card_set_id) are indexed
       UUID columns with no FOREIGN KEY constraint: deleting a parent leaves
       its children in place.
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
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Server-assigned identifier"),
        sa.Column("name", sa.String(255), nullable=False, comment="Display name"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "card_sets",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Server-assigned identifier"),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            comment="Human-readable description of the deck",
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="Owning user (unchecked reference)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_card_sets_user_id", "card_sets", ["user_id"])

    op.create_table(
        "cards",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Server-assigned identifier"),
        sa.Column("front", sa.Text(), nullable=False, comment="Prompt side"),
        sa.Column("back", sa.Text(), nullable=False, comment="Answer side"),
        sa.Column(
            "card_set_id",
            sa.Uuid(),
            nullable=False,
            comment="Owning card set (unchecked reference)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cards_card_set_id", "cards", ["card_set_id"])


def downgrade() -> None:
    """Drops all three tables. Destructive: every row is lost."""
    op.drop_index("ix_cards_card_set_id", table_name="cards")
    op.drop_table("cards")
    op.drop_index("ix_card_sets_user_id", table_name="card_sets")
    op.drop_table("card_sets")
    op.drop_table("users")
