"""Add categories, tags and entry_tags; open up entry kinds

Revision ID: 0002
Revises: 0001
Create Date: 2025-02-02 18:30:00

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from entrybox.database.migrations.backfill import backfill_entry_tags
from entrybox.database.models.enums import SEED_CATEGORIES

# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    categories = op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )
    op.create_index("idx_categories_name", "categories", ["name"])
    op.bulk_insert(
        categories,
        [{"id": str(uuid.uuid4()), "name": name} for name in SEED_CATEGORIES],
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("name", name="uq_tags_name"),
    )

    op.create_table(
        "entry_tags",
        sa.Column(
            "entry_id",
            sa.String(length=36),
            sa.ForeignKey("entries.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            sa.String(length=36),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index("idx_entry_tags_tag_id", "entry_tags", ["tag_id"])

    op.execute("ALTER TABLE entries DROP CONSTRAINT IF EXISTS ck_entries_kind")

    backfill_entry_tags(op.get_bind())


def downgrade() -> None:
    op.drop_index("idx_entry_tags_tag_id", table_name="entry_tags")
    op.drop_table("entry_tags")
    op.drop_table("tags")
    op.drop_index("idx_categories_name", table_name="categories")
    op.drop_table("categories")
