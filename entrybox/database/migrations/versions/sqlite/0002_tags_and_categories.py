"""Add categories, tags and entry_tags; open up entry kinds

Kinds stop being a fixed CHECK list and become rows in ``categories``.
SQLite cannot drop a CHECK constraint in place, so ``entries`` is rebuilt
before the association table starts referencing it.

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

NOW = sa.text("(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))")
STATUS_CHECK = "status IN ('planned', 'in_progress', 'completed', 'dropped')"


def _rebuild_entries_without_kind_check() -> None:
    op.execute(
        f"""
        CREATE TABLE entries_new (
            id VARCHAR(36) NOT NULL PRIMARY KEY,
            title TEXT NOT NULL,
            kind TEXT NOT NULL,
            status TEXT NOT NULL,
            notes TEXT NOT NULL DEFAULT '',
            url TEXT,
            source TEXT NOT NULL,
            tags_json TEXT NOT NULL DEFAULT '[]',
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            CONSTRAINT ck_entries_status CHECK ({STATUS_CHECK})
        )
        """
    )
    op.execute(
        "INSERT INTO entries_new (id, title, kind, status, notes, url, source, "
        "tags_json, created_at, updated_at) "
        "SELECT id, title, kind, status, notes, url, source, tags_json, "
        "created_at, updated_at FROM entries"
    )
    op.execute("DROP TABLE entries")
    op.execute("ALTER TABLE entries_new RENAME TO entries")
    op.create_index("idx_entries_created_at", "entries", ["created_at"])
    op.create_index("idx_entries_kind_status", "entries", ["kind", "status"])


def upgrade() -> None:
    _rebuild_entries_without_kind_check()

    categories = op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.Text(), nullable=False, server_default=NOW),
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
        sa.Column("created_at", sa.Text(), nullable=False, server_default=NOW),
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

    backfill_entry_tags(op.get_bind())


def downgrade() -> None:
    op.drop_index("idx_entry_tags_tag_id", table_name="entry_tags")
    op.drop_table("entry_tags")
    op.drop_table("tags")
    op.drop_index("idx_categories_name", table_name="categories")
    op.drop_table("categories")
