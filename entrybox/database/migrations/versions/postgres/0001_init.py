"""Create entries table

Revision ID: 0001
Revises:
Create Date: 2025-01-10 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

KINDS = ("book", "manga", "article", "animation", "movie", "series", "note", "link")
STATUSES = ("planned", "in_progress", "completed", "dropped")


def _in(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    op.create_table(
        "entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("kind", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("source", sa.Text(), nullable=False),
        sa.Column("tags_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint(_in("kind", KINDS), name="ck_entries_kind"),
        sa.CheckConstraint(_in("status", STATUSES), name="ck_entries_status"),
    )
    op.create_index("idx_entries_created_at", "entries", ["created_at"])
    op.create_index("idx_entries_kind_status", "entries", ["kind", "status"])


def downgrade() -> None:
    op.drop_index("idx_entries_kind_status", table_name="entries")
    op.drop_index("idx_entries_created_at", table_name="entries")
    op.drop_table("entries")
