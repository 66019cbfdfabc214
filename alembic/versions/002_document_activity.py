"""Document activity: per-user visits (recent list) and version history.

Revision ID: 002_document_activity
Revises: 001_wiki_authority_schema
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002_document_activity"
down_revision: str | None = "001_wiki_authority_schema"
branch_labels: str | None = None
depends_on: str | None = None

UUID = postgresql.UUID(as_uuid=True)


def _document_fk() -> sa.Column:
    return sa.Column(
        "document_id",
        UUID,
        sa.ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "document_visits",
        sa.Column("user_id", UUID, nullable=False),
        _document_fk(),
        sa.Column(
            "visited_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("user_id", "document_id"),
    )
    op.create_index(
        "ix_document_visits_user_id_visited_at",
        "document_visits",
        ["user_id", sa.text("visited_at DESC")],
    )

    op.create_table(
        "document_versions",
        _document_fk(),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("editor_id", UUID, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("document_id", "version"),
        sa.CheckConstraint("version >= 1", name="ck_document_versions_version"),
    )


def downgrade() -> None:
    op.drop_table("document_versions")
    op.drop_index(
        "ix_document_visits_user_id_visited_at", table_name="document_visits"
    )
    op.drop_table("document_visits")
