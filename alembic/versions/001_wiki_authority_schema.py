"""Wiki authority schema: wikis, members, document tree, grants, stars, audit.

Revision ID: 001_wiki_authority_schema
Revises:
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_wiki_authority_schema"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

UUID = postgresql.UUID(as_uuid=True)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    op.create_table(
        "wikis",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("creator_id", UUID, nullable=False),
        sa.Column(
            "visibility",
            sa.Text,
            nullable=False,
            server_default=sa.text("'private'"),
        ),
        sa.Column("description", sa.Text, nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "visibility IN ('private', 'public')", name="ck_wikis_visibility"
        ),
    )

    op.create_table(
        "wiki_members",
        sa.Column(
            "wiki_id",
            UUID,
            sa.ForeignKey("wikis.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("role", sa.Text, nullable=False, server_default=sa.text("'member'")),
        _created_at(),
        sa.PrimaryKeyConstraint("wiki_id", "user_id", name="pk_wiki_members"),
        sa.CheckConstraint("role IN ('member', 'admin')", name="ck_wiki_members_role"),
    )

    op.create_table(
        "documents",
        sa.Column("id", UUID, primary_key=True),
        sa.Column(
            "wiki_id",
            UUID,
            sa.ForeignKey("wikis.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("creator_id", UUID, nullable=False),
        sa.Column("parent_id", UUID, sa.ForeignKey("documents.id"), nullable=True),
        sa.Column("title", sa.Text, nullable=False, server_default=sa.text("''")),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column(
            "status", sa.Text, nullable=False, server_default=sa.text("'private'")
        ),
        sa.Column("share_token", sa.Text, nullable=True),
        sa.Column("share_password_hash", sa.Text, nullable=True),
        sa.Column("share_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "share_include_descendants",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("share_created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "status IN ('private', 'public')", name="ck_documents_status"
        ),
        # token presente <=> status public
        sa.CheckConstraint(
            "(status = 'public') = (share_token IS NOT NULL)",
            name="ck_documents_share_token_status",
        ),
        sa.CheckConstraint("parent_id IS DISTINCT FROM id", name="ck_documents_self_parent"),
        sa.UniqueConstraint("share_token", name="uq_documents_share_token"),
    )
    op.create_index("ix_documents_parent_id", "documents", ["parent_id"])
    op.create_index("ix_documents_wiki_id_parent_id", "documents", ["wiki_id", "parent_id"])

    op.create_table(
        "document_authorities",
        sa.Column(
            "document_id",
            UUID,
            sa.ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("capability", sa.Text, nullable=False),
        sa.Column("granted_by", UUID, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint(
            "document_id", "user_id", name="pk_document_authorities"
        ),
        sa.CheckConstraint(
            "capability IN ('readable', 'editable', 'createUser')",
            name="ck_document_authorities_capability",
        ),
    )
    op.create_index(
        "ix_document_authorities_user_id", "document_authorities", ["user_id"]
    )

    op.create_table(
        "stars",
        sa.Column("user_id", UUID, nullable=False),
        sa.Column(
            "wiki_id",
            UUID,
            sa.ForeignKey("wikis.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "document_id",
            UUID,
            sa.ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=True,
        ),
        _created_at(),
    )
    op.execute(
        """
        CREATE UNIQUE INDEX uq_stars_user_wiki_document
        ON stars (user_id, wiki_id,
                  COALESCE(document_id, '00000000-0000-0000-0000-000000000000'::uuid))
        """
    )

    op.create_table(
        "audit_events",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("actor", sa.Text, nullable=False),
        sa.Column("action", sa.Text, nullable=False),
        sa.Column("target_id", UUID, nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at(),
    )
    op.create_index("ix_audit_events_target_id", "audit_events", ["target_id"])


def downgrade() -> None:
    op.drop_index("ix_audit_events_target_id", table_name="audit_events")
    op.drop_table("audit_events")
    op.execute("DROP INDEX IF EXISTS uq_stars_user_wiki_document")
    op.drop_table("stars")
    op.drop_index("ix_document_authorities_user_id", table_name="document_authorities")
    op.drop_table("document_authorities")
    op.drop_index("ix_documents_wiki_id_parent_id", table_name="documents")
    op.drop_index("ix_documents_parent_id", table_name="documents")
    op.drop_table("documents")
    op.drop_table("wiki_members")
    op.drop_table("wikis")
