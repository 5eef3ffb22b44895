"""Create folders, tags, notes, note_tags and users tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the five Noteful collections and their indexes.
How:   Ids are 24-character hex strings assigned by the application, so no
       server-side id default exists. Timestamps are TIMESTAMP WITH TIME ZONE.

Rollback: downgrade() drops every table (destructive; all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(24)


def _document_columns():
    """id, created_at and updated_at, shared by every collection."""
    return [
        sa.Column("id", ID, nullable=False, comment="24-hex document id, assigned on insert"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this document was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this document was last modified (UTC)",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "folders",
        *_document_columns(),
        sa.Column("name", sa.String(255), nullable=False, comment="Folder name, unique across all folders"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "tags",
        *_document_columns(),
        sa.Column("name", sa.String(255), nullable=False, comment="Tag label, unique across all tags"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "notes",
        *_document_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "folder_id",
            ID,
            sa.ForeignKey("folders.id", ondelete="SET NULL"),
            nullable=True,
            comment="Folder this note is filed in; NULL when unfiled",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_folder_id", "notes", ["folder_id"])
    # Listing order is most recently updated first
    op.create_index("idx_notes_updated_at", "notes", ["updated_at"])

    op.create_table(
        "note_tags",
        sa.Column("note_id", ID, sa.ForeignKey("notes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tag_id", ID, sa.ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("note_id", "tag_id"),
    )
    op.create_index("ix_note_tags_tag_id", "note_tags", ["tag_id"])

    op.create_table(
        "users",
        *_document_columns(),
        sa.Column("fullname", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("username", sa.String(255), nullable=False, comment="Login name, unique across all users"),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash; never serialized"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )


def downgrade() -> None:
    """Drop every table, dependents first."""
    op.drop_table("users")
    op.drop_index("ix_note_tags_tag_id", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_index("idx_notes_folder_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("folders")
