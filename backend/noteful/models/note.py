"""
Noteful Backend: Note Model
===========================

What:  ORM model for the `notes` collection and its tag association.
How:   A note optionally points at one folder (folder_id) and holds a set of
       tags through the note_tags table. The tag set is loaded eagerly with
       each note (selectin) so async handlers never trigger a lazy load.

Query Patterns:
    - Search: title/content case-insensitive regex ($or of two $regex)
    - By folder: WHERE folder_id = :id     → idx_notes_folder_id
    - By tag:    EXISTS (note_tags WHERE tag_id = :id)
    - Listing order: updated_at DESC        → idx_notes_updated_at
"""

from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.identifiers import ID_LENGTH
from noteful.models.document import DocumentMixin
from noteful.models.tag import Tag

# One row per (note, tag) pair; removing either side removes the link
note_tags = Table(
    "note_tags",
    Base.metadata,
    Column(
        "note_id",
        String(ID_LENGTH),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(ID_LENGTH),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Note(DocumentMixin, Base):
    """A titled piece of text, optionally filed in a folder and tagged."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    folder_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        comment="Folder this note is filed in; NULL when unfiled",
    )

    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=note_tags,
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notes_folder_id", "folder_id"),
        Index("idx_notes_updated_at", "updated_at"),
    )

    @property
    def tag_ids(self) -> List[str]:
        """Ids of the attached tags, the shape the API exposes as `tags`."""
        return [tag.id for tag in self.tags]

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
