"""
Noteful Backend: Tag Model
==========================

What:  ORM model for the `tags` collection.
How:   `name` is the natural key, unique at the store level. Notes reference
       tags through the note_tags association (see note.py).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.document import DocumentMixin


class Tag(DocumentMixin, Base):
    """A label that can be attached to any number of notes."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Tag label, unique across all tags",
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
