"""
Noteful Backend: Folder Model
=============================

What:  ORM model for the `folders` collection.
How:   `name` is the natural key, unique at the store level. Deleting a
       folder detaches its notes (folder_id → NULL); the foreign key's
       ON DELETE SET NULL backs up the explicit detach done by FolderService.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.document import DocumentMixin


class Folder(DocumentMixin, Base):
    """A named container; a note lives in at most one folder."""

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Folder name, unique across all folders",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
