"""
Noteful Backend: Entity Models
==============================

What:  SQLAlchemy models for the four collections plus the note/tag link.
How:   Importing this package registers every table on Base.metadata,
       which create_all(), drop_all() and Alembic all rely on.

Collections:
    - folders:   Folder   (name unique)
    - tags:      Tag      (name unique)
    - notes:     Note     (optional folder, set of tags via note_tags)
    - users:     User     (username unique, bcrypt password hash)
"""

from noteful.models.folder import Folder
from noteful.models.note import Note, note_tags
from noteful.models.tag import Tag
from noteful.models.user import User

__all__ = ["Folder", "Note", "Tag", "User", "note_tags"]
