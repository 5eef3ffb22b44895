"""
Noteful Backend: User Model
===========================

What:  ORM model for the `users` collection.
How:   `username` is the natural key. `password` only ever holds a bcrypt
       hash (see noteful.auth) and no response schema declares it.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.document import DocumentMixin


class User(DocumentMixin, Base):
    """An account that can log in with username and password."""

    __tablename__ = "users"

    fullname: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login name, unique across all users",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash; never serialized",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
