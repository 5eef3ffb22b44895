"""
Noteful Backend: Shared Document Columns
========================================

What:  The id and timestamp columns every collection carries.
How:   Declarative mixin; ids come from noteful.identifiers.new_id and
       timestamps from noteful.database.utcnow.
"""

from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import UTCDateTime, utcnow
from noteful.identifiers import ID_LENGTH, new_id


class DocumentMixin:
    """
    Store-assigned identity plus createdAt/updatedAt.

    `id` is immutable once assigned. `updated_at` is rewritten by the store
    adapter on every mutation, cascades included.
    """

    id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        primary_key=True,
        default=new_id,
        comment="24-hex document id, assigned on insert",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="When this document was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        comment="When this document was last modified (UTC)",
    )
