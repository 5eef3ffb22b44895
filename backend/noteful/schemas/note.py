"""
Noteful Backend: Note Schemas
=============================

What:  Request body, list query and response shape for /api/notes.
How:   JSON uses camelCase (folderId, createdAt); Python uses snake_case.
       Aliases bridge the two in both directions.

Response invariants:
    - `folderId` is always present (null when the note is unfiled)
    - `tags` is always present (empty list when untagged) and holds tag ids
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteInput(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    PUT is partial: NoteService only touches fields listed in
    `model_fields_set`, so an omitted field and an explicit null differ.
    `tags` is untyped here so a non-array can be reported with its own message.
    """
    title: Optional[str] = None
    content: Optional[str] = None
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    tags: Any = None

    model_config = ConfigDict(populate_by_name=True)


class NoteQuery(BaseModel):
    """Optional filters of GET /api/notes; all given filters must match."""
    search_term: Optional[str] = None
    folder_id: Optional[str] = None
    tag_id: Optional[str] = None


class NoteResponse(BaseModel):
    id: str
    title: str
    content: str
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    tags: List[str] = Field(default_factory=list, validation_alias="tag_ids")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
