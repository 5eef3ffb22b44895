"""
Noteful Backend: Tag Schemas
============================

What:  Request body and response shape for /api/tags.
How:   The request model declares `name` optional so a missing name reaches
       TagService and gets the resource-specific 400 message instead of
       FastAPI's generic 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TagInput(BaseModel):
    """Body of POST /api/tags and PUT /api/tags/{id}."""
    name: Optional[str] = Field(default=None, description="Tag label (required, unique)")


class TagResponse(BaseModel):
    """
    Serialized tag: exactly id, name, createdAt, updatedAt.
    """
    id: str = Field(description="Document id (24 hex characters)")
    name: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
