"""
Noteful Backend: Folder Schemas
===============================

What:  Request body and response shape for /api/folders.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FolderInput(BaseModel):
    """Body of POST /api/folders and PUT /api/folders/{id}."""
    name: Optional[str] = Field(default=None, description="Folder name (required, unique)")


class FolderResponse(BaseModel):
    id: str
    name: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
