"""
Noteful Backend: Folder Service
===============================

What:  Business logic for /api/folders.
How:   NamedResourceService with a cascading detach on delete: notes filed
       in the folder keep existing, with `folderId` set to null.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.identifiers import normalize_id
from noteful.models import Folder, Note
from noteful.schemas.folder import FolderResponse
from noteful.services.named_resource import NamedResourceService
from noteful.store import Collection


class FolderService(NamedResourceService[FolderResponse]):
    resource = "folder"
    model = Folder
    response_model = FolderResponse

    async def before_remove(self, db: AsyncSession, doc_id: str) -> int:
        notes = Collection(db, Note)
        return await notes.update_many(
            {"folder_id": normalize_id(doc_id)},
            {"$set": {"folder_id": None}},
        )


folder_service = FolderService()
