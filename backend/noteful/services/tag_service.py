"""
Noteful Backend: Tag Service
============================

What:  Business logic for /api/tags.
How:   NamedResourceService with a cascading pull on delete: the tag's id is
       removed from the `tags` set of every note that holds it.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models import Note, Tag
from noteful.schemas.tag import TagResponse
from noteful.services.named_resource import NamedResourceService
from noteful.store import Collection


class TagService(NamedResourceService[TagResponse]):
    resource = "tag"
    model = Tag
    response_model = TagResponse

    async def before_remove(self, db: AsyncSession, doc_id: str) -> int:
        notes = Collection(db, Note)
        return await notes.update_many({"tags": doc_id}, {"$pull": {"tags": doc_id}})


tag_service = TagService()
