"""
Noteful Backend: Named Resource Service
=======================================

What:  CRUD logic shared by the two resources whose natural key is `name`
       (tags and folders).
How:   Validates ids and bodies, calls the document store, rewrites duplicate
       key errors into resource-specific 400s, and gives subclasses a hook to
       clean up notes before a document is removed.
Who:   Subclassed by TagService and FolderService.

Order of checks for every by-id operation:
    1. id well-formed?         no  → InvalidIdentifierError (400), no query
    2. body valid?             no  → ValidationError (400), no query
    3. store call
    4. document found?         no  → NotFoundError (404)
    5. duplicate name?         yes → ValidationError (400)
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import InvalidIdentifierError, NotFoundError, ValidationError
from noteful.identifiers import is_valid_id
from noteful.store import Collection, DuplicateKeyError

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class NamedResourceService(Generic[ResponseT]):
    """
    Base service for a collection of uniquely named documents.

    Subclasses set `resource` (used in messages), `model` (ORM class) and
    `response_model`, and may override `before_remove`.
    """

    resource: str = "resource"
    model: Type = None
    response_model: Type[ResponseT] = None

    def collection(self, db: AsyncSession) -> Collection:
        return Collection(db, self.model)

    def _serialize(self, doc) -> ResponseT:
        return self.response_model.model_validate(doc)

    @staticmethod
    def _check_id(doc_id: str) -> None:
        if not is_valid_id(doc_id):
            raise InvalidIdentifierError(field="id", value=doc_id)

    def _duplicate(self, name: str) -> ValidationError:
        return ValidationError(
            message=f"This {self.resource} `name` already exist",
            field="name",
            context={"value": name},
        )

    # ── Operations ────────────────────────────────────────────────────────

    async def list(self, db: AsyncSession) -> List[ResponseT]:
        """All documents, sorted ascending by name."""
        docs = await self.collection(db).find(sort={"name": 1})
        return [self._serialize(doc) for doc in docs]

    async def get(self, db: AsyncSession, doc_id: str) -> ResponseT:
        self._check_id(doc_id)
        doc = await self.collection(db).find_by_id(doc_id)
        if doc is None:
            raise NotFoundError(resource=self.resource, resource_id=doc_id)
        return self._serialize(doc)

    async def create(self, db: AsyncSession, name: Optional[str]) -> ResponseT:
        if not name:
            raise ValidationError(message="Missing `name` from request body", field="name")

        try:
            doc = await self.collection(db).create({"name": name})
        except DuplicateKeyError:
            raise self._duplicate(name)

        logger.info("Created %s %s (%s)", self.resource, doc.id, name)
        return self._serialize(doc)

    async def update(self, db: AsyncSession, doc_id: str, name: Optional[str]) -> ResponseT:
        self._check_id(doc_id)
        if not name:
            raise ValidationError(message="Missing `name` in request body", field="name")

        try:
            doc = await self.collection(db).find_by_id_and_update(doc_id, {"name": name})
        except DuplicateKeyError:
            raise self._duplicate(name)

        if doc is None:
            raise NotFoundError(resource=self.resource, resource_id=doc_id)
        logger.info("Renamed %s %s to %s", self.resource, doc.id, name)
        return self._serialize(doc)

    async def delete(self, db: AsyncSession, doc_id: str) -> None:
        """
        Remove a document and clean up the notes that reference it.

        Both writes share the request's transaction: if the document turns
        out not to exist the NotFoundError rolls the note cleanup back too.
        """
        self._check_id(doc_id)
        affected = await self.before_remove(db, doc_id)
        removed = await self.collection(db).find_by_id_and_remove(doc_id)
        if removed is None:
            raise NotFoundError(resource=self.resource, resource_id=doc_id)
        logger.info("Deleted %s %s; %d note(s) updated", self.resource, doc_id, affected)

    async def before_remove(self, db: AsyncSession, doc_id: str) -> int:
        """Update dependent notes; returns how many were modified."""
        return 0
