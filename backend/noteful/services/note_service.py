"""
Noteful Backend: Note Service
=============================

What:  Business logic for /api/notes: search/filter listing and CRUD.
How:   Builds Mongo-style filters for the document store, validates folder
       and tag references before writing, and shapes NoteResponse objects.
Who:   Called by the notes route handlers.

Listing filters (all optional, combined with AND):
    searchTerm → {"$or": [{"title": /term/i}, {"content": /term/i}]}
    folderId   → {"folder_id": id}
    tagId      → {"tags": id}
    A filter that cannot match (e.g. a malformed id) yields [] rather than
    an error.

Reference validation on create/update:
    folderId: "" or null means unfiled; otherwise well-formed and existing
    tags:     array of well-formed ids of existing tags (duplicates collapse)
"""

import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import InvalidIdentifierError, NotFoundError, ValidationError
from noteful.identifiers import is_valid_id, normalize_id
from noteful.models import Folder, Note, Tag
from noteful.schemas.note import NoteInput, NoteQuery, NoteResponse
from noteful.store import Collection

logger = logging.getLogger(__name__)


class NoteService:
    """
    Stateless; every method receives the request's session.

    Responsibilities:
        - list_notes(): search and relational filtering, newest first
        - get_note() / create_note() / update_note() / delete_note()
    """

    @staticmethod
    def _check_id(note_id: str) -> None:
        if not is_valid_id(note_id):
            raise InvalidIdentifierError(field="id", value=note_id)

    @staticmethod
    def build_filter(query: NoteQuery) -> Optional[Dict[str, Any]]:
        """
        Translate list query parameters into a store filter.

        Returns None when the query can never match anything, so the caller
        can skip the store round trip.
        """
        filter: Dict[str, Any] = {}

        if query.search_term:
            # The term is matched literally, not as a pattern
            pattern = {"$regex": re.escape(query.search_term), "$options": "i"}
            filter["$or"] = [{"title": pattern}, {"content": pattern}]

        if query.folder_id:
            if not is_valid_id(query.folder_id):
                return None
            filter["folder_id"] = normalize_id(query.folder_id)

        if query.tag_id:
            if not is_valid_id(query.tag_id):
                return None
            filter["tags"] = normalize_id(query.tag_id)

        return filter

    async def list_notes(self, db: AsyncSession, query: NoteQuery) -> List[NoteResponse]:
        filter = self.build_filter(query)
        if filter is None:
            return []
        notes = await Collection(db, Note).find(filter, sort={"updated_at": -1})
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        self._check_id(note_id)
        note = await Collection(db, Note).find_by_id(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteInput) -> NoteResponse:
        if not payload.title:
            raise ValidationError(message="Missing `title` in request body", field="title")

        fields: Dict[str, Any] = {
            "title": payload.title,
            "content": payload.content or "",
            "folder_id": await self._check_folder(db, payload.folder_id),
            "tags": await self._check_tags(db, payload.tags),
        }

        note = await Collection(db, Note).create(fields)
        logger.info("Created note %s", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(self, db: AsyncSession, note_id: str, payload: NoteInput) -> NoteResponse:
        """
        Partial update: only fields present in the body are written.

        An explicit `"folderId": null` (or "") detaches the note from its
        folder; an explicit `"tags": null` clears the tag set.
        """
        self._check_id(note_id)
        present = payload.model_fields_set
        changes: Dict[str, Any] = {}

        if "title" in present:
            if not payload.title:
                raise ValidationError(message="Missing `title` in request body", field="title")
            changes["title"] = payload.title
        if "content" in present:
            changes["content"] = payload.content or ""
        if "folder_id" in present:
            changes["folder_id"] = await self._check_folder(db, payload.folder_id)
        if "tags" in present:
            changes["tags"] = await self._check_tags(db, payload.tags)

        note = await Collection(db, Note).find_by_id_and_update(note_id, changes)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Updated note %s (%s)", note.id, ", ".join(sorted(changes)) or "touch")
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        self._check_id(note_id)
        removed = await Collection(db, Note).find_by_id_and_remove(note_id)
        if removed is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Deleted note %s", note_id)

    # ── Reference validation ──────────────────────────────────────────────

    async def _check_folder(self, db: AsyncSession, folder_id: Optional[str]) -> Optional[str]:
        if not folder_id:
            return None
        if not is_valid_id(folder_id):
            raise InvalidIdentifierError(field="folderId", value=folder_id)
        if await Collection(db, Folder).find_by_id(folder_id) is None:
            raise ValidationError(message="The `folderId` does not exist", field="folderId")
        return normalize_id(folder_id)

    async def _check_tags(self, db: AsyncSession, tags: Any) -> List[str]:
        if tags is None:
            return []
        if not isinstance(tags, list):
            raise ValidationError(message="The `tags` property must be an array", field="tags")
        if not all(is_valid_id(tag) for tag in tags):
            raise ValidationError(message="The `tags` array contains an invalid `id`", field="tags")

        tag_ids = list(dict.fromkeys(normalize_id(tag) for tag in tags))
        if tag_ids:
            found = await Collection(db, Tag).count({"id": {"$in": tag_ids}})
            if found != len(tag_ids):
                raise ValidationError(message="The `tags` array contains a missing tag", field="tags")
        return tag_ids


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
