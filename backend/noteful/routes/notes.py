"""
Noteful Backend: Notes Route Handlers
=====================================

What:  GET/POST /api/notes and GET/PUT/DELETE /api/notes/{id}.
How:   Extracts query parameters and the body, delegates to NoteService,
       returns JSON.
Who:   Called by the Noteful client (noteful.client) and any browser UI.

Listing:
    GET /api/notes?searchTerm=gaga&folderId=<id>&tagId=<id>
    Every parameter is optional; given parameters must all match. Results
    are newest-updated first.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteInput, NoteQuery, NoteResponse
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])

_BY_ID_ERRORS = {
    400: {"description": "Malformed id or invalid body", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    summary="List notes, optionally searched and filtered",
    description=(
        "Returns every note matching all given filters, sorted by most recent "
        "update. `searchTerm` matches title or content case-insensitively; "
        "`folderId` and `tagId` restrict to one folder or one tag."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None, alias="searchTerm",
        description="Literal text to look for in title or content (case-insensitive)",
    ),
    folder_id: Optional[str] = Query(
        default=None, alias="folderId",
        description="Only notes in this folder",
    ),
    tag_id: Optional[str] = Query(
        default=None, alias="tagId",
        description="Only notes carrying this tag",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    query = NoteQuery(search_term=search_term, folder_id=folder_id, tag_id=tag_id)
    return await note_service.list_notes(db, query)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_BY_ID_ERRORS,
    summary="Get a single note by ID",
)
async def get_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=201,
    responses={400: {"description": "Missing title or bad reference", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    request: Request,
    response: Response,
    body: Optional[NoteInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note.

    `folderId` must name an existing folder (or be empty for an unfiled
    note); every entry of `tags` must name an existing tag.
    """
    note = await note_service.create_note(db, body or NoteInput())
    response.headers["Location"] = f"{request.url.path}/{note.id}"
    return note


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses=_BY_ID_ERRORS,
    summary="Update the fields present in the body",
)
async def update_note(
    note_id: str,
    body: Optional[NoteInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db, note_id, body or NoteInput())


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    response_class=Response,
    responses=_BY_ID_ERRORS,
    summary="Delete a note",
)
async def delete_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=204)
