"""
Noteful Backend: Tag Route Handlers
===================================

What:  GET/POST /api/tags and GET/PUT/DELETE /api/tags/{id}.
How:   Extracts path and body data, delegates to TagService, sets status
       codes and the Location header.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.tag import TagInput, TagResponse
from noteful.services.tag_service import tag_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tags", tags=["Tags"])

_BY_ID_ERRORS = {
    400: {"description": "Malformed id or invalid body", "model": ErrorResponse},
    404: {"description": "Tag not found", "model": ErrorResponse},
}


@router.get("", response_model=List[TagResponse], summary="List all tags, sorted by name")
async def list_tags(db: AsyncSession = Depends(get_db_session)) -> List[TagResponse]:
    return await tag_service.list(db)


@router.get("/{tag_id}", response_model=TagResponse, responses=_BY_ID_ERRORS, summary="Get a tag")
async def get_tag(tag_id: str, db: AsyncSession = Depends(get_db_session)) -> TagResponse:
    return await tag_service.get(db, tag_id)


@router.post(
    "",
    response_model=TagResponse,
    status_code=201,
    responses={400: {"description": "Missing or duplicate name", "model": ErrorResponse}},
    summary="Create a tag",
)
async def create_tag(
    request: Request,
    response: Response,
    body: Optional[TagInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    tag = await tag_service.create(db, body.name if body else None)
    response.headers["Location"] = f"{request.url.path}/{tag.id}"
    return tag


@router.put("/{tag_id}", response_model=TagResponse, responses=_BY_ID_ERRORS, summary="Rename a tag")
async def update_tag(
    tag_id: str,
    body: Optional[TagInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.update(db, tag_id, body.name if body else None)


@router.delete(
    "/{tag_id}",
    status_code=204,
    response_class=Response,
    responses=_BY_ID_ERRORS,
    summary="Delete a tag and remove it from every note",
)
async def delete_tag(tag_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await tag_service.delete(db, tag_id)
    return Response(status_code=204)
