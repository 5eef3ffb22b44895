"""
Noteful Backend: Folder Route Handlers
======================================

What:  GET/POST /api/folders and GET/PUT/DELETE /api/folders/{id}.
How:   Extracts path and body data, delegates to FolderService, sets status
       codes and the Location header.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderInput, FolderResponse
from noteful.services.folder_service import folder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["Folders"])

_BY_ID_ERRORS = {
    400: {"description": "Malformed id or invalid body", "model": ErrorResponse},
    404: {"description": "Folder not found", "model": ErrorResponse},
}


@router.get("", response_model=List[FolderResponse], summary="List all folders, sorted by name")
async def list_folders(db: AsyncSession = Depends(get_db_session)) -> List[FolderResponse]:
    return await folder_service.list(db)


@router.get("/{folder_id}", response_model=FolderResponse, responses=_BY_ID_ERRORS, summary="Get a folder")
async def get_folder(folder_id: str, db: AsyncSession = Depends(get_db_session)) -> FolderResponse:
    return await folder_service.get(db, folder_id)


@router.post(
    "",
    response_model=FolderResponse,
    status_code=201,
    responses={400: {"description": "Missing or duplicate name", "model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    request: Request,
    response: Response,
    body: Optional[FolderInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    folder = await folder_service.create(db, body.name if body else None)
    response.headers["Location"] = f"{request.url.path}/{folder.id}"
    return folder


@router.put("/{folder_id}", response_model=FolderResponse, responses=_BY_ID_ERRORS, summary="Rename a folder")
async def update_folder(
    folder_id: str,
    body: Optional[FolderInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.update(db, folder_id, body.name if body else None)


@router.delete(
    "/{folder_id}",
    status_code=204,
    response_class=Response,
    responses=_BY_ID_ERRORS,
    summary="Delete a folder and unfile its notes",
)
async def delete_folder(folder_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await folder_service.delete(db, folder_id)
    return Response(status_code=204)
