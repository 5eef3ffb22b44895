"""
Noteful Backend: User Route Handlers
====================================

What:  POST /api/users (register) and POST /api/login (credential check).
How:   Passes the raw body to UserService; the service owns every rule.

Login answers with the public user on success. It issues no token and
starts no session.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.user import LoginInput, UserInput, UserResponse
from noteful.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=201,
    responses={400: {"description": "Invalid or duplicate registration", "model": ErrorResponse}},
    summary="Register a user",
)
async def create_user(
    request: Request,
    response: Response,
    body: Optional[UserInput] = None,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.create_user(db, body or UserInput())
    response.headers["Location"] = f"{request.url.path}/{user.id}"
    return user


@router.post(
    "/login",
    response_model=UserResponse,
    responses={
        400: {"description": "Missing credentials", "model": ErrorResponse},
        401: {"description": "Incorrect username or password", "model": ErrorResponse},
    },
    summary="Check a username/password pair",
)
async def login(body: Optional[LoginInput] = None, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.authenticate(db, body or LoginInput())
