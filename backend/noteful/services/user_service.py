"""
Noteful Backend: User Service
=============================

What:  Account registration and username/password checks.
How:   Validates the registration body field by field, hashes the password
       with bcrypt off the event loop, and stores the user. Login compares
       a plaintext password with the stored hash.
Who:   Called by the users/login route handlers.

Registration rules:
    required:   username, password
    strings:    fullname, username, password
    trimmed:    username and password may not start or end with whitespace
    sizes:      username >= 1 character; password 8-72 characters
                (bcrypt ignores anything past 72 bytes)
"""

import asyncio
import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.auth import hash_password, verify_password
from noteful.exceptions import AuthenticationError, ValidationError
from noteful.models import User
from noteful.schemas.user import LoginInput, UserInput, UserResponse
from noteful.store import Collection, DuplicateKeyError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "password")
STRING_FIELDS = ("fullname", "username", "password")
TRIMMED_FIELDS = ("username", "password")
SIZED_FIELDS: Dict[str, Dict[str, int]] = {
    "username": {"min": 1},
    "password": {"min": 8, "max": 72},
}


class UserService:
    """Stateless; every method receives the request's session."""

    @staticmethod
    def validate_registration(body: Dict[str, Any]) -> None:
        """Raise ValidationError for the first rule the body breaks."""
        for field in REQUIRED_FIELDS:
            if body.get(field) is None:
                raise ValidationError(message=f"Missing `{field}` in request body", field=field)

        for field in STRING_FIELDS:
            if body.get(field) is not None and not isinstance(body[field], str):
                raise ValidationError(message="Incorrect field type: expected string", field=field)

        for field in TRIMMED_FIELDS:
            if body[field].strip() != body[field]:
                raise ValidationError(message="Cannot start or end with whitespace", field=field)

        for field, limits in SIZED_FIELDS.items():
            value = body[field]
            if "min" in limits and len(value) < limits["min"]:
                raise ValidationError(
                    message=f"Must be at least {limits['min']} characters long", field=field
                )
            if "max" in limits and len(value.encode("utf-8")) > limits["max"]:
                raise ValidationError(
                    message=f"Must be at most {limits['max']} characters long", field=field
                )

    async def create_user(self, db: AsyncSession, payload: UserInput) -> UserResponse:
        body = payload.model_dump()
        self.validate_registration(body)

        username = body["username"]
        fullname = (body.get("fullname") or "").strip()
        # CPU-bound; runs in a worker thread
        digest = await asyncio.to_thread(hash_password, body["password"])

        try:
            user = await Collection(db, User).create(
                {"fullname": fullname, "username": username, "password": digest}
            )
        except DuplicateKeyError:
            raise ValidationError(message="The username already exists", field="username")

        logger.info("Registered user %s (%s)", user.id, username)
        return UserResponse.model_validate(user)

    async def authenticate(self, db: AsyncSession, payload: LoginInput) -> UserResponse:
        """Return the user when the credentials match; AuthenticationError otherwise."""
        for field in REQUIRED_FIELDS:
            value = getattr(payload, field)
            if not value or not isinstance(value, str):
                raise ValidationError(message=f"Missing `{field}` in request body", field=field)

        user = await Collection(db, User).find_one({"username": payload.username})
        if user is None:
            logger.warning("Login failed: unknown username %s", payload.username)
            raise AuthenticationError()

        matches = await asyncio.to_thread(verify_password, payload.password, user.password)
        if not matches:
            logger.warning("Login failed: wrong password for %s", payload.username)
            raise AuthenticationError()

        return UserResponse.model_validate(user)


user_service = UserService()
