"""
Noteful Backend: User Schemas
=============================

What:  Registration/login bodies and the public user shape.
How:   Input fields are typed `Any` so UserService can report wrong types
       with its own message. UserResponse has no password field, so the
       hash can never be serialized.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserInput(BaseModel):
    """Body of POST /api/users."""
    fullname: Any = Field(default=None, description="Display name (optional)")
    username: Any = Field(default=None, description="Login name (required, unique)")
    password: Any = Field(default=None, description="Plaintext password, 8-72 characters")


class LoginInput(BaseModel):
    """Body of POST /api/login."""
    username: Any = None
    password: Any = None


class UserResponse(BaseModel):
    id: str
    fullname: str
    username: str

    model_config = ConfigDict(from_attributes=True)
