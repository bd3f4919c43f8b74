"""
Auth API schemas (request/response models).

Request bodies are read leniently: a missing, empty or non-string field is
reported as a 400 with the frontend's `signUpError` message (or fails the
login lookup), never as a FastAPI validation error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator, model_validator


class _LenientBody(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def _object_only(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}

    @field_validator("*", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class RegisterRequest(_LenientBody):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(_LenientBody):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
