"""Pydantic schemas: create inputs and read models decoded from ORM rows."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateUser(BaseModel):
    """Payload used when creating a user. `password` is plain text and hashed by the repository."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1)
    bio: str | None = None
    image: str | None = Field(default=None, max_length=500)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lowercase + strip so case variants hit the unique constraint."""
        return v.strip().lower()


class UserRead(BaseModel):
    """User as returned to API clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    bio: str | None = None
    image: str | None = None
    created_at: datetime
    updated_at: datetime


class CreatePost(BaseModel):
    """Payload used when creating a post. A missing slug is generated by the repository."""

    author_id: UUID
    slug: str | None = Field(default=None, min_length=1, max_length=200)
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    body: str


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    slug: str
    title: str
    description: str
    body: str
    created_at: datetime
    updated_at: datetime


__all__ = ["CreateUser", "UserRead", "CreatePost", "PostRead"]
