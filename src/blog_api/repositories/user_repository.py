"""
User repository.

Adds user creation on top of BaseRepository: the password is hashed through
an injected PasswordHasher (hashing itself lives outside this package) and a
unique-constraint clash on username or email is reported as an
InvalidFieldError.
"""
import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.exceptions.base import DatabaseError
from blog_api.models.user import User
from blog_api.schemas import CreateUser, UserRead

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "Username or email address already in use."


class PasswordHasher(Protocol):
    async def hash(self, password: str) -> str: ...


class UserRepository(BaseRepository[User, UserRead]):
    """Repository for User entity operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], hasher: PasswordHasher):
        super().__init__(User, UserRead, session_factory)
        self.hasher = hasher

    async def create(self, data: CreateUser) -> UserRead:
        """
        Create a user.

        Raises:
            InvalidFieldError: username or email already taken.
            DatabaseError: hashing or storage failure, or no row returned.
        """
        try:
            password_hash = await self.hasher.hash(data.password)
        except Exception as exc:
            logger.error(
                "repo.create_user.hash_failed",
                extra={"operation": "create_user", "internal_cause": f"{type(exc).__name__}: {exc}"},
            )
            raise DatabaseError.from_exception(exc, operation="create_user") from exc

        return await self._insert(
            {
                "username": data.username,
                "email": data.email,
                "password": password_hash,
                "bio": data.bio,
                "image": data.image,
            },
            operation="create_user",
            on_unique=DUPLICATE_USER_MESSAGE,
        )
