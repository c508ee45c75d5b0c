"""Request context for resolvers.

A context is built fresh for every API request and carries:
- repositories (stateless, bound to the shared session factory)
- loaders (request-scoped batching + cache)

    ctx = build_request_context(session_factory, hasher, settings)
    user = await ctx.users.get(user_id)
    posts = await ctx.loaders.posts_by_author.load(user.id)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from blog_api.config.settings import Settings, get_settings
from blog_api.loaders import DataLoaders, create_dataloaders
from blog_api.repositories import PostRepository, UserRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from blog_api.repositories import PasswordHasher


@dataclass
class RequestContext:
    users: UserRepository
    posts: PostRepository
    loaders: DataLoaders


def build_request_context(
    session_factory: async_sessionmaker[AsyncSession],
    hasher: PasswordHasher,
    settings: Settings | None = None,
) -> RequestContext:
    """Assemble repositories and a fresh set of loaders for one request."""
    settings = settings or get_settings()
    return RequestContext(
        users=UserRepository(session_factory, hasher),
        posts=PostRepository(session_factory),
        loaders=create_dataloaders(session_factory, settings.LOADER_MAX_BATCH_SIZE),
    )


__all__ = ["RequestContext", "build_request_context"]
