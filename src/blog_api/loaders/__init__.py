"""DataLoader container and factory.

Loaders batch and cache database lookups within a single request, preventing
N+1 queries in GraphQL resolvers. Each request gets its own container so the
batching boundaries and caches never cross requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import DEFAULT_MAX_BATCH_SIZE, BatchLoader
from .posts import PostLoader, PostsByAuthorBatcher, get_posts_loader

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@dataclass
class DataLoaders:
    """Container for all loader instances of one request.

    Usage in a resolver:
        posts = await ctx.loaders.posts_by_author.load(user.id)
    """

    posts_by_author: PostLoader


def create_dataloaders(
    session_factory: async_sessionmaker[AsyncSession],
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
) -> DataLoaders:
    """Factory for request-scoped loaders."""
    return DataLoaders(
        posts_by_author=get_posts_loader(session_factory, max_batch_size),
    )


__all__ = [
    "BatchLoader",
    "DataLoaders",
    "PostLoader",
    "PostsByAuthorBatcher",
    "create_dataloaders",
    "get_posts_loader",
]
