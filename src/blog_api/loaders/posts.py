"""Posts-by-author batch function and loader factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from blog_api.exceptions.mapper import storage_errors
from blog_api.models.post import Post
from blog_api.schemas import PostRead

from .base import DEFAULT_MAX_BATCH_SIZE, BatchLoader

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

PostLoader = BatchLoader["UUID", list[PostRead]]


class PostsByAuthorBatcher:
    """
    Batch function mapping author ids to their posts.

    One query per call: SELECT * FROM posts WHERE author_id IN (...).
    Rows are grouped by author_id keeping the order the database returned them
    in. Authors without posts are left out of the result; the loader turns
    them into empty lists.
    """

    operation = "get_posts_by_users_ids"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def __call__(self, author_ids: set[UUID]) -> dict[UUID, list[PostRead]]:
        logger.info("loader.posts_by_author.batch", extra={"key_count": len(author_ids)})

        posts_by_author: dict[UUID, list[PostRead]] = {}
        if not author_ids:
            return posts_by_author

        async with storage_errors(self.operation):
            async with self._session_factory() as session:
                stmt = select(Post).where(Post.author_id.in_(list(author_ids)))
                result = await session.execute(stmt)

                # decode inside the session; one bad row fails the whole batch
                for row in result.scalars():
                    post = PostRead.model_validate(row)
                    posts_by_author.setdefault(post.author_id, []).append(post)

        return posts_by_author


def get_posts_loader(
    session_factory: async_sessionmaker[AsyncSession],
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
) -> PostLoader:
    """Build a fresh posts-by-author loader; call once per request."""
    return BatchLoader(
        PostsByAuthorBatcher(session_factory),
        max_batch_size=max_batch_size,
        default_factory=list,
        name=PostsByAuthorBatcher.operation,
    )


__all__ = ["PostsByAuthorBatcher", "PostLoader", "get_posts_loader"]
