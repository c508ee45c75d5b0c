"""
Post repository.

Single-post lookups and creation. Posts of many authors at once are served by
`blog_api.loaders.posts.PostsByAuthorBatcher`, not by this class.
"""
import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.models.post import Post
from blog_api.schemas import CreatePost, PostRead

from .base_repository import BaseRepository


class PostRepository(BaseRepository[Post, PostRead]):
    """Repository for Post entity operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(Post, PostRead, session_factory)

    async def create(self, data: CreatePost) -> PostRead:
        """
        Create a post; a missing slug defaults to a random UUID string.

        Raises:
            InvalidFieldError: slug already taken, or author does not exist.
            DatabaseError: any other storage failure, or no row returned.
        """
        slug = data.slug or str(uuid.uuid4())

        return await self._insert(
            {
                "author_id": data.author_id,
                "slug": slug,
                "title": data.title,
                "description": data.description,
                "body": data.body,
            },
            operation="create_post",
            on_unique=f"Slug {slug} already exists.",
            on_foreign_key=f"Author with id {data.author_id} does not exist.",
        )
