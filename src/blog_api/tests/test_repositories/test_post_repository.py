import uuid

import pytest

from blog_api.exceptions.base import InvalidFieldError
from blog_api.repositories import PostRepository
from blog_api.schemas import CreatePost, PostRead, UserRead


@pytest.mark.asyncio
class TestPostRepositoryCreate:
    """
    Fixtures used:
      - post_repository: PostRepository bound to a fresh schema.
      - created_user: author for the posts.
      - create_post: factory wrapping post_repository.create().
    """

    async def test_create_post_success(self, post_repository: PostRepository, created_user: UserRead):
        post = await post_repository.create(
            CreatePost(
                author_id=created_user.id,
                slug="hello-world",
                title="Hello",
                description="First post",
                body="Lorem ipsum",
            )
        )

        assert isinstance(post, PostRead)
        assert post.author_id == created_user.id
        assert post.slug == "hello-world"
        assert post.title == "Hello"
        assert await post_repository.get(post.id) == post

    async def test_missing_slug_defaults_to_uuid(self, create_post, created_user: UserRead):
        post = await create_post(created_user.id)

        # raises ValueError if the slug is not a UUID string
        assert str(uuid.UUID(post.slug)) == post.slug

    async def test_default_slugs_are_unique(self, create_post, created_user: UserRead):
        first = await create_post(created_user.id)
        second = await create_post(created_user.id)

        assert first.slug != second.slug

    async def test_duplicate_slug(self, create_post, created_user: UserRead):
        await create_post(created_user.id, slug="taken")

        with pytest.raises(InvalidFieldError) as exc_info:
            await create_post(created_user.id, slug="taken")

        assert exc_info.value.message == "Slug taken already exists."
        assert exc_info.value.http_status() == 400

    async def test_unknown_author(self, create_post):
        ghost = uuid.uuid4()

        with pytest.raises(InvalidFieldError) as exc_info:
            await create_post(ghost, slug="orphan")

        assert exc_info.value.message == f"Author with id {ghost} does not exist."

    async def test_list_posts(self, post_repository: PostRepository, create_post, multiple_users):
        for user in multiple_users:
            await create_post(user.id)

        posts = await post_repository.list()

        assert len(posts) == 3
        assert {p.author_id for p in posts} == {u.id for u in multiple_users}
