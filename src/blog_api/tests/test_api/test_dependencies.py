from fastapi import Depends, FastAPI
from starlette.testclient import TestClient

from blog_api.config.settings import Settings
from blog_api.context import RequestContext, build_request_context
from blog_api.core.dependencies import get_request_context
from blog_api.loaders import DataLoaders
from blog_api.repositories import PostRepository, UserRepository

from ..test_fixtures.repository_fixtures import FakePasswordHasher


def unused_session_factory():
    raise AssertionError("building a request context must not open a session")


class TestBuildRequestContext:
    def test_wires_repositories_and_loaders(self):
        hasher = FakePasswordHasher()
        settings = Settings(LOADER_MAX_BATCH_SIZE=25, _env_file=None)

        ctx = build_request_context(unused_session_factory, hasher, settings)

        assert isinstance(ctx, RequestContext)
        assert isinstance(ctx.users, UserRepository)
        assert isinstance(ctx.posts, PostRepository)
        assert isinstance(ctx.loaders, DataLoaders)
        assert ctx.users.hasher is hasher
        assert ctx.loaders.posts_by_author.max_batch_size == 25


class TestGetRequestContext:
    def test_fresh_loaders_per_request(self):
        app = FastAPI()
        app.state.session_factory = unused_session_factory
        app.state.password_hasher = FakePasswordHasher()
        app.state.settings = Settings(LOADER_MAX_BATCH_SIZE=3, _env_file=None)

        seen: list[RequestContext] = []

        @app.get("/ctx")
        async def ctx_route(ctx: RequestContext = Depends(get_request_context)):
            seen.append(ctx)
            return {"max_batch_size": ctx.loaders.posts_by_author.max_batch_size}

        client = TestClient(app)
        first = client.get("/ctx")
        second = client.get("/ctx")

        assert first.json() == {"max_batch_size": 3}
        assert second.status_code == 200
        assert len(seen) == 2
        assert seen[0].loaders.posts_by_author is not seen[1].loaders.posts_by_author
