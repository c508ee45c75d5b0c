from fastapi import Request

from blog_api.config.settings import get_settings
from blog_api.context import RequestContext, build_request_context


def get_request_context(request: Request) -> RequestContext:
    # Per-request dependency. app.state holds the shared session factory and
    # password hasher, installed once at startup.
    return build_request_context(
        request.app.state.session_factory,
        request.app.state.password_hasher,
        getattr(request.app.state, "settings", None) or get_settings(),
    )
