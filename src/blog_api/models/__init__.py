"""
Centralized access to all database models.

Importing this package registers every model with Base.metadata, so
`Base.metadata.create_all` sees the full schema.

    from blog_api.models import User, Post
"""

from .user import User
from .post import Post

__all__ = [
    "User",
    "Post",
]
