"""
Repository layer.

    from blog_api.repositories import UserRepository, PostRepository
"""

from .base_repository import BaseRepository
from .user_repository import PasswordHasher, UserRepository
from .post_repository import PostRepository

__all__ = [
    "BaseRepository",
    "PasswordHasher",
    "UserRepository",
    "PostRepository",
]
