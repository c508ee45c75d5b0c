from sqlalchemy import String, DateTime, Text, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from blog_api.database.base import Base
import uuid
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .post import Post


class User(Base):
    """
    SQLAlchemy model for User.

    Represents a blog author with credentials, profile information,
    and a one-to-many relationship with posts.
    """
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )

    # Username and email are both unique; a clash on either is reported to the
    # caller as "Username or email address already in use."
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )

    email: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    # Password hash (never the plain-text password)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # --- Relationships ---

    # One-to-Many: a user authors many posts. Resolvers go through the
    # posts-by-author loader instead of this attribute to avoid N+1 queries.
    posts: Mapped[list["Post"]] = relationship(
        "Post",
        back_populates="author",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, email={self.email!r})>"
