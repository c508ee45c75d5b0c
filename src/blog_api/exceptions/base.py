"""
Domain errors raised by repositories and batch loaders.

Every failure that crosses the repository / loader boundary is an `AppError`.
Raw driver errors (SQLAlchemy, asyncpg, aiosqlite, pydantic decode errors) are
mapped into one of the three concrete variants below and never leak further.
"""

import copy
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of domain failure kinds."""

    DB_ERROR = "db_error"
    NOT_FOUND = "not_found"
    INVALID_FIELD = "invalid_field"


# Default user-facing messages, used when no explicit user_message is set.
DEFAULT_MESSAGES = {
    ErrorKind.DB_ERROR: "An unexpected error has occurred",
    ErrorKind.NOT_FOUND: "The requested item was not found",
    ErrorKind.INVALID_FIELD: "Invalid value provided",
}


class AppError(Exception):
    """
    Base exception for repository/loader errors.

    - kind: one of ErrorKind (decides the default message and the HTTP status)
    - user_message: human-friendly message (safe to show to clients)
    - internal_cause: raw driver / diagnostic text (for logs only, never serialized)
    """

    kind: ErrorKind = ErrorKind.DB_ERROR

    # Map kind -> HTTP status used by the API layer.
    KIND_TO_STATUS = {
        ErrorKind.DB_ERROR: 500,
        ErrorKind.NOT_FOUND: 404,
        ErrorKind.INVALID_FIELD: 400,
    }

    def __init__(self, user_message: str | None = None, *, internal_cause: str | None = None):
        super().__init__(user_message or DEFAULT_MESSAGES[self.kind])
        self.user_message = user_message
        self.internal_cause = internal_cause

    @property
    def message(self) -> str:
        """Explicit user_message if set, otherwise the default text for the kind."""
        if self.user_message:
            return self.user_message
        return DEFAULT_MESSAGES[self.kind]

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"user_message={self.user_message!r}, internal_cause={self.internal_cause!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return (self.kind, self.user_message, self.internal_cause) == (
            other.kind,
            other.user_message,
            other.internal_cause,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.user_message, self.internal_cause))

    def clone(self) -> "AppError":
        """
        Return an independent copy of this error.

        Used when one batch failure is delivered to several waiting callers: each
        caller raises its own instance, so tracebacks and __context__ are not shared.
        """
        duplicate = copy.copy(self)
        duplicate.__traceback__ = None
        duplicate.__context__ = None
        duplicate.__cause__ = None
        return duplicate

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for API responses.

        Shape: {"error": "A human-friendly message"}.
        internal_cause is deliberately left out.
        """
        return {"error": self.message}

    def http_status(self) -> int:
        return self.KIND_TO_STATUS[self.kind]


class DatabaseError(AppError):
    """Opaque internal failure: connection loss, decode failure, unclassified storage error."""

    kind = ErrorKind.DB_ERROR

    @classmethod
    def from_exception(cls, exc: BaseException, *, operation: str | None = None) -> "DatabaseError":
        """Wrap any driver / pool / decode exception; its text is kept as internal cause only."""
        cause = f"{type(exc).__name__}: {exc}"
        if operation:
            cause = f"[{operation}] {cause}"
        return cls(internal_cause=cause)


class NotFoundError(AppError):
    """A single-entity lookup found nothing."""

    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_entity(cls, entity_name: str, entity_id: object) -> "NotFoundError":
        return cls(f"{entity_name} with id {entity_id} not found")


class InvalidFieldError(AppError):
    """Caller input violates a data constraint (uniqueness, foreign key, ...)."""

    kind = ErrorKind.INVALID_FIELD


__all__ = [
    "ErrorKind",
    "DEFAULT_MESSAGES",
    "AppError",
    "DatabaseError",
    "NotFoundError",
    "InvalidFieldError",
]
