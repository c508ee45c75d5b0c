"""
Classify SQLAlchemy IntegrityErrors by the constraint that failed.

The classification is internal: repositories never raise a ConstraintKind,
they use it to pick the app-level error (see mapper.py).

Postgres drivers expose the SQLSTATE code (asyncpg adapter: `pgcode`,
psycopg: `sqlstate`). SQLite and others only give us a message, so we fall
back to keyword matching on the driver text.
"""
import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    NOT_NULL = "not_null"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_CONSTRAINT_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ConstraintKind.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ConstraintKind.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ConstraintKind.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION.value: ConstraintKind.CHECK,
}

_MESSAGE_KEYWORDS = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)


def get_sqlstate(orig: object) -> str | None:
    """Return the SQLSTATE carried by a DBAPI exception, if the driver exposes one."""
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return str(code) if code else None


def _classify_from_sqlstate(orig: object) -> ConstraintKind | None:
    code = get_sqlstate(orig)
    if not code:
        return None

    kind = PGCODE_CONSTRAINT_MAP.get(code)
    if kind is not None:
        logger.debug("integrity.sqlstate", extra={"sqlstate": code, "constraint_kind": kind.value})
        return kind

    logger.warning("integrity.unknown_sqlstate", extra={"sqlstate": code})
    return ConstraintKind.UNKNOWN


def _classify_from_message(msg: str) -> ConstraintKind:
    normalized = msg.lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    # Unknown message: warn so it surfaces to monitoring, raw text stays at DEBUG
    logger.warning("integrity.unknown_message", extra={"message_snippet": msg[:200]})
    logger.debug("integrity.unknown_message_raw", extra={"raw": msg})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> ConstraintKind:
    """
    Heuristically classify a SQLAlchemy IntegrityError.

    Prefers the SQLSTATE code when available, then the driver message.
    """
    orig = exc.orig
    kind = _classify_from_sqlstate(orig)
    if kind is not None:
        return kind
    return _classify_from_message(str(orig) if orig is not None else str(exc))


__all__ = [
    "ConstraintKind",
    "PostgresErrorCodes",
    "classify_integrity_error",
    "get_sqlstate",
]
