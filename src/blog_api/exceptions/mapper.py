"""
Map storage-level failures to app-level errors.

`map_storage_error` is the single translation point; `storage_errors` is the
async context manager repositories and batch functions wrap their database
work in, so mapping and logging are not repeated in every method.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from .base import AppError, DatabaseError, InvalidFieldError
from .integrity_classifier import ConstraintKind, classify_integrity_error

logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def map_storage_error(
    exc: BaseException,
    *,
    operation: str,
    on_unique: str | None = None,
    on_foreign_key: str | None = None,
) -> AppError:
    """
    Translate a storage exception into exactly one AppError.

    - unique violation + `on_unique` -> InvalidFieldError(on_unique)
    - foreign key violation + `on_foreign_key` -> InvalidFieldError(on_foreign_key)
    - anything else (other constraints, connection/pool errors, decode errors) -> DatabaseError

    The driver message is kept as internal_cause and logged together with the
    operation name; it never becomes part of the user-facing message.
    """
    if isinstance(exc, AppError):
        return exc

    cause = _describe(exc)

    if isinstance(exc, IntegrityError):
        constraint = classify_integrity_error(exc)

        if constraint is ConstraintKind.UNIQUE and on_unique:
            # expected client-level scenario -> INFO, no stack trace
            logger.info(
                "mapper.unique_violation",
                extra={"operation": operation, "internal_cause": cause},
            )
            return InvalidFieldError(on_unique, internal_cause=cause)

        if constraint is ConstraintKind.FOREIGN_KEY and on_foreign_key:
            logger.info(
                "mapper.foreign_key_violation",
                extra={"operation": operation, "internal_cause": cause},
            )
            return InvalidFieldError(on_foreign_key, internal_cause=cause)

        logger.warning(
            "mapper.unmapped_integrity_error",
            extra={"operation": operation, "constraint_kind": constraint.value, "internal_cause": cause},
        )
        return DatabaseError(internal_cause=cause)

    if isinstance(exc, ValidationError):
        logger.error(
            "mapper.decode_error",
            extra={"operation": operation, "internal_cause": cause},
        )
        return DatabaseError(internal_cause=cause)

    logger.error(
        "mapper.storage_error",
        extra={"operation": operation, "error_type": type(exc).__name__, "internal_cause": cause},
    )
    return DatabaseError(internal_cause=cause)


@asynccontextmanager
async def storage_errors(
    operation: str,
    *,
    on_unique: str | None = None,
    on_foreign_key: str | None = None,
) -> AsyncIterator[None]:
    """
    Usage:
        async with storage_errors("create_user", on_unique="..."):
            ... DB ops that may raise ...

    AppErrors pass through untouched; everything else is mapped by
    map_storage_error and re-raised with the original exception chained.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        raise map_storage_error(
            exc,
            operation=operation,
            on_unique=on_unique,
            on_foreign_key=on_foreign_key,
        ) from exc


__all__ = ["map_storage_error", "storage_errors"]
