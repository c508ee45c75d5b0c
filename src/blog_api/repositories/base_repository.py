"""
Base repository class providing the non-batched database operations.

Repositories serve direct single-entity lookups (get / list / create). Lookups
of related collections for many parents at once go through the request-scoped
loaders in `blog_api.loaders` instead.

A repository holds no per-request state: it only keeps the session factory
(the shared connection source) and opens one AsyncSession per operation, so
the same instance may be reused across requests.

Every storage failure is mapped to an app-level error through
`storage_errors`; raw SQLAlchemy / driver exceptions never leave this layer.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Generic, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.database.base import Base
from blog_api.exceptions.base import DatabaseError, NotFoundError
from blog_api.exceptions.mapper import storage_errors

# Type variables for the ORM model and its read schema
ModelType = TypeVar("ModelType", bound=Base)
SchemaType = TypeVar("SchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType, SchemaType]):
    """
    Generic repository over one ORM model.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
        SchemaType: The pydantic read model rows are decoded into.
    """

    def __init__(
        self,
        model: Type[ModelType],
        schema: Type[SchemaType],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. User.
            schema: The pydantic model used to decode rows, e.g. UserRead.
            session_factory: async_sessionmaker shared across requests.
        """
        self.model = model
        self.schema = schema
        self.session_factory = session_factory

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _decode(self, row: ModelType) -> SchemaType:
        return self.schema.model_validate(row)

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get(self, id: UUID) -> SchemaType:
        """
        Fetch a single entity by primary key.

        Raises:
            NotFoundError: no row with this id.
            DatabaseError: storage or decode failure.
        """
        operation = f"get_{self.entity_name.lower()}"

        async with storage_errors(operation):
            async with self.session_factory() as session:
                result = await session.execute(select(self.model).where(self.model.id == id))
                row = result.scalars().first()
                entity = self._decode(row) if row is not None else None

        if entity is None:
            logger.info(
                "repo.get.not_found",
                extra={"model": self.entity_name, "operation": operation, "id": str(id)},
            )
            raise NotFoundError.for_entity(self.entity_name, id)

        return entity

    async def list(self) -> list[SchemaType]:
        """
        Fetch every entity of this type.

        An empty table is a successful empty list, never NotFoundError.
        """
        operation = f"list_{self.entity_name.lower()}s"

        async with storage_errors(operation):
            async with self.session_factory() as session:
                result = await session.execute(select(self.model))
                entities = [self._decode(row) for row in result.scalars()]

        logger.debug(
            "repo.list.success",
            extra={"model": self.entity_name, "operation": operation, "count": len(entities)},
        )
        return entities

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def _insert(
        self,
        values: dict[str, Any],
        *,
        operation: str,
        on_unique: str | None = None,
        on_foreign_key: str | None = None,
    ) -> SchemaType:
        """
        INSERT ... RETURNING a single row and commit.

        - unique / foreign key violations become InvalidFieldError with the given messages
        - any other storage failure becomes DatabaseError
        - an insert that returns no row fails with DatabaseError("Error creating <Entity>.")
        """
        logger.debug(
            "repo.create.start",
            extra={
                "model": self.entity_name,
                "operation": operation,
                # keys only, values may be sensitive
                "provided_keys": sorted(values.keys()),
            },
        )
        start = time.perf_counter()

        async with storage_errors(operation, on_unique=on_unique, on_foreign_key=on_foreign_key):
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        insert(self.model).values(**values).returning(self.model)
                    )
                    row = result.scalars().first()
                    entity = self._decode(row) if row is not None else None

        if entity is None:
            logger.error(
                "repo.create.no_row_returned",
                extra={"model": self.entity_name, "operation": operation},
            )
            raise DatabaseError(f"Error creating {self.entity_name}.")

        logger.info(
            "repo.create.success",
            extra={
                "model": self.entity_name,
                "operation": operation,
                "id": str(getattr(entity, "id", "")),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity
