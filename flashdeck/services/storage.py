"""
Flashdeck Backend — Storage Contract
======================================

What:  The persistence interface the resource layer is written against, plus
       its SQLAlchemy implementation.
How:   StorageBackend is an abstract class keyed by entity model and
       identifier. SQLAlchemyStorage implements it over the request's
       AsyncSession: every call flushes, and the session dependency commits
       or rolls back once the request finishes.
Who:   Used by the resource controllers and the entity relation accessors.

Error Handling:
    SQLAlchemy errors are logged with context and re-raised as DatabaseError,
    which the global handler turns into a generic 500. There is no retry.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.database import Base, get_db_session
from flashdeck.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class StorageBackend(ABC):
    """
    Abstract persistence contract.

    Contract:
        - Each call is atomic on its own; callers get no multi-call transaction
        - Lookups return None / empty lists rather than raising
        - Implementation-specific failures are wrapped in DatabaseError
    """

    @abstractmethod
    async def insert(self, entity: ModelT) -> uuid.UUID:
        """Persist a new entity and return its server-assigned identifier."""
        ...

    @abstractmethod
    async def find_by_id(self, model: Type[ModelT], entity_id: uuid.UUID) -> Optional[ModelT]:
        ...

    @abstractmethod
    async def find_all(self, model: Type[ModelT]) -> List[ModelT]:
        ...

    @abstractmethod
    async def find_by_foreign_key(
        self, model: Type[ModelT], fk_field: str, value: uuid.UUID
    ) -> List[ModelT]:
        """Every `model` row whose `fk_field` equals `value`, in storage order."""
        ...

    @abstractmethod
    async def update(self, entity: ModelT) -> None:
        ...

    @abstractmethod
    async def delete_by_id(self, model: Type[ModelT], entity_id: uuid.UUID) -> bool:
        """Delete one row. Returns False when nothing matched."""
        ...

    @abstractmethod
    async def delete_all(self, model: Type[ModelT]) -> int:
        """Delete every row of `model` unconditionally. Returns the row count."""
        ...


class SQLAlchemyStorage(StorageBackend):
    """
    StorageBackend over a single AsyncSession.

    The session is owned by the request (see get_db_session); this class
    never commits, it only flushes so generated identifiers are available.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, entity: ModelT) -> uuid.UUID:
        try:
            self.session.add(entity)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("insert", type(entity), e)
        logger.info("Inserted %s %s", type(entity).__name__, entity.id)
        return entity.id

    async def find_by_id(self, model: Type[ModelT], entity_id: uuid.UUID) -> Optional[ModelT]:
        try:
            result = await self.session.execute(select(model).where(model.id == entity_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._wrap("find_by_id", model, e, entity_id=str(entity_id))

    async def find_all(self, model: Type[ModelT]) -> List[ModelT]:
        try:
            result = await self.session.execute(select(model))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._wrap("find_all", model, e)

    async def find_by_foreign_key(
        self, model: Type[ModelT], fk_field: str, value: uuid.UUID
    ) -> List[ModelT]:
        column = getattr(model, fk_field)
        try:
            result = await self.session.execute(select(model).where(column == value))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._wrap("find_by_foreign_key", model, e, fk_field=fk_field)

    async def update(self, entity: ModelT) -> None:
        try:
            self.session.add(entity)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("update", type(entity), e, entity_id=str(entity.id))
        logger.debug("Updated %s %s", type(entity).__name__, entity.id)

    async def delete_by_id(self, model: Type[ModelT], entity_id: uuid.UUID) -> bool:
        try:
            result = await self.session.execute(delete(model).where(model.id == entity_id))
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("delete_by_id", model, e, entity_id=str(entity_id))
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted %s %s", model.__name__, entity_id)
        return deleted

    async def delete_all(self, model: Type[ModelT]) -> int:
        try:
            result = await self.session.execute(delete(model))
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("delete_all", model, e)
        logger.info("Cleared %d %s row(s)", result.rowcount, model.__name__)
        return result.rowcount

    @staticmethod
    def _wrap(operation: str, model: type, error: Exception, **context) -> DatabaseError:
        logger.error(
            "Storage %s on %s failed: %s", operation, model.__name__, error, exc_info=True
        )
        return DatabaseError(
            context={
                "operation": operation,
                "model": model.__name__,
                "error_type": type(error).__name__,
                **context,
            },
        )


# ── Request Dependency ────────────────────────────────────────────────────
async def get_storage(db: AsyncSession = Depends(get_db_session)) -> StorageBackend:
    """FastAPI dependency: storage bound to the request's session."""
    return SQLAlchemyStorage(db)
