"""Base repository: generic lookup, create, update, and delete on one ORM model."""

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.database import after_commit as queue_after_commit


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_entity, count, create, save, and delete.

    Subclasses expose DTO-returning methods to the application layer and
    keep ORM entities internal.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Run callback once the current transaction has committed."""
        queue_after_commit(self.db, callback)

    async def get_entity(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def count_where(self, *criteria: Any) -> int:
        """Return the number of rows matching all criteria."""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and refresh server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and refresh it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply_changes(self, obj: ModelType, changes: dict[str, Any]) -> ModelType:
        """Set the given attributes on obj and save. Unknown attributes raise AttributeError."""
        for key, value in changes.items():
            if not hasattr(obj, key):
                raise AttributeError(f"{self.model.__name__} has no attribute {key!r}")
            setattr(obj, key, value)
        return await self.save(obj)

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
