"""
Base Repository

Generic repository pattern implementation for async SQLAlchemy CRUD operations.
Each call opens a pooled session, runs a single statement and releases the
connection, so repositories are safe to share across concurrent requests.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mail_notes.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing the write operations shared by all entities.

    Usage:
        class NoteRepository(BaseRepository[Note]):
            def __init__(self, session_factory):
                super().__init__(Note, session_factory)
    """

    def __init__(
        self,
        model: type[ModelType],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self.model = model
        self.session_factory = session_factory

    async def create(self, obj_in: Any) -> ModelType:
        """
        Insert a new record and return it as stored.

        Uses INSERT ... RETURNING so database-generated fields (created_at)
        come back in the same round trip.

        Args:
            obj_in: Pydantic schema or dict with entity data.
        """
        data = obj_in.model_dump() if hasattr(obj_in, "model_dump") else obj_in
        stmt = insert(self.model).values(**data).returning(self.model)
        async with self.session_factory() as session:
            result = await session.scalars(stmt)
            db_obj = result.one()
            await session.commit()
        return db_obj

    async def delete_by_id(self, id: Any) -> bool:
        """Delete a record by primary key. Returns False if nothing matched."""
        stmt = delete(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def delete_all(self) -> int:
        """Delete every record of the model. Returns the number of rows removed."""
        async with self.session_factory() as session:
            result = await session.execute(delete(self.model))
            await session.commit()
        return result.rowcount or 0  # type: ignore[attr-defined]
