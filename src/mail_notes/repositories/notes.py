"""
Note Repository

Data access layer for Note entities, plus the ``NoteStore`` interface the
service layer depends on.
"""

import uuid
from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mail_notes.models import Note
from mail_notes.repositories.base import BaseRepository


class NoteStore(Protocol):
    """Persistence capabilities required by NotesService."""

    async def insert(self, note_data: dict[str, Any]) -> Note: ...

    async def list_by_message_id(self, message_id: str) -> Sequence[Note]: ...

    async def delete_by_id(self, note_id: uuid.UUID) -> bool: ...

    async def delete_all(self) -> int: ...


class NoteRepository(BaseRepository[Note]):
    """
    Relational NoteStore backed by async SQLAlchemy.

    Inherits create/delete_by_id/delete_all from BaseRepository and adds
    the message-id lookup.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(Note, session_factory)

    async def insert(self, note_data: dict[str, Any]) -> Note:
        """Persist one note row; created_at is assigned by the database."""
        return await self.create(note_data)

    async def list_by_message_id(self, message_id: str) -> Sequence[Note]:
        """
        All notes attached to ``message_id`` (exact match), oldest first.

        Served by the ix_notes_message_id index.
        """
        # Ties on created_at are left to the store.
        stmt = (
            select(Note)
            .where(Note.message_id == message_id)
            .order_by(Note.created_at.asc())
        )
        async with self.session_factory() as session:
            result = await session.scalars(stmt)
            return result.all()
