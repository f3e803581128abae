"""
Notes Service

List/create/delete operations over an injected NoteStore.

Input is checked before the store is touched. Store failures are logged with
their traceback and surfaced as StoreError on the first attempt (no retries).
"""

import logging
import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from mail_notes.core.exceptions import InvalidInputError, StoreError
from mail_notes.models import (
    DEFAULT_CREATED_BY,
    DEFAULT_TAG_COLOR,
    DEFAULT_TAG_NAME,
    Note,
)
from mail_notes.repositories.notes import NoteStore
from mail_notes.schemas.notes import NoteCreate

logger = logging.getLogger(__name__)

MESSAGE_ID_REQUIRED = "messageId is required"
CREATE_FIELDS_REQUIRED = "messageId and text are required"
INVALID_NOTE_ID = "id must be a valid UUID"


@contextmanager
def _store_operation(operation: str) -> Iterator[None]:
    try:
        yield
    except Exception as e:
        logger.exception(f"Note store failure during {operation}")
        raise StoreError() from e


class NotesService:
    """
    Stateless request handling for notes.

    Args:
        store: Any NoteStore (NoteRepository in production, InMemoryNoteStore
            in tests).
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store

    async def list_notes(self, message_id: str | None) -> Sequence[Note]:
        """Notes attached to ``message_id`` (exact match), oldest first."""
        if not message_id:
            raise InvalidInputError(MESSAGE_ID_REQUIRED)

        with _store_operation("list"):
            return await self.store.list_by_message_id(message_id)

    async def create_note(self, payload: NoteCreate) -> Note:
        """
        Persist a new note and return it as stored.

        Omitted (or empty) optional fields get their defaults; ``snippet_key``
        is stored as given, or NULL.
        """
        if not payload.message_id or not payload.text:
            raise InvalidInputError(CREATE_FIELDS_REQUIRED)

        note_data = {
            "id": uuid.uuid4(),
            "message_id": payload.message_id,
            "text": payload.text,
            "tag_name": payload.tag_name or DEFAULT_TAG_NAME,
            "tag_color": payload.tag_color or DEFAULT_TAG_COLOR,
            "snippet_key": payload.snippet_key or None,
            "created_by": payload.created_by or DEFAULT_CREATED_BY,
        }

        with _store_operation("create"):
            note = await self.store.insert(note_data)

        logger.info(f"Created note {note.id} for message {note.message_id}")
        return note

    async def delete_note(self, note_id: str | uuid.UUID) -> None:
        """Delete one note. Unknown ids are not an error."""
        if not isinstance(note_id, uuid.UUID):
            try:
                note_id = uuid.UUID(note_id)
            except ValueError as e:
                raise InvalidInputError(INVALID_NOTE_ID) from e

        with _store_operation("delete"):
            deleted = await self.store.delete_by_id(note_id)

        if deleted:
            logger.info(f"Deleted note {note_id}")
        else:
            logger.debug(f"Delete of unknown note {note_id} ignored")

    async def clear_notes(self) -> int:
        """Delete every note. Only reachable when bulk delete is enabled."""
        with _store_operation("clear"):
            removed = await self.store.delete_all()

        logger.warning(f"Bulk delete removed {removed} notes")
        return removed
