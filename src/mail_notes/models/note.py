"""
Note Model

A user annotation attached to an email message, keyed by an opaque message id.
Column definitions here must stay in sync with the migration steps in
``mail_notes.services.schema``. String columns are unbounded TEXT;
no length limits are imposed on client values.
"""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from mail_notes.models.base import Base, CreatedAtMixin

DEFAULT_TAG_NAME = "note"
DEFAULT_TAG_COLOR = "#fbbc04"
DEFAULT_CREATED_BY = "unknown"


class Note(Base, CreatedAtMixin):
    """
    Note entity.

    Attributes:
        id: UUID primary key, generated by the service on create.
        message_id: Email message/thread id, indexed (the only query filter).
        text: Annotation body.
        tag_name: Label shown on the note.
        tag_color: Display color (hex or label).
        snippet_key: Opaque client reference, never interpreted.
        created_by: Free-form author name.
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    message_id: Mapped[str] = mapped_column(Text, index=True)
    text: Mapped[str] = mapped_column(Text)
    tag_name: Mapped[str] = mapped_column(Text, server_default=DEFAULT_TAG_NAME)
    tag_color: Mapped[str] = mapped_column(Text, server_default=DEFAULT_TAG_COLOR)
    snippet_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(Text, server_default=DEFAULT_CREATED_BY)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, message_id='{self.message_id}')>"
