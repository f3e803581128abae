"""
Note Schemas

Pydantic models for Note API request/response validation.
JSON attributes are camelCase (``messageId``, ``tagColor``...) to match the
browser extension client; Python attributes stay snake_case.
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, snake_case names also accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(CamelModel):
    """
    Request schema for POST /notes.

    Every field is optional at the schema level: missing ``messageId``/``text``
    is reported by the service with the documented 400 message, not as a
    validation error. ``color`` is accepted as the legacy name of ``tagColor``.
    """

    message_id: str | None = None
    text: str | None = None
    tag_name: str | None = None
    tag_color: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tagColor", "color", "tag_color"),
    )
    snippet_key: str | None = None
    created_by: str | None = None


class NoteRead(CamelModel):
    """A note as persisted, including generated and defaulted fields."""

    id: uuid.UUID
    message_id: str
    text: str
    tag_name: str
    tag_color: str
    snippet_key: str | None = None
    created_by: str
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Enables ORM model conversion
    )


class NoteListResponse(BaseModel):
    """Response schema for GET /notes."""

    notes: list[NoteRead]


class NoteEnvelope(BaseModel):
    """Response schema for POST /notes."""

    note: NoteRead


class OkResponse(BaseModel):
    """Acknowledgement for delete operations."""

    ok: bool = True
