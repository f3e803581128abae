"""Models package - re-exports all models for convenient imports."""

from mail_notes.models.base import Base, CreatedAtMixin
from mail_notes.models.note import (
    DEFAULT_CREATED_BY,
    DEFAULT_TAG_COLOR,
    DEFAULT_TAG_NAME,
    Note,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "Note",
    "DEFAULT_CREATED_BY",
    "DEFAULT_TAG_COLOR",
    "DEFAULT_TAG_NAME",
]
