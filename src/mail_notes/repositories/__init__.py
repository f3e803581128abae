"""Repositories package."""

from mail_notes.repositories.base import BaseRepository
from mail_notes.repositories.memory import InMemoryNoteStore
from mail_notes.repositories.notes import NoteRepository, NoteStore

__all__ = [
    "BaseRepository",
    "InMemoryNoteStore",
    "NoteRepository",
    "NoteStore",
]
