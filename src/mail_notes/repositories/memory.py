"""
In-Memory Note Store

List-backed NoteStore for tests and database-free local runs.
"""

import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from mail_notes.models import Note


class InMemoryNoteStore:
    """
    NoteStore keeping notes in insertion order.

    ``calls`` counts invocations per capability so tests can assert that a
    request was rejected before reaching the store.
    """

    def __init__(self) -> None:
        self._notes: list[Note] = []
        self.calls: Counter[str] = Counter()

    def __len__(self) -> int:
        return len(self._notes)

    async def insert(self, note_data: dict[str, Any]) -> Note:
        self.calls["insert"] += 1
        note = Note(**note_data, created_at=datetime.now(timezone.utc))
        self._notes.append(note)
        return note

    async def list_by_message_id(self, message_id: str) -> Sequence[Note]:
        self.calls["list_by_message_id"] += 1
        matching = [n for n in self._notes if n.message_id == message_id]
        # sorted() is stable: equal timestamps keep insertion order
        return sorted(matching, key=lambda n: n.created_at)

    async def delete_by_id(self, note_id: uuid.UUID) -> bool:
        self.calls["delete_by_id"] += 1
        before = len(self._notes)
        self._notes = [n for n in self._notes if n.id != note_id]
        return len(self._notes) < before

    async def delete_all(self) -> int:
        self.calls["delete_all"] += 1
        removed = len(self._notes)
        self._notes.clear()
        return removed
