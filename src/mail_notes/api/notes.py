"""
Notes API Router

REST endpoints for notes attached to email messages.
Request handling is delegated to NotesService; error responses are produced
by the handlers in ``mail_notes.core.exception_handlers``.
"""

from fastapi import APIRouter, Depends, Query, Request, status

from mail_notes.schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteRead,
    OkResponse,
)
from mail_notes.services.notes import NotesService

router = APIRouter()

# Legacy DELETE /notes (wipe everything). Only mounted when bulk delete is
# enabled outside production, see mail_notes.main.create_app.
bulk_router = APIRouter()


def get_notes_service(request: Request) -> NotesService:
    """FastAPI dependency returning the service built during startup."""
    return request.app.state.notes_service


@router.get("", response_model=NoteListResponse)
async def list_notes(
    message_id: str | None = Query(default=None, alias="messageId"),
    service: NotesService = Depends(get_notes_service),
):
    """List the notes of one message, oldest first."""
    notes = await service.list_notes(message_id)
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.post("", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate | None = None,
    service: NotesService = Depends(get_notes_service),
):
    """
    Create a note.

    Returns the note as persisted, with its generated id, defaulted fields
    and database-assigned createdAt.
    """
    note = await service.create_note(payload or NoteCreate())
    return NoteEnvelope(note=NoteRead.model_validate(note))


@router.delete("/{note_id}", response_model=OkResponse)
async def delete_note(
    note_id: str,
    service: NotesService = Depends(get_notes_service),
):
    """Delete a note by id. Deleting an unknown id still succeeds."""
    await service.delete_note(note_id)
    return OkResponse()


@bulk_router.delete("", response_model=OkResponse)
async def clear_notes(service: NotesService = Depends(get_notes_service)):
    """Delete every note. Test/development convenience only."""
    await service.clear_notes()
    return OkResponse()
