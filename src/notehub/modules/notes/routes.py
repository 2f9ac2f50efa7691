"""Notes API routes.

All handlers work through the caller's scoped note view; notes of
other tenants are reported as not found.
"""

from fastapi import APIRouter, status

from notehub.modules.notes.repos import ScopedNotes
from notehub.modules.notes.schemas import NoteResponse, NoteWrite


router = APIRouter(prefix="/notes", tags=["notes"])


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="Returns every note of the caller's tenant.",
)
async def list_notes(notes: ScopedNotes) -> list[NoteResponse]:
    """List the tenant's notes."""
    return [NoteResponse.model_validate(note) for note in await notes.list_all()]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(note_id: str, notes: ScopedNotes) -> NoteResponse:
    """Get one note of the caller's tenant."""
    return NoteResponse.model_validate(await notes.get(note_id))


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
    description="Free-plan tenants are limited in how many notes they can hold.",
)
async def create_note(data: NoteWrite, notes: ScopedNotes) -> NoteResponse:
    """Create a note in the caller's tenant."""
    note = await notes.create(data.title, data.content)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
)
async def update_note(note_id: str, data: NoteWrite, notes: ScopedNotes) -> NoteResponse:
    """Replace a note's title and content."""
    note = await notes.update(note_id, data.title, data.content)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a note",
)
async def delete_note(note_id: str, notes: ScopedNotes) -> None:
    """Delete a note."""
    await notes.delete(note_id)
