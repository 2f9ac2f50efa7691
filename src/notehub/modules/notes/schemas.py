"""Pydantic schemas for note operations."""

from datetime import datetime

from notehub.core.schemas import APIModel


class NoteWrite(APIModel):
    """Body for creating or replacing a note.

    Both fields are optional at the schema level so that missing and
    blank values produce the same validation error from the repository.
    """

    title: str | None = None
    content: str | None = None


class NoteResponse(APIModel):
    """A note as returned by the API."""

    id: str
    title: str
    content: str
    tenant_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
