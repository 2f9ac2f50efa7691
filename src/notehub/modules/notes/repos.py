"""Note repository and its tenant-scoped view.

NoteRepository takes the tenant id explicitly on every call.
ScopedNoteRepository binds it to one verified session claim and runs
every call through the authorization policy; route handlers only
ever receive the scoped view.
"""

from datetime import timedelta
from typing import Annotated
from uuid import uuid4

import structlog
from fastapi import Depends

from notehub.api.dependencies import Store
from notehub.core.auth.dependencies import Claim
from notehub.core.auth.schemas import SessionClaim
from notehub.core.errors import NotFoundError, ValidationError
from notehub.core.permissions import Action, authorize, check_note_quota
from notehub.modules.notes.models import Note, utcnow


logger = structlog.get_logger()


def clean_note_fields(title: str | None, content: str | None) -> tuple[str, str]:
    """Trim title and content, rejecting missing or blank values.

    Args:
        title: Raw title from the request
        content: Raw content from the request

    Returns:
        The trimmed (title, content) pair

    Raises:
        ValidationError: If either field is missing or blank after trimming
    """
    if title is None or content is None:
        missing = [
            name for name, value in (("title", title), ("content", content)) if value is None
        ]
        raise ValidationError(
            "Title and content required",
            errors=[{"field": name, "message": "Field required"} for name in missing],
        )

    title = title.strip()
    content = content.strip()

    if not title:
        raise ValidationError(
            "Title cannot be empty",
            errors=[{"field": "title", "message": "Must not be blank"}],
        )
    if not content:
        raise ValidationError(
            "Content cannot be empty",
            errors=[{"field": "content", "message": "Must not be blank"}],
        )

    return title, content


class NoteRepository:
    """Repository for Note records.

    Every method filters by tenant: a note owned by another tenant
    behaves exactly like a missing one.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def _find(self, note_id: str, tenant_id: str) -> Note:
        note = self.store.notes.get(note_id)
        if note is None or note.tenant_id != tenant_id:
            raise NotFoundError("Note not found", resource="note", resource_id=note_id)
        return note

    def _count(self, tenant_id: str) -> int:
        return sum(1 for note in self.store.notes.values() if note.tenant_id == tenant_id)

    async def list_by_tenant(self, tenant_id: str) -> list[Note]:
        """List a tenant's notes in insertion order."""
        return [note for note in self.store.notes.values() if note.tenant_id == tenant_id]

    async def count(self, tenant_id: str) -> int:
        """Count a tenant's live notes."""
        return self._count(tenant_id)

    async def get(self, note_id: str, tenant_id: str) -> Note:
        """Get one of a tenant's notes.

        Raises:
            NotFoundError: If the note is missing or owned by another tenant
        """
        return self._find(note_id, tenant_id)

    async def create(
        self,
        tenant_id: str,
        user_id: str,
        title: str | None,
        content: str | None,
        enforce_quota: bool = True,
    ) -> Note:
        """Create a note for a tenant.

        Reading the plan, counting notes, checking the quota and
        inserting happen under the tenant's lock as one step.

        Args:
            tenant_id: Owning tenant
            user_id: Creating user
            title: Raw title, trimmed before storing
            content: Raw content, trimmed before storing
            enforce_quota: Whether to apply the plan's note cap

        Returns:
            The created note

        Raises:
            ValidationError: If title or content is missing or blank
            NotFoundError: If the tenant does not exist
            QuotaExceededError: If the tenant's plan cap is reached
        """
        title, content = clean_note_fields(title, content)

        async with self.store.tenant_lock(tenant_id):
            tenant = self.store.tenants.get(tenant_id)
            if tenant is None:
                raise NotFoundError(
                    "Tenant not found", resource="tenant", resource_id=tenant_id
                )

            if enforce_quota:
                check_note_quota(tenant.plan, self._count(tenant_id))

            now = utcnow()
            note = Note(
                id=str(uuid4()),
                title=title,
                content=content,
                tenant_id=tenant_id,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )
            self.store.notes[note.id] = note

        logger.info("note_created", note_id=note.id, tenant_id=tenant_id, user_id=user_id)
        return note

    async def update(
        self,
        note_id: str,
        tenant_id: str,
        title: str | None,
        content: str | None,
    ) -> Note:
        """Replace a note's title and content.

        The id, owner, creator and creation time never change;
        `updated_at` always moves forward.

        Raises:
            ValidationError: If title or content is missing or blank
            NotFoundError: If the note is missing or owned by another tenant
        """
        title, content = clean_note_fields(title, content)

        async with self.store.tenant_lock(tenant_id):
            note = self._find(note_id, tenant_id)

            now = utcnow()
            if now <= note.updated_at:
                now = note.updated_at + timedelta(microseconds=1)

            note.title = title
            note.content = content
            note.updated_at = now

        logger.info("note_updated", note_id=note_id, tenant_id=tenant_id)
        return note

    async def delete(self, note_id: str, tenant_id: str) -> None:
        """Delete a note.

        Raises:
            NotFoundError: If the note is missing, already deleted,
                or owned by another tenant
        """
        async with self.store.tenant_lock(tenant_id):
            self._find(note_id, tenant_id)
            del self.store.notes[note_id]

        logger.info("note_deleted", note_id=note_id, tenant_id=tenant_id)


class ScopedNoteRepository:
    """Note access pre-filtered to the caller's tenant.

    Built once per request from the verified claim. Callers never pass
    a tenant id, so a missed filter is not possible at the call site.
    """

    def __init__(self, repo: NoteRepository, claim: SessionClaim) -> None:
        self.repo = repo
        self.claim = claim

    @property
    def tenant_id(self) -> str:
        return self.claim.tenant_id

    async def list_all(self) -> list[Note]:
        authorize(self.claim, Action.NOTE_LIST, check_target=False)
        return await self.repo.list_by_tenant(self.tenant_id)

    async def count(self) -> int:
        authorize(self.claim, Action.NOTE_LIST, check_target=False)
        return await self.repo.count(self.tenant_id)

    async def get(self, note_id: str) -> Note:
        authorize(self.claim, Action.NOTE_READ, check_target=False)
        return await self.repo.get(note_id, self.tenant_id)

    async def create(self, title: str | None, content: str | None) -> Note:
        rule = authorize(self.claim, Action.NOTE_CREATE, self.tenant_id)
        return await self.repo.create(
            self.tenant_id,
            self.claim.user_id,
            title,
            content,
            enforce_quota=rule.enforces_quota,
        )

    async def update(self, note_id: str, title: str | None, content: str | None) -> Note:
        authorize(self.claim, Action.NOTE_UPDATE, check_target=False)
        return await self.repo.update(note_id, self.tenant_id, title, content)

    async def delete(self, note_id: str) -> None:
        authorize(self.claim, Action.NOTE_DELETE, check_target=False)
        await self.repo.delete(note_id, self.tenant_id)


NoteRepo = Annotated[NoteRepository, Depends(NoteRepository)]


async def get_scoped_notes(
    claim: Claim,
    repo: NoteRepo,
) -> ScopedNoteRepository:
    """FastAPI dependency building the caller's scoped note view."""
    return ScopedNoteRepository(repo, claim)


# Type alias for dependency injection
ScopedNotes = Annotated[ScopedNoteRepository, Depends(get_scoped_notes)]
