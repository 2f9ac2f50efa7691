"""Note domain model."""

from dataclasses import dataclass
from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Note:
    """A note owned by a tenant.

    `tenant_id`, `user_id`, `id` and `created_at` are fixed at creation;
    only `title`, `content` and `updated_at` change afterwards.
    """

    id: str
    title: str
    content: str
    tenant_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
