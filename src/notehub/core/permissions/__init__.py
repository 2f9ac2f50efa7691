"""Authorization and quota policy."""

from notehub.core.permissions.decorators import require_action
from notehub.core.permissions.policy import (
    POLICY,
    Action,
    ActionRule,
    Scope,
    authorize,
    check_role,
    check_tenant,
)
from notehub.core.permissions.quota import check_note_quota, note_limit


__all__ = [
    "POLICY",
    "Action",
    "ActionRule",
    "Scope",
    "authorize",
    "check_note_quota",
    "check_role",
    "check_tenant",
    "note_limit",
    "require_action",
]
