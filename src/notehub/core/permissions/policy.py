"""Declarative authorization policy.

Every protected action is described once in POLICY: which roles may
perform it, how a resource outside the caller's tenant is reported,
and whether the action consumes plan quota. `authorize` is the single
entry point that evaluates a rule against a session claim.

Decisions only ever look at the claim and the target's tenant id.
"""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from notehub.core.auth.schemas import SessionClaim
from notehub.core.errors import ForbiddenError, NotFoundError
from notehub.modules.users.models import UserRole


logger = structlog.get_logger()


class Action(StrEnum):
    """Protected operations, named resource:verb."""

    NOTE_LIST = "note:list"
    NOTE_READ = "note:read"
    NOTE_CREATE = "note:create"
    NOTE_UPDATE = "note:update"
    NOTE_DELETE = "note:delete"
    TENANT_READ = "tenant:read"
    TENANT_UPGRADE = "tenant:upgrade"


class Scope(StrEnum):
    """How the target of an action is addressed.

    RESOURCE targets are looked up by id; one owned by another tenant
    is reported as not found so its existence does not leak.
    TENANT_SLUG targets name a tenant explicitly; the caller already
    knows it exists, so a mismatch is reported as forbidden.
    """

    RESOURCE = "resource"
    TENANT_SLUG = "tenant_slug"


@dataclass(frozen=True)
class ActionRule:
    """Authorization rule for one action.

    Attributes:
        required_roles: Roles allowed to perform the action
        scope: How a foreign-tenant target is reported
        enforces_quota: Whether the plan quota is checked before the action
    """

    required_roles: frozenset[UserRole]
    scope: Scope = Scope.RESOURCE
    enforces_quota: bool = False


ANY_ROLE: frozenset[UserRole] = frozenset(UserRole)
ADMIN_ONLY: frozenset[UserRole] = frozenset({UserRole.ADMIN})


POLICY: dict[Action, ActionRule] = {
    Action.NOTE_LIST: ActionRule(required_roles=ANY_ROLE),
    Action.NOTE_READ: ActionRule(required_roles=ANY_ROLE),
    Action.NOTE_CREATE: ActionRule(required_roles=ANY_ROLE, enforces_quota=True),
    Action.NOTE_UPDATE: ActionRule(required_roles=ANY_ROLE),
    Action.NOTE_DELETE: ActionRule(required_roles=ANY_ROLE),
    Action.TENANT_READ: ActionRule(required_roles=ANY_ROLE, scope=Scope.TENANT_SLUG),
    Action.TENANT_UPGRADE: ActionRule(required_roles=ADMIN_ONLY, scope=Scope.TENANT_SLUG),
}


def get_rule(action: Action) -> ActionRule:
    """Look up the rule for an action.

    Raises:
        KeyError: If the action has no rule (a programming error)
    """
    return POLICY[action]


def check_role(claim: SessionClaim, action: Action) -> ActionRule:
    """Apply the role part of an action's rule.

    Args:
        claim: The caller's verified claim
        action: The action being attempted

    Returns:
        The evaluated rule

    Raises:
        ForbiddenError: If the caller's role is not allowed
    """
    rule = get_rule(action)
    if claim.role not in rule.required_roles:
        logger.warning(
            "authorization_denied",
            action=str(action),
            reason="insufficient_role",
            role=str(claim.role),
        )
        raise ForbiddenError(
            "Insufficient permissions",
            error_code="insufficient_role",
            details={"required_roles": sorted(str(r) for r in rule.required_roles)},
        )
    return rule


def check_tenant(
    claim: SessionClaim,
    action: Action,
    resource_tenant_id: str | None,
    resource: str = "resource",
    resource_id: str | None = None,
) -> None:
    """Apply the tenant part of an action's rule.

    Args:
        claim: The caller's verified claim
        action: The action being attempted
        resource_tenant_id: Tenant owning the target (None if it does not exist)
        resource: Resource name used in the not-found message
        resource_id: Identifier of the target, echoed in not-found details

    Raises:
        NotFoundError: For id-addressed targets outside the caller's tenant
        ForbiddenError: For slug-addressed tenants other than the caller's own
    """
    if resource_tenant_id == claim.tenant_id:
        return

    rule = get_rule(action)
    logger.warning(
        "authorization_denied",
        action=str(action),
        reason="tenant_mismatch",
    )

    if rule.scope is Scope.TENANT_SLUG:
        raise ForbiddenError("Access denied", error_code="tenant_access_denied")

    raise NotFoundError(
        f"{resource.capitalize()} not found",
        resource=resource,
        resource_id=resource_id,
    )


def authorize(
    claim: SessionClaim,
    action: Action,
    resource_tenant_id: str | None = None,
    *,
    check_target: bool = True,
    resource: str = "resource",
    resource_id: str | None = None,
) -> ActionRule:
    """Decide whether a claim may perform an action on a target.

    Role is checked before tenant ownership, so a member attempting an
    admin-only action is refused even when addressing their own tenant.

    Args:
        claim: The caller's verified claim
        action: The action being attempted
        resource_tenant_id: Tenant owning the target, None if the target is missing
        check_target: False for actions without a single target (listing)
        resource: Resource name used in the not-found message
        resource_id: Identifier of the target

    Returns:
        The evaluated rule, so callers can act on `enforces_quota`

    Raises:
        ForbiddenError: Role not allowed, or slug-addressed tenant mismatch
        NotFoundError: Id-addressed target missing or in another tenant
    """
    rule = check_role(claim, action)
    if check_target:
        check_tenant(
            claim,
            action,
            resource_tenant_id,
            resource=resource,
            resource_id=resource_id,
        )
    return rule
