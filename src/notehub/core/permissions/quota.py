"""Plan-dependent note quota."""

import structlog

from notehub.config import settings
from notehub.core.errors import QuotaExceededError
from notehub.modules.tenants.models import TenantPlan


logger = structlog.get_logger()


def plan_note_limits() -> dict[TenantPlan, int | None]:
    """Return the note cap for every plan; None means unlimited."""
    return {
        TenantPlan.FREE: settings.free_plan_note_limit,
        TenantPlan.PRO: None,
    }


def note_limit(plan: TenantPlan) -> int | None:
    """Return the note cap for a plan, None if unlimited."""
    return plan_note_limits()[plan]


def check_note_quota(plan: TenantPlan, current_count: int) -> None:
    """Refuse a new note when the tenant is at its plan's cap.

    Args:
        plan: The tenant's current plan
        current_count: Live notes the tenant owns right now

    Raises:
        QuotaExceededError: If the plan is capped and the cap is reached
    """
    limit = note_limit(plan)
    if limit is not None and current_count >= limit:
        logger.info(
            "quota_exceeded",
            plan=str(plan),
            note_count=current_count,
            note_limit=limit,
        )
        raise QuotaExceededError(details={"noteLimit": limit})
