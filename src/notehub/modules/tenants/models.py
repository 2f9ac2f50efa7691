"""Tenant domain model."""

from dataclasses import dataclass
from enum import StrEnum


class TenantPlan(StrEnum):
    """Subscription plans. Upgrades only go from FREE to PRO."""

    FREE = "free"
    PRO = "pro"


@dataclass
class Tenant:
    """An isolated customer organization.

    Attributes:
        id: Tenant identifier
        name: Display name
        slug: Unique URL-safe identifier
        plan: Current subscription plan
    """

    id: str
    name: str
    slug: str
    plan: TenantPlan = TenantPlan.FREE
