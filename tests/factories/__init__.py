"""Test data factories."""

from tests.factories.tenant import TenantFactory
from tests.factories.user import FACTORY_PASSWORD, UserFactory


__all__ = [
    "FACTORY_PASSWORD",
    "TenantFactory",
    "UserFactory",
]
