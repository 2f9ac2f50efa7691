"""Authorization decorators for route protection.

This module provides a decorator that can be applied to FastAPI
routes to enforce the role part of an action's policy before the
handler body runs.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from notehub.core.auth.schemas import SessionClaim
from notehub.core.errors import MissingTokenError
from notehub.core.permissions.policy import Action, check_role


P = ParamSpec("P")
R = TypeVar("R")


def _get_claim(kwargs: dict[str, Any]) -> SessionClaim | None:
    """Extract the session claim from route keyword arguments."""
    return cast("SessionClaim | None", kwargs.get("claim"))


def require_action(
    action: Action,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that requires the caller's role to be allowed for an action.

    The decorated route must take the verified claim as a `claim`
    keyword argument.

    Usage:
        @router.post("/{slug}/upgrade")
        @require_action(Action.TENANT_UPGRADE)
        async def upgrade(slug: str, claim: Claim):
            ...

    Args:
        action: The action the route performs

    Returns:
        Decorator function

    Raises:
        ForbiddenError: If the caller's role is not allowed
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            claim = _get_claim(kwargs)

            if claim is None:
                raise MissingTokenError()

            check_role(claim, action)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
