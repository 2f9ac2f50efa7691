"""Rate limit identifiers."""

from starlette.requests import Request


def get_identifier(request: Request) -> str:
    """Extract rate limit identifier from request.

    Uses user_id from request state if authenticated,
    otherwise falls back to client IP address.

    Args:
        request: HTTP request

    Returns:
        Identifier string (user:{id} or ip:{address})
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    # Take the first IP in the chain (original client)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
    else:
        client_ip = request.client.host if request.client else "unknown"

    return f"ip:{client_ip}"
