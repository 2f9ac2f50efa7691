"""Request tracing and access logging middleware."""

import re
import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
# Client-supplied ids end up in logs and problem documents
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._:-]{0,63}")

# Path parameters worth a log field of their own
LOGGED_PATH_PARAMS = ("note_id", "slug")

QUIET_ROUTES = frozenset({"/health", "/health/ready", "/docs", "/redoc", "/openapi.json"})


def accept_request_id(value: str | None) -> str:
    """Return the client's request id if it is well formed, else a new one."""
    if value and REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Give every request a trace id.

    A well-formed `X-Request-ID` from the client is kept; anything else
    is replaced. The id is stored as `request.state.trace_id`, bound
    into the structlog context and echoed on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        trace_id = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.trace_id = trace_id

        structlog.contextvars.bind_contextvars(request_id=trace_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = trace_id
        return response


def _route_fields(request: Request) -> dict[str, Any]:
    """Describe the matched route without the raw URL.

    Logs the route template plus the identifiers the API is addressed
    by. Unmatched requests only get their method.
    """
    route = request.scope.get("route")
    fields: dict[str, Any] = {"method": request.method}
    if route is None:
        fields["route"] = None
        return fields

    fields["route"] = getattr(route, "path", None)
    params = request.scope.get("path_params", {})
    for name in LOGGED_PATH_PARAMS:
        if name in params:
            fields[name] = params[name]
    return fields


def _caller_fields(request: Request) -> dict[str, Any]:
    fields = {}
    for name in ("tenant_id", "user_id", "role"):
        value = getattr(request.state, name, None)
        if value:
            fields[name] = value
    return fields


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Write one `request_completed` event per request.

    The level follows the status: error for 5xx, warning for 4xx, info
    otherwise. Health and docs routes are not logged. Headers, query
    strings and bodies are never logged.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                **_route_fields(request),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        fields = _route_fields(request)
        if fields["route"] in QUIET_ROUTES:
            return response

        fields.update(_caller_fields(request))
        fields["status_code"] = response.status_code
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)

        if response.status_code >= 500:
            logger.error("request_completed", **fields)
        elif response.status_code >= 400:
            logger.warning("request_completed", **fields)
        else:
            logger.info("request_completed", **fields)

        return response
