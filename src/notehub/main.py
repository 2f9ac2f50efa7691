"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from notehub.api.router import api_router
from notehub.config import settings
from notehub.core.auth.middleware import SessionContextMiddleware
from notehub.core.database import MemoryStore
from notehub.core.database.seed import seed_demo_data
from notehub.core.errors import register_exception_handlers
from notehub.core.logging import (
    AccessLogMiddleware,
    RequestIdMiddleware,
    configure_logging,
)
from notehub.core.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    if settings.seed_demo_data:
        seed_demo_data(app.state.store)

    yield

    logger.info("application_shutdown")
    app.state.store.clear()


def create_app(
    store: MemoryStore | None = None,
    rate_limiter: SlidingWindowRateLimiter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: State to serve (default: a fresh store, seeded on startup)
        rate_limiter: Limiter shared by the middleware and per-route limits

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant notes API with role and plan based access control",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.state.store = store if store is not None else MemoryStore()
    app.state.rate_limiter = rate_limiter or SlidingWindowRateLimiter()
    app.state.static_dir = Path(settings.static_dir)

    # Middleware added last runs first: CORS, request ID, access log,
    # session context, then rate limiting (which keys on session context)
    if settings.rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)

    app.add_middleware(SessionContextMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=[
            "X-Request-ID",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
    )

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    if app.state.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=app.state.static_dir), name="static")

    return app


app = create_app()
