"""Root API router with health endpoints and module mounting."""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from notehub.api.dependencies import Store
from notehub.config import settings
from notehub.core.auth.routes import router as auth_router
from notehub.core.errors import NotFoundError
from notehub.modules import discover_modules


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    checks: dict[str, str]


# Create root API router
api_router = APIRouter()

health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 if the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="ok")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks that the in-memory store is seeded and consistent.",
)
async def readiness(store: Store) -> JSONResponse:
    """Readiness probe endpoint."""
    problems = store.check_integrity()
    checks = {"store": "ok" if not problems else "; ".join(problems)}

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK
        if all_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_ok else "degraded",
            "checks": checks,
        },
    )


@health_router.get(
    "/info",
    summary="Application info",
    description="Returns application metadata.",
)
async def info() -> dict[str, Any]:
    """Application info endpoint."""
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "debug": settings.debug,
    }


frontend_router = APIRouter(include_in_schema=False)


@frontend_router.get("/")
async def index(request: Request) -> FileResponse:
    """Serve the static frontend entry page."""
    static_dir: Path = request.app.state.static_dir
    page = static_dir / "index.html"
    if not page.is_file():
        raise NotFoundError("Page not found", resource="page", resource_id="index.html")
    return FileResponse(page)


# Include routers in main api_router
api_router.include_router(health_router)
api_router.include_router(frontend_router)
api_router.include_router(auth_router)

# Mount discovered module routers
for module_router in discover_modules():
    api_router.include_router(module_router)
