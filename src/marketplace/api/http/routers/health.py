"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.core.storage.session_storage import RedisSessionStorage
from src.marketplace.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


def _database_type(url: str) -> str:
    return "postgresql" if "postgresql" in url else "sqlite"


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "marketplace"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe over the database, session storage and media host.

    Returns 503 when the database is unreachable. Session storage and the
    media host are reported but never fail the probe.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, Any] = {}
    all_healthy = True

    try:
        db_healthy = await run_in_threadpool(app_deps.database_service.health_check)
        checks["database"] = {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": _database_type(config.database.url),
        }
        all_healthy = db_healthy
    except Exception as e:
        checks["database"] = {"status": "unhealthy", "error": str(e)}
        all_healthy = False

    storage = app_deps.session_storage
    if isinstance(storage, RedisSessionStorage):
        redis_healthy = await storage.ping()
        checks["sessions"] = {
            "status": "healthy" if redis_healthy else "degraded",
            "type": "redis",
        }
    else:
        checks["sessions"] = {"status": "healthy", "type": "in-memory"}

    checks["media"] = {
        "status": "configured" if config.media.configured else "not_configured",
        "folder": config.media.folder,
    }

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }
    if not all_healthy:
        return JSONResponse(status_code=503, content=response)
    return response


@router.get("/database", response_model=None)
def health_database(request: Request) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    try:
        healthy = app_deps.database_service.health_check()
        pool_status = app_deps.database_service.get_pool_status()

        return {
            "status": "healthy" if healthy else "unhealthy",
            "type": _database_type(config.database.url),
            "pool": pool_status,
        }
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
