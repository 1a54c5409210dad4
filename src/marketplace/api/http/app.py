"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.api.http.routers.auth import router as auth_router
from src.marketplace.api.http.routers.health import router as health_router
from src.marketplace.api.http.routers.service.product import router as product_router
from src.marketplace.api.utils.app_startup import configure_logging
from src.marketplace.core.services import (
    DbManageService,
    DbSessionService,
    MediaUploadService,
    UserSessionService,
    create_session_storage,
)
from src.marketplace.runtime.context import get_config

configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Marketplace Catalog",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

app.add_middleware(SecurityHeadersMiddleware)

__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if get_config().app.environment == "production" and (
    "*" in get_config().app.cors.origins
):
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Router registration ---
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(product_router)


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config.database, config.app.environment)
    if config.database.auto_create:
        DbManageService(database_service.engine).create_all()

    session_storage = await create_session_storage(config.redis)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        session_storage=session_storage,
        user_session_service=UserSessionService(session_storage),
        media_service=MediaUploadService(config.media),
    )

    if not config.media.configured and config.app.environment == "production":
        raise RuntimeError("Media host credentials are required in production")


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    await app_dependencies.media_service.aclose()
    removed = await app_dependencies.user_session_service.purge_expired()
    if removed:
        logger.info("Purged {} expired sessions", removed)
