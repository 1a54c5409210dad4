"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache
from urllib.parse import urlparse

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.core.security import validate_csrf_token
from src.marketplace.core.services import (
    CatalogService,
    DbSessionService,
    MediaUploadService,
    UserSessionService,
)
from src.marketplace.entities.core.user import User, UserRepository
from src.marketplace.runtime.config.config_data import SecurityConfig
from src.marketplace.runtime.context import get_config


def _app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    return _app_dependencies(request).database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a database session that is closed once the response is sent."""
    db = database_service.get_session()
    try:
        yield db
    finally:
        db.close()


def get_user_session_service(request: Request) -> UserSessionService:
    return _app_dependencies(request).user_session_service


def get_media_service(request: Request) -> MediaUploadService:
    return _app_dependencies(request).media_service


def get_security_config() -> SecurityConfig:
    return get_config().security


def get_catalog_service(
    db: Session = Depends(get_db_session),
    media: MediaUploadService = Depends(get_media_service),
) -> CatalogService:
    return CatalogService(db, media)


async def _authenticate_with_session(
    request: Request,
    db: Session,
    user_session_service: UserSessionService,
) -> User | None:
    """Resolve the session cookie to a user, or None without a live session."""
    session_id = request.cookies.get(get_config().app.session_cookie_name)
    if not session_id:
        return None

    user_session = await user_session_service.get_user_session(session_id)
    if not user_session:
        return None

    user = await run_in_threadpool(UserRepository(db).get, user_session.user_id)
    if user is None:
        return None

    request.state.session_id = session_id
    request.state.user_session = user_session
    return user


async def get_session_user(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> User:
    """Require an authenticated session; every catalog route starts here."""
    user = await _authenticate_with_session(request, db, user_session_service)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


async def get_optional_session_user(
    request: Request,
    db: Session = Depends(get_db_session),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> User | None:
    return await _authenticate_with_session(request, db, user_session_service)


@lru_cache(maxsize=50)
def normalize_origin(origin: str) -> tuple[str, str, int]:
    """Normalize an origin string into a tuple for comparison."""
    parsed = urlparse(origin)
    return (
        parsed.scheme.lower(),
        (parsed.hostname or "").lower(),
        parsed.port or (443 if parsed.scheme == "https" else 80),
    )


def get_allowed_origins() -> set[tuple[str, str, int]]:
    return {normalize_origin(origin) for origin in get_config().app.cors.origins}


def is_origin_allowed(origin: str) -> bool:
    return normalize_origin(origin) in get_allowed_origins()


def _enforcement_skipped(request: Request) -> bool:
    if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
        return True
    return get_config().app.environment in ("development", "test")


def enforce_origin(request: Request) -> None:
    """Enforce the Origin/Referer allowlist for state-changing requests."""
    if _enforcement_skipped(request):
        return

    origin = request.headers.get("origin")
    if origin:
        if origin == "null":
            raise HTTPException(status_code=403, detail="Origin 'null' not allowed")
        if not is_origin_allowed(origin):
            raise HTTPException(status_code=403, detail="Origin not allowed")
        return

    referer = request.headers.get("referer")
    if not referer:
        raise HTTPException(status_code=403, detail="Missing or invalid Origin")
    if not is_origin_allowed(referer):
        raise HTTPException(status_code=403, detail="Referer origin not allowed")


def require_csrf(request: Request) -> None:
    """Require a CSRF token header bound to the session for state-changing requests."""
    if _enforcement_skipped(request):
        return

    config = get_config()
    csrf_header = request.headers.get(config.security.csrf_header_name)
    if not csrf_header:
        raise HTTPException(status_code=403, detail="Missing CSRF token header")

    session_id = request.cookies.get(config.app.session_cookie_name)
    if not session_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    if not validate_csrf_token(
        session_id, csrf_header, config.security.csrf_token_max_age_hours
    ):
        raise HTTPException(status_code=403, detail="Invalid CSRF token")
