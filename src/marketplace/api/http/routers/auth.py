"""Session endpoints: issuing, auth state and logout."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from loguru import logger
from pydantic import BaseModel
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from src.marketplace.api.http.deps import (
    enforce_origin,
    get_db_session,
    get_optional_session_user,
    get_security_config,
    get_user_session_service,
    require_csrf,
)
from src.marketplace.core.security import generate_csrf_token, is_trusted_issuer
from src.marketplace.core.services import UserSessionService
from src.marketplace.entities.core.user import User, UserRepository
from src.marketplace.entities.service.vendor import VendorRepository
from src.marketplace.runtime.config.config_data import SecurityConfig
from src.marketplace.runtime.context import get_config

router = APIRouter(prefix="/auth", tags=["auth"])


def session_cookie_settings() -> dict[str, Any]:
    """Attributes shared by every write or removal of the session cookie."""
    config = get_config()
    return {
        "httponly": True,
        "secure": config.security.secure_cookies
        and config.app.environment == "production",
        "samesite": config.security.cookie_samesite,
        "path": "/",
    }


class AuthState(BaseModel):
    """Current authentication state for web clients."""

    authenticated: bool
    user: dict[str, Any] | None = None
    vendor: dict[str, Any] | None = None
    csrf_token: str | None = None


class SessionRequest(BaseModel):
    """Identity of a user the identity provider has already authenticated."""

    phone: str
    provider: str = "external"


@router.post("/session", status_code=status.HTTP_201_CREATED)
async def issue_session(
    body: SessionRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db_session),
    security: SecurityConfig = Depends(get_security_config),
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> dict[str, Any]:
    """Open a session for a known user on behalf of a trusted identity provider.

    Server-to-server: the caller presents the shared issuer key in the
    configured header. The session cookie is set on the response, and the
    session id is returned so the provider can hand it to the browser.
    """
    if not security.session_issuer_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session issuing is disabled",
        )
    if not is_trusted_issuer(
        request.headers.get(security.session_issuer_header),
        security.session_issuer_key,
    ):
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = await run_in_threadpool(UserRepository(db).get_by_phone, body.phone)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    session_id = await user_session_service.create_user_session(
        user.id, phone=user.phone, provider=body.provider
    )
    logger.info("Opened session for user {} via {}", user.id, body.provider)

    config = get_config()
    response.set_cookie(
        key=config.app.session_cookie_name,
        value=session_id,
        max_age=config.app.session_max_age,
        **session_cookie_settings(),
    )
    return {
        "session_id": session_id,
        "csrf_token": generate_csrf_token(session_id),
        "expires_in": config.app.session_max_age,
    }


@router.get("/me")
def get_auth_state(
    request: Request,
    user: User | None = Depends(get_optional_session_user),
    db: Session = Depends(get_db_session),
) -> AuthState:
    """Get current authentication state with CSRF token for web client."""
    if not user:
        return AuthState(authenticated=False)

    vendor = None
    if user.phone:
        found = VendorRepository(db).first_by_user_phone(user.phone)
        if found is not None:
            vendor = {
                "id": found.id,
                "name": found.name,
                "market_id": found.market_id,
            }

    session_id = request.cookies.get(get_config().app.session_cookie_name)
    return AuthState(
        authenticated=True,
        user={
            "id": str(user.id),
            "email": user.email,
            "phone": user.phone,
            "first_name": user.first_name,
            "last_name": user.last_name,
        },
        vendor=vendor,
        csrf_token=generate_csrf_token(session_id) if session_id else None,
    )


@router.post("/logout", dependencies=[Depends(enforce_origin), Depends(require_csrf)])
async def logout(
    request: Request,
    response: Response,
    user_session_service: UserSessionService = Depends(get_user_session_service),
) -> dict[str, str]:
    """Delete the server-side session and clear the session cookie."""
    cookie_name = get_config().app.session_cookie_name
    session_id = request.cookies.get(cookie_name)
    if not session_id:
        raise HTTPException(status_code=401, detail="No session found")

    await user_session_service.delete_user_session(session_id)
    response.delete_cookie(cookie_name, **session_cookie_settings())
    return {"message": "Logged out"}
