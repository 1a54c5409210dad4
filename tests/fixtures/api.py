"""HTTP-level fixtures: the FastAPI app wired to test doubles."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from src.marketplace.api.http.app import app
from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.api.http.deps import get_db_session
from src.marketplace.core.services import DbSessionService, UserSessionService
from src.marketplace.entities import User
from src.marketplace.runtime.config.config_data import DatabaseConfig

__all__ = ["api_app", "client", "login"]


@pytest.fixture
def api_app(session: Session, session_storage, user_session_service, media_service):
    """The application with its startup dependencies replaced by test doubles."""
    previous = getattr(app.state, "app_dependencies", None)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=DbSessionService(DatabaseConfig(url="sqlite://"), "test"),
        session_storage=session_storage,
        user_session_service=user_session_service,
        media_service=media_service,
    )
    app.dependency_overrides[get_db_session] = lambda: session
    yield app
    app.dependency_overrides.clear()
    app.state.app_dependencies = previous


@pytest.fixture
def client(api_app) -> Generator[TestClient]:
    # no context manager: lifespan would replace the test doubles
    yield TestClient(api_app)


@pytest.fixture
def login(
    client: TestClient, user_session_service: UserSessionService
) -> Callable[[User], str]:
    """Open a session for ``user`` and attach its cookie to ``client``."""

    def _login(user: User) -> str:
        session_id = asyncio.run(
            user_session_service.create_user_session(user.id, phone=user.phone)
        )
        client.cookies.set("user_session_id", session_id)
        return session_id

    return _login
