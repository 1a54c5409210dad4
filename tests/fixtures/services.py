"""Service fixtures for testing."""

from __future__ import annotations

import itertools

import pytest
from sqlmodel import Session

from src.marketplace.core.exceptions import UpstreamFailure
from src.marketplace.core.services import (
    CatalogService,
    InMemorySessionStorage,
    UserSessionService,
)

__all__ = [
    "PNG_DATA_URI",
    "FakeMediaService",
    "media_service",
    "catalog_service",
    "session_storage",
    "user_session_service",
]

PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="


class FakeMediaService:
    """Stand-in for MediaUploadService that records calls instead of uploading."""

    def __init__(self) -> None:
        self.uploads: list[str] = []
        self.destroyed: list[str] = []
        self.fail_upload = False
        self._ids = itertools.count(1)

    async def upload(self, data_uri: str) -> str:
        self.uploads.append(data_uri)
        if self.fail_upload:
            raise UpstreamFailure("Image upload failed")
        return f"https://res.cloudinary.com/demo/image/upload/v1/products/fake-{next(self._ids)}.png"

    async def destroy(self, secure_url: str) -> bool:
        self.destroyed.append(secure_url)
        return True

    async def aclose(self) -> None:
        return None


@pytest.fixture
def media_service() -> FakeMediaService:
    return FakeMediaService()


@pytest.fixture
def catalog_service(session: Session, media_service: FakeMediaService) -> CatalogService:
    return CatalogService(session, media_service)


@pytest.fixture
def session_storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def user_session_service(session_storage: InMemorySessionStorage) -> UserSessionService:
    return UserSessionService(session_storage)
