"""Core services exports."""

from src.marketplace.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
    SessionStorage,
    create_session_storage,
)

from .catalog.catalog_service import CatalogService
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .media.media_upload import MediaUploadService
from .session.user_session import UserSessionService

__all__ = [
    "CatalogService",
    "DbManageService",
    "DbSessionService",
    "MediaUploadService",
    "UserSessionService",
    "SessionStorage",
    "InMemorySessionStorage",
    "RedisSessionStorage",
    "create_session_storage",
]
