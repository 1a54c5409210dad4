from dataclasses import dataclass

from src.marketplace.core.services import (
    DbSessionService,
    MediaUploadService,
    SessionStorage,
    UserSessionService,
)


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    session_storage: SessionStorage
    user_session_service: UserSessionService
    media_service: MediaUploadService
