from src.marketplace.core.models.session import UserSession
from src.marketplace.core.security import generate_session_id
from src.marketplace.core.storage.session_storage import SessionStorage
from src.marketplace.runtime.context import get_config


class UserSessionService:
    """Service for managing user sessions."""

    def __init__(self, session_storage: SessionStorage) -> None:
        self._storage = session_storage

    @staticmethod
    def _key(session_id: str) -> str:
        return f"user:{session_id}"

    async def create_user_session(
        self,
        user_id: str,
        phone: str | None = None,
        provider: str = "external",
        client_fingerprint: str | None = None,
    ) -> str:
        """Create a session for an already authenticated user.

        Args:
            user_id: Internal user ID
            phone: Phone identifier the session carries
            provider: Identity provider that authenticated the user
            client_fingerprint: Optional client fingerprint hash

        Returns:
            Session ID
        """
        max_age = get_config().app.session_max_age
        user_session = UserSession.create(
            session_id=generate_session_id(),
            user_id=user_id,
            phone=phone,
            provider=provider,
            client_fingerprint=client_fingerprint,
            session_max_age=max_age,
        )
        await self._storage.set(self._key(user_session.id), user_session, max_age)
        return user_session.id

    async def get_user_session(self, session_id: str) -> UserSession | None:
        """Get a live session by ID, touching its last-access time.

        Returns:
            User session or None if not found/expired
        """
        user_session = await self._storage.get(self._key(session_id), UserSession)
        if not user_session:
            return None

        if user_session.is_expired():
            await self._storage.delete(self._key(session_id))
            return None

        user_session.update_access()
        ttl = max(1, user_session.expires_at - user_session.last_accessed_at)
        await self._storage.set(self._key(user_session.id), user_session, ttl)
        return user_session

    async def delete_user_session(self, session_id: str) -> None:
        await self._storage.delete(self._key(session_id))

    async def purge_expired(self) -> int:
        """Cleanup expired sessions from storage."""
        return await self._storage.cleanup_expired()
