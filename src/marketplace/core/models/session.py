"""Session models."""

import time

from pydantic import BaseModel, Field


class UserSession(BaseModel):
    """Server-side session of an authenticated user."""

    id: str = Field(description="Session identifier")
    user_id: str = Field(description="Internal user ID")
    phone: str | None = Field(default=None, description="Phone identifier of the user")
    provider: str = Field(default="external", description="Issuing identity provider")
    client_fingerprint: str | None = Field(
        default=None, description="Client context fingerprint hash"
    )
    created_at: int = Field(description="Creation timestamp")
    last_accessed_at: int = Field(description="Last access timestamp")
    expires_at: int = Field(description="Session expiration timestamp")

    @classmethod
    def create(
        cls,
        session_id: str,
        user_id: str,
        phone: str | None = None,
        provider: str = "external",
        client_fingerprint: str | None = None,
        session_max_age: int = 3600,
    ) -> "UserSession":
        """Create a new user session with timestamps."""
        now = int(time.time())
        return cls(
            id=session_id,
            user_id=user_id,
            phone=phone,
            provider=provider,
            client_fingerprint=client_fingerprint,
            created_at=now,
            last_accessed_at=now,
            expires_at=now + session_max_age,
        )

    def is_expired(self) -> bool:
        return time.time() > self.expires_at

    def update_access(self) -> None:
        self.last_accessed_at = int(time.time())
