"""Session storage interface and implementations.

Sessions are stored in Redis when it is configured and reachable, otherwise
in process memory.
"""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel

from src.marketplace.runtime.config.config_data import RedisConfig

T = TypeVar("T", bound=BaseModel)


class SessionStorage(ABC):
    """Abstract interface for session storage backends."""

    @abstractmethod
    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Store a session with TTL."""

    @abstractmethod
    async def get(self, key: str, model_class: type[T]) -> T | None:
        """Retrieve a session, or None if it is missing or expired."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a session."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired sessions and return how many were removed."""


class InMemorySessionStorage(SessionStorage):
    """In-memory session storage with TTL support."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def _live_entry(self, key: str) -> dict[str, Any] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if time.time() > entry["expires_at"]:
            del self._data[key]
            return None
        return entry

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self._data[key] = {
            "data": json.loads(value.model_dump_json()),
            "expires_at": time.time() + ttl_seconds,
        }

    async def get(self, key: str, model_class: type[T]) -> T | None:
        entry = self._live_entry(key)
        if entry is None:
            return None
        return model_class.model_validate(entry["data"])

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def cleanup_expired(self) -> int:
        now = time.time()
        expired_keys = [
            key for key, entry in self._data.items() if now > entry["expires_at"]
        ]
        for key in expired_keys:
            del self._data[key]
        return len(expired_keys)


class RedisSessionStorage(SessionStorage):
    """Redis-based session storage; Redis enforces TTLs itself."""

    def __init__(self, redis_client) -> None:
        self._redis = redis_client

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        try:
            await self._redis.setex(key, ttl_seconds, value.model_dump_json())
        except Exception as e:
            raise RuntimeError(f"Redis set failed: {e}") from e

    async def get(self, key: str, model_class: type[T]) -> T | None:
        try:
            data = await self._redis.get(key)
        except Exception as e:
            raise RuntimeError(f"Redis get failed: {e}") from e

        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return model_class.model_validate_json(data)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except Exception as e:
            raise RuntimeError(f"Redis delete failed: {e}") from e

    async def cleanup_expired(self) -> int:
        return 0

    async def ping(self) -> bool:
        try:
            await self._redis.ping()
        except Exception:
            return False
        return True


async def create_session_storage(config: RedisConfig) -> SessionStorage:
    """Build Redis storage when configured and reachable, else in-memory storage."""
    if not config.enabled or not config.url:
        logger.info("Redis not configured; using in-memory session storage")
        return InMemorySessionStorage()

    import redis.asyncio as redis

    client = redis.from_url(
        config.connection_string,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=2,
        socket_timeout=2,
    )
    storage = RedisSessionStorage(client)
    if await storage.ping():
        logger.info("Session storage: Redis connected")
        return storage

    logger.warning("Redis unavailable; using in-memory session storage")
    return InMemorySessionStorage()
