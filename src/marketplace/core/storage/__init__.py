from .session_storage import InMemorySessionStorage, RedisSessionStorage, SessionStorage

__all__ = ["SessionStorage", "InMemorySessionStorage", "RedisSessionStorage"]
