"""
Session Storage

Key/value backends holding the persisted session fields. Any component
that interoperates with the session must use the same keys.
"""

import logging
from abc import ABC, abstractmethod

from redis.asyncio import Redis

from ksfp.core.config import settings
from ksfp.core.redis import get_redis

logger = logging.getLogger(__name__)

# Persisted session keys
TOKEN_KEY = "ksfp_token"
REFRESH_TOKEN_KEY = "ksfp_refresh_token"
EXPIRY_KEY = "ksfp_expiry"
USER_KEY = "ksfp_user"

SESSION_KEYS = (TOKEN_KEY, USER_KEY, REFRESH_TOKEN_KEY, EXPIRY_KEY)


class SessionStorage(ABC):
    """String key/value storage for session fields."""

    @abstractmethod
    async def get(self, key: str) -> str | None: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    async def delete(self, *keys: str) -> None: ...


class MemorySessionStorage(SessionStorage):
    """Process-local storage."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)


class RedisSessionStorage(SessionStorage):
    """
    Redis-backed storage.

    Keys are namespaced as ``<prefix>:<session_id>:<key>`` so several
    sessions can share one Redis database.
    """

    def __init__(self, client: Redis, session_id: str, prefix: str | None = None):
        self._client = client
        self._namespace = f"{prefix or settings.session_key_prefix}:{session_id}"

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def get(self, key: str) -> str | None:
        return await self._client.get(self._key(key))

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._key(key), value)

    async def delete(self, *keys: str) -> None:
        if keys:
            await self._client.delete(*(self._key(key) for key in keys))


async def create_session_storage(session_id: str = "default") -> SessionStorage:
    """
    Create the storage backend selected by ``settings.session_storage``.

    Falls back to in-memory storage when Redis is configured but not
    connected.
    """
    if settings.session_storage == "redis":
        client = await get_redis()
        if client is not None:
            return RedisSessionStorage(client, session_id)
        logger.warning("Redis session storage requested but Redis is unavailable, using memory")

    return MemorySessionStorage()
