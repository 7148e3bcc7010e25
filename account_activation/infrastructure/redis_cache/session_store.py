from __future__ import annotations

import secrets

from redis.asyncio import Redis

from account_activation.domain.ports.session_store import SessionStorePort


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class RedisSessionStore(SessionStorePort):
    """
    Session data of one browser session.

    Hash namespaces live at "<prefix><session_id>:<namespace>", queues at
    "<prefix><session_id>:<namespace>:q". Every write refreshes the TTL.
    """

    def __init__(
        self,
        redis: Redis,
        session_id: str,
        *,
        key_prefix: str = "sess:",
        ttl_seconds: int = 1800,
        is_new: bool = False,
    ) -> None:
        self._redis = redis
        self.session_id = session_id
        self.is_new = is_new
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, namespace: str) -> str:
        return f"{self._prefix}{self.session_id}:{namespace}"

    def _queue_key(self, namespace: str) -> str:
        return f"{self._key(namespace)}:q"

    async def get(self, namespace: str) -> dict[str, str]:
        return await self._redis.hgetall(self._key(namespace)) or {}

    async def set(self, namespace: str, key: str, value: str) -> None:
        name = self._key(namespace)
        pipe = self._redis.pipeline(transaction=True)
        pipe.hset(name, key, value)
        pipe.expire(name, self._ttl)
        await pipe.execute()

    async def clear(self, namespace: str, key: str) -> None:
        await self._redis.hdel(self._key(namespace), key)

    async def push(self, namespace: str, value: str) -> None:
        name = self._queue_key(namespace)
        pipe = self._redis.pipeline(transaction=True)
        pipe.rpush(name, value)
        pipe.expire(name, self._ttl)
        await pipe.execute()

    async def drain(self, namespace: str) -> list[str]:
        name = self._queue_key(namespace)
        pipe = self._redis.pipeline(transaction=True)
        pipe.lrange(name, 0, -1)
        pipe.delete(name)
        values, _ = await pipe.execute()
        return list(values or [])
