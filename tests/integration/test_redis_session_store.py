import uuid

import pytest

from account_activation.infrastructure.redis_cache.session_store import (
    RedisSessionStore,
    new_session_id,
)


async def _flush_prefix(redis, prefix: str) -> None:
    keys = await redis.keys(f"{prefix}*")
    if keys:
        await redis.delete(*keys)


@pytest.fixture()
def prefix() -> str:
    return f"sess:test:{uuid.uuid4().hex[:8]}:"


@pytest.mark.asyncio
async def test_set_get_clear_namespace(redis_client, prefix):
    store = RedisSessionStore(redis_client, new_session_id(), key_prefix=prefix)

    assert await store.get("user") == {}
    await store.set("user", "salt", "S")
    await store.set("user", "other", "x")
    assert await store.get("user") == {"salt": "S", "other": "x"}

    await store.clear("user", "salt")
    await store.clear("user", "missing")
    assert await store.get("user") == {"other": "x"}

    await _flush_prefix(redis_client, prefix)


@pytest.mark.asyncio
async def test_sessions_are_isolated(redis_client, prefix):
    a = RedisSessionStore(redis_client, "a", key_prefix=prefix)
    b = RedisSessionStore(redis_client, "b", key_prefix=prefix)

    await a.set("user", "salt", "S")
    assert await b.get("user") == {}

    await _flush_prefix(redis_client, prefix)


@pytest.mark.asyncio
async def test_push_and_drain_queue(redis_client, prefix):
    store = RedisSessionStore(redis_client, "q", key_prefix=prefix)

    await store.push("flash", "one")
    await store.push("flash", "two")
    assert await store.drain("flash") == ["one", "two"]
    assert await store.drain("flash") == []

    await _flush_prefix(redis_client, prefix)


@pytest.mark.asyncio
async def test_writes_set_ttl(redis_client, prefix):
    store = RedisSessionStore(redis_client, "ttl", key_prefix=prefix, ttl_seconds=30)

    await store.set("user", "salt", "S")
    await store.push("flash", "x")

    assert 0 < await redis_client.ttl(f"{prefix}ttl:user") <= 30
    assert 0 < await redis_client.ttl(f"{prefix}ttl:flash:q") <= 30

    await _flush_prefix(redis_client, prefix)
