import uuid

import psycopg
import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool
from redis.asyncio import Redis
from redis.exceptions import RedisError

from account_activation.settings import get_settings

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id            bigserial PRIMARY KEY,
    email         text NOT NULL UNIQUE,
    password_hash text NOT NULL,
    status        text NOT NULL DEFAULT 'pending'
);
CREATE TABLE IF NOT EXISTS user_tokens (
    id         bigserial PRIMARY KEY,
    user_id    bigint NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    type       text NOT NULL,
    token      text NOT NULL UNIQUE,
    created_at timestamptz NOT NULL DEFAULT clock_timestamp(),
    expires_at timestamptz NOT NULL
);
CREATE TABLE IF NOT EXISTS outbox (
    id              bigserial PRIMARY KEY,
    topic           text NOT NULL,
    payload         jsonb NOT NULL,
    status          text NOT NULL DEFAULT 'pending',
    attempts        integer NOT NULL DEFAULT 0,
    idempotency_key text,
    last_error      text,
    next_attempt_at timestamptz,
    created_at      timestamptz NOT NULL DEFAULT now(),
    updated_at      timestamptz NOT NULL DEFAULT now()
);
"""


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(
        get_settings().redis_url, encoding="utf-8", decode_responses=True
    )
    try:
        await r.ping()
    except (RedisError, OSError):
        await r.aclose()
        pytest.skip("redis not reachable")
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def pool():
    p = AsyncConnectionPool(get_settings().database_url, min_size=1, open=False)
    try:
        await p.open(wait=True, timeout=3)
    except psycopg.OperationalError:
        await p.close()
        pytest.skip("postgres not reachable")
    try:
        async with p.connection() as conn:
            await conn.execute(SCHEMA_SQL)
        yield p
    finally:
        await p.close()


@pytest_asyncio.fixture
async def db_user(pool):
    """A fresh pending user; removed (with its tokens) afterwards."""
    email = f"it-{uuid.uuid4().hex[:12]}@example.com"
    async with pool.connection() as conn:
        cur = await conn.execute(
            "INSERT INTO users (email, password_hash, status)"
            " VALUES (%s, 'P', 'pending') RETURNING id",
            (email,),
        )
        (user_id,) = await cur.fetchone()
    try:
        yield str(user_id), email
    finally:
        async with pool.connection() as conn:
            await conn.execute("DELETE FROM users WHERE id = %s", (user_id,))
