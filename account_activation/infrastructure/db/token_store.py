from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import psycopg
from psycopg_pool import AsyncConnectionPool

import account_activation.domain.services as domain_services
from account_activation.domain.entities import ConfirmToken, TokenResult, User
from account_activation.domain.ports.token_store import TokenStorePort

logger = logging.getLogger(__name__)

CONFIRM_TOKEN_TYPE = "confirm"


class PgTokenStore(TokenStorePort):
    """
    Confirm tokens kept in the `user_tokens` table
    (user_id, type, token, created_at, expires_at).
    """

    def __init__(self, pool: AsyncConnectionPool, *, ttl_seconds: int = 86400) -> None:
        self._pool = pool
        self._ttl = ttl_seconds

    async def find_confirm_tokens(self, user: User) -> list[ConfirmToken]:
        sql = """
        SELECT user_id, token, created_at, expires_at
        FROM user_tokens
        WHERE user_id = %s
          AND type = %s
          AND expires_at > now()
        ORDER BY created_at, token
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (user.id, CONFIRM_TOKEN_TYPE))
                rows = await cur.fetchall()

        return [
            ConfirmToken(
                user_id=str(user_id),
                token=str(token),
                created_at=created_at,
                expires_at=expires_at,
            )
            for user_id, token, created_at, expires_at in rows or ()
        ]

    async def generate_confirm_token(self, user: User) -> TokenResult:
        token = domain_services.generate_confirm_token()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=self._ttl)
        sql = """
        INSERT INTO user_tokens (user_id, type, token, expires_at)
        VALUES (%s, %s, %s, %s)
        RETURNING user_id, token, created_at, expires_at
        """
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        sql, (user.id, CONFIRM_TOKEN_TYPE, token, expires_at)
                    )
                    row = await cur.fetchone()
        except psycopg.Error as e:
            logger.exception("could not store confirm token", extra={"user_id": user.id})
            return TokenResult.failure(str(e))

        if not row:
            return TokenResult.failure("insert returned no row")

        user_id, db_token, created_at, db_expires_at = row
        return TokenResult.success(
            ConfirmToken(
                user_id=str(user_id),
                token=str(db_token),
                created_at=created_at,
                expires_at=db_expires_at,
            )
        )
