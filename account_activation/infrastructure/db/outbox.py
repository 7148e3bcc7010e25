from __future__ import annotations

from psycopg_pool import AsyncConnectionPool
from psycopg.types.json import Json

from account_activation.domain.ports.outbox import OutboxPort


class PgOutbox(OutboxPort):
    """
    Writes messages to the `outbox` table. Each enqueue commits on its own;
    delivery is done later by the outbox worker.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def enqueue(
        self, *, topic: str, payload: dict, idempotency_key: str | None = None
    ) -> str:
        sql = """
        INSERT INTO outbox (topic, payload, status, idempotency_key)
        VALUES (%s, %s, 'pending', %s)
        RETURNING id
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (topic, Json(payload), idempotency_key))
                row = await cur.fetchone()

        if not row:
            raise RuntimeError("outbox insert returned no row")
        return str(row[0])
