from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from psycopg import AsyncCursor
from psycopg_pool import AsyncConnectionPool

from account_activation.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)

ACTIVATION_EMAIL_TOPIC = "user.activation_email"


@dataclass(frozen=True)
class RetryPolicy:
    base: int = 2  # seconds
    max_delay: int = 60  # seconds

    def compute_delay(self, attempts: int) -> int:
        # attempts already made; next delay = min(max_delay, base * 2**attempts)
        delay = self.base * (2**attempts)
        return delay if delay < self.max_delay else self.max_delay


class OutboxDispatcher:
    """
    Polls the outbox table, claims due rows, hands activation emails to the
    mail gateway, and marks them as dispatched or reschedules for retry.
    """

    def __init__(
        self,
        *,
        pool: AsyncConnectionPool,
        email_adapter: EmailPort,
        batch_size: int = 10,
        poll_interval: float = 1.0,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.pool = pool
        self.email_adapter = email_adapter
        self.batch_size = batch_size
        self.poll_interval = poll_interval
        self.retry_policy = retry_policy or RetryPolicy()

    async def run_forever(self) -> None:
        logger.info(
            "outbox dispatcher started",
            extra={"batch_size": self.batch_size, "poll_interval": self.poll_interval},
        )
        while True:
            try:
                processed = await self.process_once()
            except Exception:  # noqa: BLE001
                # transient database errors: log and poll again
                logger.exception("outbox poll failed; retrying")
                processed = 0
            if processed == 0:
                await asyncio.sleep(self.poll_interval)

    async def process_once(self) -> int:
        """
        Claim up to batch_size due rows, dispatch each one and record the
        outcome. Returns the number of claimed rows.
        """
        batch = await self._claim_due_batch(self.batch_size)
        if not batch:
            return 0

        logger.info("claimed messages", extra={"count": len(batch)})

        for msg in batch:
            msg_id = msg["id"]
            topic = msg["topic"]
            attempts = msg["attempts"]
            try:
                await self.dispatch(msg)
            except Exception as e:  # noqa: BLE001
                new_attempts = attempts + 1
                delay = self.retry_policy.compute_delay(attempts)
                logger.warning(
                    "dispatch failed; scheduling retry",
                    extra={
                        "id": msg_id,
                        "topic": topic,
                        "attempts": new_attempts,
                        "retry_in_s": delay,
                        "error": str(e)[:200],
                    },
                )
                await self._mark_failed(msg_id, new_attempts, delay, str(e))
            else:
                await self._mark_dispatched(msg_id)

        return len(batch)

    async def dispatch(self, msg: dict[str, Any]) -> None:
        topic = msg["topic"]
        if topic != ACTIVATION_EMAIL_TOPIC:
            # unknown topics go through the retry path so they stay visible
            raise RuntimeError(f"unknown topic: {topic}")

        payload = msg["payload"]
        await self.email_adapter.send(
            to=payload["to"],
            subject=payload["subject"],
            body=payload["body"],
            idempotency_key=msg.get("idempotency_key") or f"outbox-{msg['id']}",
        )

    async def _claim_due_batch(self, limit: int) -> list[dict[str, Any]]:
        sql = """
        WITH claimed AS (
            SELECT id
            FROM outbox
            WHERE status = 'pending'
              AND COALESCE(next_attempt_at, NOW()) <= NOW()
            ORDER BY created_at
            FOR UPDATE SKIP LOCKED
            LIMIT %s
        ),
        updated AS (
            UPDATE outbox o
            SET status = 'processing', updated_at = NOW()
            FROM claimed c
            WHERE o.id = c.id
            RETURNING o.id, o.topic, o.payload, o.attempts, o.idempotency_key
        )
        SELECT id, topic, payload, attempts, idempotency_key
        FROM updated
        ORDER BY id;
        """
        async with self.pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:  # type: AsyncCursor
                    await cur.execute(sql, (limit,))
                    rows = await cur.fetchall()

        return [
            {
                "id": r[0],
                "topic": r[1],
                "payload": r[2] or {},
                "attempts": int(r[3] or 0),
                "idempotency_key": r[4],
            }
            for r in rows or ()
        ]

    async def _mark_dispatched(self, msg_id: int) -> None:
        sql = """
        UPDATE outbox
        SET status = 'dispatched',
            last_error = NULL,
            updated_at = NOW()
        WHERE id = %s;
        """
        async with self.pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(sql, (msg_id,))

    async def _mark_failed(
        self, msg_id: int, attempts: int, delay_seconds: int, error: str
    ) -> None:
        sql = """
        UPDATE outbox
        SET status = 'pending',
            attempts = %s,
            last_error = %s,
            next_attempt_at = NOW() + make_interval(secs => %s),
            updated_at = NOW()
        WHERE id = %s;
        """
        async with self.pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(
                        sql, (attempts, error[:1000], delay_seconds, msg_id)
                    )
