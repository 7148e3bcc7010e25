from __future__ import annotations

from typing import Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from account_activation.domain.entities import User
from account_activation.domain.ports.user_directory import UserDirectoryPort


class PgUserDirectory(UserDirectoryPort):
    """
    Read-only view of the `users` table.

    Users are created and activated elsewhere; this adapter only looks
    them up for the activation and login flows.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def find_by_email(self, email: str) -> Optional[User]:
        sql = """
        SELECT id, email, status, password_hash
        FROM users
        WHERE email = LOWER(TRIM(%s))
        """
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(sql, (email,))
                    row = await cur.fetchone()
        except psycopg.DataError:
            # values postgres cannot take as text (NUL bytes, bad encoding) match nobody
            return None

        if not row:
            return None

        id_, db_email, db_status, db_password_hash = row
        return User(
            id=str(id_),
            email=str(db_email),
            status=str(db_status),
            password_hash=db_password_hash or "",
        )
