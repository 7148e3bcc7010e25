from __future__ import annotations

from typing import Protocol


class EmailPort(Protocol):
    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        """
        Deliver a plain-text email. Raise RuntimeError if the gateway
        refuses it or cannot be reached.
        """
