from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from account_activation.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)


class HttpSmtpEmailAdapter(EmailPort):
    """
    Sends mail by POSTing {to, subject, body} as JSON to the mail gateway.
    A shared client may be injected; only a self-created client is closed
    by aclose().
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    @property
    def send_url(self) -> str:
        return f"{self._base_url}{self._send_path}"

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        headers: Dict[str, str] = {}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        payload = {"to": to, "subject": subject, "body": body}

        try:
            resp = await self._client.post(self.send_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise RuntimeError(f"SMTP HTTP error: {e}") from e

        if not resp.is_success:
            raise RuntimeError(f"SMTP responded {resp.status_code}: {resp.text[:200]}")

        logger.debug(
            "email accepted by gateway",
            extra={"status_code": resp.status_code, "idempotency_key": idempotency_key},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
