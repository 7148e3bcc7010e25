from __future__ import annotations

import json
from typing import Literal

from account_activation.domain.ports.session_store import SessionStorePort

FLASH_NAMESPACE = "flash"

FlashType = Literal["error", "success", "info"]


class FlashMessenger:
    """One-shot messages shown on the next rendered page of the session."""

    def __init__(self, session: SessionStorePort) -> None:
        self._session = session

    async def add(self, type_: FlashType, text: str) -> None:
        await self._session.push(
            FLASH_NAMESPACE, json.dumps({"type": type_, "text": text})
        )

    async def add_error(self, text: str) -> None:
        await self.add("error", text)

    async def add_success(self, text: str) -> None:
        await self.add("success", text)

    async def add_info(self, text: str) -> None:
        await self.add("info", text)

    async def messages(self) -> list[dict[str, str]]:
        return [json.loads(raw) for raw in await self._session.drain(FLASH_NAMESPACE)]
