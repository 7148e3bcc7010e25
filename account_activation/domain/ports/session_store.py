from __future__ import annotations

from typing import Protocol


class SessionStorePort(Protocol):
    """
    Key-value storage scoped to one browser session.

    Values live under a namespace ("user", "flash", ...). Hash-like
    namespaces are read with get/set/clear, queue-like ones with push/drain.
    """

    async def get(self, namespace: str) -> dict[str, str]:
        """All keys of the namespace; empty dict if nothing is stored."""

    async def set(self, namespace: str, key: str, value: str) -> None:
        """Store a value under namespace/key."""

    async def clear(self, namespace: str, key: str) -> None:
        """Delete namespace/key. Missing keys are ignored."""

    async def push(self, namespace: str, value: str) -> None:
        """Append a value to the namespace queue."""

    async def drain(self, namespace: str) -> list[str]:
        """Return and remove every queued value, oldest first."""
