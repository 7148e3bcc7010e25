from __future__ import annotations

from typing import Optional, Protocol

from account_activation.domain.entities import User


class UserDirectoryPort(Protocol):
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user (with its password hash) by normalized email.
        Return None if not found.
        """
