from __future__ import annotations

from typing import Protocol

from account_activation.domain.entities import ConfirmToken, TokenResult, User


class TokenStorePort(Protocol):
    async def find_confirm_tokens(self, user: User) -> list[ConfirmToken]:
        """Live (non-expired) confirm tokens of the user, oldest first."""

    async def generate_confirm_token(self, user: User) -> TokenResult:
        """
        Create and persist a new confirm token.
        On success the result is valid and param("token") is the ConfirmToken;
        storage failures are reported as an invalid result, not raised.
        """
