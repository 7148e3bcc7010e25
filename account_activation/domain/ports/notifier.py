from __future__ import annotations

from typing import Protocol

from account_activation.domain.entities import ConfirmToken, User


class ActivationNotifierPort(Protocol):
    async def send_activation_email(self, user: User, token: ConfirmToken) -> None:
        """Hand an activation email carrying the token over for delivery."""
