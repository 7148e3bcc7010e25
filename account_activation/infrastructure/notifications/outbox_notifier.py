from __future__ import annotations

import logging
from urllib.parse import urlencode

from account_activation.domain.entities import ConfirmToken, User
from account_activation.domain.ports.notifier import ActivationNotifierPort
from account_activation.domain.ports.outbox import OutboxPort
from account_activation.infrastructure.outbox.dispatcher import ACTIVATION_EMAIL_TOPIC

logger = logging.getLogger(__name__)

SUBJECT = "Activate your account"
BODY_TEMPLATE = (
    "Welcome!\n\n"
    "Please confirm your email address by opening the link below:\n\n"
    "{link}\n\n"
    "If you did not create an account, you can ignore this message.\n"
)


def build_activation_link(base_url: str, user: User, token: ConfirmToken) -> str:
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}{urlencode({'email': user.email, 'token': token.token})}"


class OutboxActivationNotifier(ActivationNotifierPort):
    """
    Queues activation emails in the outbox; the outbox worker delivers them
    through the mail gateway with retries.
    """

    def __init__(self, outbox: OutboxPort, *, link_base_url: str) -> None:
        self._outbox = outbox
        self._link_base_url = link_base_url

    async def send_activation_email(self, user: User, token: ConfirmToken) -> None:
        link = build_activation_link(self._link_base_url, user, token)
        msg_id = await self._outbox.enqueue(
            topic=ACTIVATION_EMAIL_TOPIC,
            payload={
                "to": user.email,
                "subject": SUBJECT,
                "body": BODY_TEMPLATE.format(link=link),
            },
        )
        logger.info(
            "activation email queued", extra={"user_id": user.id, "outbox_id": msg_id}
        )
