import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from account_activation.domain.entities import ConfirmToken, User
from account_activation.domain.errors import (
    InvalidParameters,
    NotificationError,
    TokenGenerationError,
)
from account_activation.domain.ports.notifier import ActivationNotifierPort
from account_activation.domain.ports.session_store import SessionStorePort
from account_activation.domain.ports.token_store import TokenStorePort
from account_activation.domain.ports.user_directory import UserDirectoryPort
from account_activation.domain.services import CheckCodeAlgorithm, verify_check_code

logger = logging.getLogger(__name__)

SESSION_NAMESPACE = "user"
SALT_KEY = "salt"


@dataclass(frozen=True)
class PendingActivation:
    user: User
    token: ConfirmToken
    email: str
    check: str

    def resend_query(self) -> str:
        return urlencode({"email": self.email, "check": self.check})


async def _load_pending(
    users: UserDirectoryPort,
    tokens: TokenStorePort,
    session: SessionStorePort,
    email: str,
    check: str,
    algorithm: CheckCodeAlgorithm,
) -> tuple[User, ConfirmToken]:
    salt = (await session.get(SESSION_NAMESPACE)).get(SALT_KEY, "")
    if not email or not check or not salt:
        raise InvalidParameters()
    if "\x00" in email or "\x00" in check:
        raise InvalidParameters()

    try:
        user = await users.find_by_email(email)
    except Exception as e:
        logger.exception("user lookup failed")
        raise InvalidParameters() from e
    if user is None or not user.is_pending:
        raise InvalidParameters()

    if not verify_check_code(check, user.email, user.password_hash, salt, algorithm):
        raise InvalidParameters()

    try:
        existing = await tokens.find_confirm_tokens(user)
    except Exception as e:
        logger.exception("confirm token lookup failed", extra={"user_id": user.id})
        raise InvalidParameters() from e
    if existing:
        return user, existing[0]

    try:
        result = await tokens.generate_confirm_token(user)
    except Exception as e:
        logger.exception("confirm token generation raised", extra={"user_id": user.id})
        raise TokenGenerationError() from e
    token = result.param("token")
    if not result.valid or token is None:
        logger.warning(
            "confirm token generation failed",
            extra={"user_id": user.id, "errors": result.errors},
        )
        raise TokenGenerationError()
    logger.info("confirm token generated", extra={"user_id": user.id})
    return user, token


async def verify_pending_activation(
    users: UserDirectoryPort,
    tokens: TokenStorePort,
    session: SessionStorePort,
    email: str,
    check: str,
    algorithm: CheckCodeAlgorithm = "sha1",
) -> PendingActivation:
    user, token = await _load_pending(users, tokens, session, email, check, algorithm)
    return PendingActivation(user=user, token=token, email=email, check=check)


async def resend_activation(
    users: UserDirectoryPort,
    tokens: TokenStorePort,
    notifier: ActivationNotifierPort,
    session: SessionStorePort,
    email: str,
    check: str,
    algorithm: CheckCodeAlgorithm = "sha1",
) -> str:
    user, token = await _load_pending(users, tokens, session, email, check, algorithm)

    try:
        await notifier.send_activation_email(user, token)
    except Exception as e:
        # salt is kept so the same link can be retried
        logger.exception("activation email dispatch failed", extra={"user_id": user.id})
        raise NotificationError() from e

    await session.clear(SESSION_NAMESPACE, SALT_KEY)
    logger.info("activation email resent", extra={"user_id": user.id})
    return email
