from typing import Callable

from fastapi import Request

from account_activation.domain.ports.notifier import ActivationNotifierPort
from account_activation.domain.ports.token_store import TokenStorePort
from account_activation.domain.ports.user_directory import UserDirectoryPort
from account_activation.domain.services import CheckCodeAlgorithm
from account_activation.infrastructure.db.outbox import PgOutbox
from account_activation.infrastructure.db.pool import get_pool
from account_activation.infrastructure.db.token_store import PgTokenStore
from account_activation.infrastructure.db.user_directory import PgUserDirectory
from account_activation.infrastructure.notifications.outbox_notifier import (
    OutboxActivationNotifier,
)
from account_activation.infrastructure.redis_cache.pool import get_redis
from account_activation.infrastructure.redis_cache.session_store import (
    RedisSessionStore,
    new_session_id,
)
from account_activation.infrastructure.security.password import verify_password
from account_activation.settings import get_settings


def get_user_directory() -> UserDirectoryPort:
    return PgUserDirectory(get_pool())


def get_token_store() -> TokenStorePort:
    return PgTokenStore(
        get_pool(), ttl_seconds=get_settings().confirm_token_ttl_seconds
    )


def get_notifier() -> ActivationNotifierPort:
    return OutboxActivationNotifier(
        PgOutbox(get_pool()),
        link_base_url=get_settings().activation_link_base_url,
    )


def get_session(request: Request) -> RedisSessionStore:
    # The session id travels in a cookie; a missing cookie starts a new session.
    settings = get_settings()
    session_id = request.cookies.get(settings.session_cookie_name)
    return RedisSessionStore(
        get_redis(),
        session_id or new_session_id(),
        ttl_seconds=settings.session_ttl_seconds,
        is_new=not session_id,
    )


def get_check_code_algorithm() -> CheckCodeAlgorithm:
    return get_settings().check_code_algorithm


def get_verify_password() -> Callable[[str, str], bool]:
    return verify_password
