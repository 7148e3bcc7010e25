import pytest

from account_activation.application.activation_flow import SALT_KEY, SESSION_NAMESPACE
from account_activation.domain.entities import User
from tests.fakes import (
    FakeNotifier,
    FakeSessionStore,
    FakeTokenStore,
    FakeUserDirectory,
)
from tests.helpers import EMAIL, PASSWORD_HASH, SALT, sha1_check


@pytest.fixture()
def pending_user() -> User:
    return User(id="u1", email=EMAIL, status="pending", password_hash=PASSWORD_HASH)


@pytest.fixture()
def users(pending_user):
    return FakeUserDirectory(pending_user)


@pytest.fixture()
def tokens():
    return FakeTokenStore()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def session():
    store = FakeSessionStore()
    store.data[SESSION_NAMESPACE] = {SALT_KEY: SALT}
    return store


@pytest.fixture()
def check() -> str:
    return sha1_check()
