import base64

import pytest
from fastapi.testclient import TestClient

from account_activation.main import create_app
from account_activation.presentation.dependencies import (
    get_check_code_algorithm,
    get_notifier,
    get_session,
    get_token_store,
    get_user_directory,
    get_verify_password,
)


@pytest.fixture()
def app_and_deps(users, tokens, notifier, session):
    app = create_app()

    app.dependency_overrides[get_user_directory] = lambda: users
    app.dependency_overrides[get_token_store] = lambda: tokens
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_check_code_algorithm] = lambda: "sha1"
    app.dependency_overrides[get_verify_password] = lambda: (
        lambda plain, hashed: plain == "s3cret" and hashed == "P"
    )

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    return TestClient(app_and_deps, raise_server_exceptions=False)


def basic_auth(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}
