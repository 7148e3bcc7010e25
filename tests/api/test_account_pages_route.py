import pytest

from account_activation.presentation import messages


@pytest.mark.parametrize("page", ["change-email", "remove-account"])
def test_account_page_requires_sign_in(client, page):
    response = client.get(f"/v1/users/{page}", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"].endswith("/v1/users/login")
    login = client.get("/v1/users/login").json()
    assert login["messages"] == [{"type": "error", "text": messages.SIGN_IN_REQUIRED}]


@pytest.mark.parametrize("page", ["change-email", "remove-account"])
def test_account_page_for_signed_in_user(client, session, page):
    session.data["auth"] = {"user_id": "u9"}

    response = client.get(f"/v1/users/{page}")

    assert response.status_code == 200
    assert response.json() == {"page": page, "user_id": "u9"}
