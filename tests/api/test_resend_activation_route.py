from account_activation.presentation import messages
from tests.fakes import FakeFailingNotifier
from account_activation.presentation.dependencies import get_notifier

URL = "/v1/users/resend-activation"


def test_resend_activation_happy_path(client, notifier, session, check):
    response = client.get(
        URL, params={"email": "a@b.com", "check": check}, follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"].endswith("/v1/users/login")
    assert len(notifier.sent) == 1
    assert "salt" not in session.data["user"]

    page = client.get("/v1/users/login").json()
    assert page["messages"] == [
        {
            "type": "success",
            "text": messages.ACTIVATION_RESENT.format(email="a@b.com"),
        }
    ]


def test_resend_twice_fails_second_time(client, notifier, check):
    params = {"email": "a@b.com", "check": check}
    client.get(URL, params=params, follow_redirects=False)
    client.get("/v1/users/login")

    response = client.get(URL, params=params, follow_redirects=False)

    assert response.status_code == 303
    assert len(notifier.sent) == 1
    page = client.get("/v1/users/login").json()
    assert page["messages"] == [{"type": "error", "text": messages.INVALID_PARAMETERS}]


def test_resend_follows_redirect_to_login_page(client, check):
    response = client.get(URL, params={"email": "a@b.com", "check": check})

    assert response.status_code == 200
    assert response.json()["page"] == "login"
    assert response.json()["messages"][0]["type"] == "success"


def test_resend_notifier_failure_keeps_salt(client, app_and_deps, session, check):
    app_and_deps.dependency_overrides[get_notifier] = lambda: FakeFailingNotifier()

    response = client.get(
        URL, params={"email": "a@b.com", "check": check}, follow_redirects=False
    )

    assert response.status_code == 303
    assert session.data["user"]["salt"] == "S"
    page = client.get("/v1/users/login").json()
    assert page["messages"] == [{"type": "error", "text": messages.ACTIVATION_NOT_SENT}]
