import pytest
from fastapi.testclient import TestClient

from devauth.app import app, user_directory
from devauth.auth.users import InMemoryUserDirectory
from devauth.core.errors import MSG_ACCOUNT_EXISTS, MSG_INVALID_CREDENTIALS


@pytest.fixture()
def client(secret_key):
    directory = InMemoryUserDirectory()
    app.dependency_overrides[user_directory] = lambda: directory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _register(client, **overrides):
    form = {
        "full_name": "Ada Lovelace",
        "email": "Ada@X.com",
        "password": "secret1",
        "confirm_password": "secret1",
    }
    form.update(overrides)
    return client.post("/register", data=form)


def _login(client, email="Ada@X.com", password="secret1"):
    return client.post("/login", data={"email": email, "password": password}, follow_redirects=False)


def test_root_redirects_to_login(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"


def test_home_without_session_redirects_to_login(client):
    r = client.get("/home", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"
    assert "Welcome" not in r.text


def test_register_success_refreshes_to_login(client):
    r = _register(client)
    assert r.status_code == 200
    assert "Account created" in r.text
    assert 'content="0.9;url=/login"' in r.text


def test_register_duplicate_shows_message(client):
    _register(client)
    r = _register(client, email="ada@x.com")
    assert MSG_ACCOUNT_EXISTS in r.text


def test_register_login_home_logout(client):
    _register(client)

    r = _login(client)
    assert r.status_code == 303
    assert r.headers["location"] == "/home"

    r = client.get("/home")
    assert r.status_code == 200
    assert "Welcome, <strong>Ada</strong>!" in r.text

    # logged-in users skip the login form
    r = client.get("/login", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/home"

    r = client.post("/logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"

    r = client.get("/home", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/login"


def test_bad_login_renders_unified_message(client):
    _register(client)
    wrong = _login(client, password="secret2")
    unknown = _login(client, email="nobody@x.com")
    for r in (wrong, unknown):
        assert r.status_code == 200
        assert MSG_INVALID_CREDENTIALS in r.text
        assert "set-cookie" not in r.headers


def test_login_cookie_outlives_the_browser_session(client):
    from devauth.auth.session import DEFAULT_MAX_AGE_SECONDS, SESSION_SLOT

    _register(client)
    r = _login(client)
    cookie = r.headers["set-cookie"]
    assert cookie.startswith(f"{SESSION_SLOT}=")
    assert f"Max-Age={DEFAULT_MAX_AGE_SECONDS}" in cookie
