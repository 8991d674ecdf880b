"""Registration and login."""
import pytest
from fastapi import status
from fastapi.testclient import TestClient

from social_api.core.errors import ConflictError, InvalidCredentialsError
from social_api.core.security import build_password_context
from social_api.main import create_app
from social_api.schemas.user import UserCreate
from social_api.services.auth_service import authenticate, register
from tests.conftest import API, FailingMailer, register_user


def test_register_returns_user_without_password(client) -> None:
    r = client.post(f"{API}/auth/register", json={"username": "alice", "email": "alice@example.com", "password": "pw123456"})
    assert r.status_code == status.HTTP_201_CREATED
    body = r.json()
    assert body["message"] == "User registered successfully"
    user = body["user"]
    assert user["username"] == "alice"
    assert user["followers"] == [] and user["followings"] == []
    assert user["isAdmin"] is False
    assert "password" not in user and "passwordHash" not in user and "password_hash" not in user


def test_register_duplicate_email_is_rejected(client) -> None:
    register_user(client, "alice", "shared@example.com")
    r = client.post(f"{API}/auth/register", json={"username": "bob", "email": "shared@example.com", "password": "pw"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"error": "Email already registered"}


def test_register_duplicate_username_is_rejected(client) -> None:
    register_user(client, "alice")
    r = client.post(f"{API}/auth/register", json={"username": "alice", "email": "other@example.com", "password": "pw"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in r.json()


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "al", "email": "al@example.com", "password": "pw"},
        {"username": "a" * 21, "email": "long@example.com", "password": "pw"},
        {"username": "carol", "email": "not-an-email", "password": "pw"},
        {"username": "carol", "email": "carol@example.com"},
    ],
)
def test_register_schema_violations_are_400(client, payload) -> None:
    r = client.post(f"{API}/auth/register", json=payload)
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in r.json()


def test_login_success(client) -> None:
    user = register_user(client, "alice", password="right-pass")
    r = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "right-pass"})
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["message"] == "Logged in successfully"
    assert body["user"]["id"] == user["id"]
    assert "password" not in body["user"]


def test_login_failures_are_indistinguishable(client) -> None:
    register_user(client, "alice", password="right-pass")
    wrong_password = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "nope"})
    unknown_email = client.post(f"{API}/auth/login", json={"email": "ghost@example.com", "password": "right-pass"})
    assert wrong_password.status_code == unknown_email.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}


def test_register_and_login_send_notifications(app, mailer) -> None:
    with TestClient(app) as client:
        register_user(client, "alice", password="right-pass")
        client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "right-pass"})
    # Leaving the client shuts the dispatcher down after draining its queue.
    assert mailer.subjects == ["Registration Successful", "Login Notification"]
    assert all(m.to == "alice@example.com" for m in mailer.sent)
    assert "alice" in mailer.sent[0].html


def test_mail_failure_does_not_affect_response(test_settings) -> None:
    app = create_app(test_settings, mailer=FailingMailer())
    with TestClient(app) as client:
        r = client.post(f"{API}/auth/register", json={"username": "alice", "email": "alice@example.com", "password": "pw"})
        assert r.status_code == status.HTTP_201_CREATED


@pytest.mark.asyncio
async def test_register_conflict_in_service(db_session) -> None:
    await register(db_session, UserCreate(username="alice", email="same@example.com", password="pw"))
    await db_session.commit()
    with pytest.raises(ConflictError):
        await register(db_session, UserCreate(username="bob", email="same@example.com", password="pw"))


@pytest.mark.asyncio
async def test_authenticate_raises_same_error(db_session) -> None:
    await register(db_session, UserCreate(username="alice", email="alice@example.com", password="right"))
    await db_session.commit()

    assert (await authenticate(db_session, "alice@example.com", "right")).username == "alice"
    with pytest.raises(InvalidCredentialsError) as wrong:
        await authenticate(db_session, "alice@example.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as missing:
        await authenticate(db_session, "nobody@example.com", "right")
    assert wrong.value.message == missing.value.message


def test_app_hashes_with_configured_rounds(test_settings, mailer) -> None:
    app = create_app(test_settings.model_copy(update={"BCRYPT_ROUNDS": 5}), mailer=mailer)
    with TestClient(app) as client:
        assert app.state.pwd_context.hash("pw").startswith("$2b$05$")
        register_user(client, "alice", password="right-pass")
        r = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "right-pass"})
        assert r.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_register_uses_given_password_context(db_session) -> None:
    context = build_password_context(5)
    user = await register(db_session, UserCreate(username="alice", email="alice@example.com", password="pw"), context)
    assert user.password_hash.startswith("$2b$05$")
    assert (await authenticate(db_session, "alice@example.com", "pw", context)).id == user.id
